"""Terminal UI module for aiagent.

Provides a Textual-based TUI around one ConversationController.

Module structure (each module hides a design decision):
- config.py: Display strings and limits
- widgets.py: Custom widgets (input bar, chat history, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette
- screens.py: Modal dialogs (confirmation screens)
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatTextualApp, run_textual_tui
from .screens import ConfirmationScreen
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ChatTextualApp",
    "ConfirmationScreen",
    "DebugPanel",
    "run_textual_tui",
]
