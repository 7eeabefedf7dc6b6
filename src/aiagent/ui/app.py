"""Main Textual TUI application.

Orchestrates the UI components and hands each submitted message to the
conversation controller.
"""

import asyncio

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Static

from ..conversation import ConversationController
from ..diagnostics import LogLevel
from ..llm import ChatMessage, Role
from .config import APP_TITLE, THINKING_TEXT
from .screens import ConfirmationScreen
from .styles import APP_CSS
from .themes import SLATE_CYAN
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel


class ChatTextualApp(App):
    """Textual TUI for a single chat session."""

    CSS = APP_CSS
    TITLE = APP_TITLE

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("ctrl+k", "clear_chat", "Clear Chat", priority=True),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        controller: ConversationController,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._log_level = log_level

    @property
    def controller(self) -> ConversationController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ChatHistoryWidget(id="chat-history")
        yield Static(THINKING_TEXT, id="thinking")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(SLATE_CYAN)
        self.theme = "slate-cyan"
        self.sub_title = self._controller.model

        log_panel = self.query_one("#debug-panel", DebugPanel)
        if self._log_level is not None:
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.log_entry("TUI", f"Log panel enabled with level: {self._log_level.upper()}", LogLevel.INFO)
        self._controller.set_debug_callback(log_panel)

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.load(self._controller.history)

        self._set_busy(self._controller.busy)
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def _set_busy(self, busy: bool) -> None:
        self.query_one("#chat-input-bar", ChatInputBar).set_busy(busy)
        self.query_one("#thinking", Static).set_class(busy, "-visible")

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        if self._controller.busy:
            return

        chat = self.query_one("#chat-history", ChatHistoryWidget)
        chat.add_message(ChatMessage(role=Role.USER, content=event.value))

        self._set_busy(True)
        self._run_turn(event.value)

    @work(group="chat-turn")
    async def _run_turn(self, text: str) -> None:
        """Run one controller turn as a background async worker."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        log_panel = self.query_one("#debug-panel", DebugPanel)

        try:
            reply = await self._controller.submit(text)
        except Exception as e:
            log_panel.log_entry("TUI", f"Exception: {e}", LogLevel.ERROR)
            self.notify(f"Error: {str(e)[:50]}", severity="error", timeout=5)
            return
        finally:
            self._set_busy(False)

        if reply is not None:
            chat.add_message(reply)

    def on_chat_input_bar_clear_requested(self, event: ChatInputBar.ClearRequested) -> None:
        self.action_clear_chat()

    def action_clear_chat(self) -> None:
        """Ask for confirmation, then clear the conversation."""
        def _on_confirm(confirmed: bool | None) -> None:
            if not confirmed:
                return
            self._controller.clear()
            self.query_one("#chat-history", ChatHistoryWidget).clear_history()
            self.notify("Chat cleared", timeout=2)

        self.push_screen(ConfirmationScreen("Clear the whole conversation?"), _on_confirm)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy last assistant response to clipboard."""
        chat = self.query_one("#chat-history", ChatHistoryWidget)
        response = chat.get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")


async def run_textual_tui(
    controller: ConversationController,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        controller: Initialized conversation controller
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = ChatTextualApp(controller=controller, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
