"""Widgets used by the chat TUI.

- ``ChatInputBar``: text entry with Send/Clear, gated while a reply is pending
- ``ChatHistoryWidget``: the scrolling conversation
- ``DebugPanel``: diagnostics sink with a level threshold
"""

from textual import events
from textual.binding import Binding
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Input, Markdown, RichLog, Static

from ..diagnostics import LogLevel, format_log_line
from ..llm import ChatMessage, Role
from .config import EMPTY_PLACEHOLDER, INPUT_HISTORY_MAX_SIZE, INPUT_PLACEHOLDER


class MessageBubble(Vertical):
    """One rendered chat message. Clicking it copies the raw text."""

    def __init__(self, message: ChatMessage, **kwargs) -> None:
        kind = "user-message" if message.role == Role.USER else "assistant-message"
        super().__init__(classes=f"chat-message {kind}", **kwargs)
        self.message = message

    def compose(self):
        if self.message.role == Role.USER:
            yield Static("You", classes="message-header")
            # Typed text is shown literally, never as markup
            yield Static(self.message.content, classes="message-content", markup=False)
        else:
            yield Static("Assistant", classes="message-header")
            yield Markdown(self.message.content, classes="message-content")

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self.message.content)
        self.app.notify("Copied to clipboard", timeout=2)


class HistoryInput(Input):
    """Single-line input that recalls earlier entries with Up/Down.

    Pasted text is flattened onto one line.
    """

    BINDINGS = [
        Binding("up", "recall(-1)", "Previous", show=False),
        Binding("down", "recall(1)", "Next", show=False),
    ]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._entries: list[str] = []
        self._cursor: int | None = None
        self._draft = ""

    def remember(self, text: str) -> None:
        """Record a submitted entry and reset recall."""
        if text and text not in self._entries[-1:]:
            self._entries.append(text)
            self._entries = self._entries[-INPUT_HISTORY_MAX_SIZE:]
        self._cursor = None
        self._draft = ""

    def action_recall(self, step: int) -> None:
        if not self._entries:
            return
        if self._cursor is None:
            if step > 0:
                return
            self._draft = self.value
            self._cursor = len(self._entries) - 1
        else:
            self._cursor += step
        if self._cursor >= len(self._entries):
            self._cursor = None
            self.value = self._draft
        else:
            self._cursor = max(self._cursor, 0)
            self.value = self._entries[self._cursor]
        self.cursor_position = len(self.value)

    def _on_paste(self, event: events.Paste) -> None:
        if event.text:
            self.insert_text_at_cursor(" ".join(event.text.split()))
        event.prevent_default()
        event.stop()


class ChatInputBar(Horizontal):
    """Text entry plus Send and Clear buttons.

    Enter or Send posts ``Submitted``. While busy, Send is disabled and
    submissions are dropped so only one request is ever outstanding.
    """

    class Submitted(Message):
        """The user sent ``value``."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class ClearRequested(Message):
        """The user pressed Clear."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._busy = False

    def compose(self):
        yield HistoryInput(placeholder=INPUT_PLACEHOLDER, id="chat-input")
        yield Button("Send", id="send-btn", variant="success").with_tooltip("Send (Enter)")
        yield Button("Clear", id="clear-btn", variant="error").with_tooltip("Clear conversation (Ctrl+K)")

    @property
    def busy(self) -> bool:
        return self._busy

    def set_busy(self, busy: bool) -> None:
        self._busy = busy
        self.query_one("#send-btn", Button).disabled = busy

    def focus_input(self) -> None:
        self.query_one("#chat-input", HistoryInput).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "send-btn":
            self._submit()
        elif event.button.id == "clear-btn":
            self.post_message(self.ClearRequested())

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self._submit()

    def _submit(self) -> None:
        if self._busy:
            return
        entry = self.query_one("#chat-input", HistoryInput)
        text = entry.value
        if not text.strip():
            return
        entry.remember(text)
        entry.value = ""
        self.post_message(self.Submitted(text))


class DebugPanel(RichLog):
    """Diagnostics log.

    Callable as a debug callback ``(level, component, message)``; entries
    below ``log_level`` are dropped. Hidden until ``--log-level`` or Ctrl+D.
    """

    BORDER_TITLE = "Log"

    def __init__(self, *args, log_level: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=True, highlight=False, wrap=True, **kwargs)
        self._log_level = log_level
        self.display = False

    @property
    def log_level(self) -> int:
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self._refresh_subtitle()

    def _refresh_subtitle(self) -> None:
        self.border_subtitle = (
            f"level {LogLevel.name(self._log_level).lower()}" if self.display else ""
        )

    def log_entry(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Write one line if ``level`` passes the threshold."""
        if level >= self._log_level:
            self.write(format_log_line(level, component, message))

    def __call__(self, level: str, component: str, message: str) -> None:
        self.log_entry(component, message, LogLevel.from_string(level))

    def show(self) -> None:
        self.display = True
        self._refresh_subtitle()

    def hide(self) -> None:
        self.display = False
        self._refresh_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return the new state."""
        if self.display:
            self.hide()
        else:
            self.show()
        return self.display


class ChatHistoryWidget(VerticalScroll):
    """Scrolling view of the conversation, oldest message first."""

    BORDER_TITLE = "Conversation"
    ALLOW_MAXIMIZE = True

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._messages: list[ChatMessage] = []
        self._placeholder = Static(EMPTY_PLACEHOLDER, id="empty-placeholder")

    def compose(self):
        yield self._placeholder

    @property
    def message_count(self) -> int:
        return len(self._messages)

    def add_message(self, message: ChatMessage) -> None:
        self._messages.append(message)
        self._placeholder.display = False
        self.mount(MessageBubble(message))
        self.border_subtitle = f"{len(self._messages)} messages"
        self.scroll_end(animate=False)

    def load(self, messages: list[ChatMessage]) -> None:
        """Show ``messages`` in place of whatever is displayed."""
        self.clear_history()
        for message in messages:
            self.add_message(message)

    def get_last_response(self) -> str | None:
        for message in reversed(self._messages):
            if message.role == Role.ASSISTANT:
                return message.content
        return None

    def clear_history(self) -> None:
        self._messages.clear()
        self.query(MessageBubble).remove()
        self._placeholder.display = True
        self.border_subtitle = ""
