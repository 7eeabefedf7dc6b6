"""Modal screens for the TUI."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid
from textual.screen import ModalScreen
from textual.widgets import Button, Label


class ConfirmationScreen(ModalScreen[bool]):
    """Yes/No question over the chat.

    The screen result is True only when the user picks Yes (button or
    ``y``); No, ``n`` and Escape all return False.
    """

    DEFAULT_CSS = """
    ConfirmationScreen {
        align: center middle;
        background: $background 60%;
    }

    ConfirmationScreen > Grid {
        grid-size: 2;
        grid-rows: auto 3;
        grid-gutter: 1 2;
        width: 46;
        height: auto;
        padding: 1 3;
        border: thick $error 70%;
        background: $panel;
    }

    ConfirmationScreen #question {
        column-span: 2;
        width: 1fr;
        content-align: center middle;
    }

    ConfirmationScreen Button {
        width: 1fr;
    }
    """

    BINDINGS = [
        Binding("y", "answer(True)", "Yes", show=False),
        Binding("n", "answer(False)", "No", show=False),
        Binding("escape", "answer(False)", "Cancel", show=False),
    ]

    def __init__(self, question: str) -> None:
        super().__init__()
        self.question = question

    def compose(self) -> ComposeResult:
        with Grid():
            yield Label(self.question, id="question")
            yield Button("Yes", variant="error", id="btn-yes")
            yield Button("No", variant="primary", id="btn-no")

    def on_mount(self) -> None:
        self.query_one("#btn-no", Button).focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "btn-yes")

    def action_answer(self, confirmed: bool) -> None:
        self.dismiss(confirmed)
