"""TUI stylesheet.

The conversation takes the remaining height; the thinking line, the
(usually hidden) log panel and the input bar stack below it.
"""

APP_CSS = """
#chat-history {
    height: 1fr;
    margin: 0 1;
    padding: 1 2;
    border: heavy $primary 40%;
    border-title-align: center;
    border-title-color: $accent;
    border-subtitle-align: right;
    border-subtitle-color: $foreground 50%;
    background: $surface;

    &:focus-within {
        border: heavy $primary;
    }
}

#empty-placeholder {
    width: 1fr;
    height: 1fr;
    content-align: center middle;
    color: $foreground 60%;
    text-style: italic;
}

/* Shown only while a request is outstanding */
#thinking {
    display: none;
    height: 1;
    margin: 0 2;
    color: $accent;
    text-style: italic;

    &.-visible {
        display: block;
    }
}

#debug-panel {
    height: 10;
    margin: 0 1;
    padding: 0 1;
    border: heavy $warning 40%;
    border-title-color: $warning;
    border-subtitle-align: right;
    border-subtitle-color: $foreground 50%;
    background: $panel 40%;
}

ChatInputBar {
    height: 3;
    margin: 0 1 1 1;
}

#chat-input {
    width: 1fr;
    border: round $border;
    background: $surface;

    &:focus {
        border: round $accent;
    }
}

#send-btn, #clear-btn {
    min-width: 8;
    margin-left: 1;
}

#send-btn {
    width: 10;
}

#clear-btn {
    width: 9;
}

.chat-message {
    height: auto;
    padding: 0 1;
    margin-bottom: 1;
}

.user-message {
    margin-left: 8;
    border-right: outer $secondary;
    background: $secondary 20%;
}

.assistant-message {
    margin-right: 8;
    border-left: outer $accent 60%;
    background: $panel 50%;
}

.message-header {
    height: 1;
    text-style: bold;
}

.user-message > .message-header {
    color: $secondary;
    text-align: right;
}

.assistant-message > .message-header {
    color: $accent;
}

.message-content {
    height: auto;
    margin: 0;
}
"""
