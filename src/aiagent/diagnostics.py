"""Diagnostic logging shared by the CLI and TUI.

Components report through a debug callback with the signature
``callback(level, component, message)``. Hosts decide where the lines go:
the CLI prints them to a Rich console, the TUI writes them to its log panel.
"""

from collections.abc import Callable
from datetime import datetime

from rich.console import Console
from rich.markup import escape

DebugCallback = Callable[[str, str, str], None]


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500

LEVEL_COLORS = {
    LogLevel.DEBUG: "dim white",
    LogLevel.INFO: "cyan",
    LogLevel.WARNING: "yellow",
    LogLevel.ERROR: "red",
}

COMPONENT_COLORS = {
    "TUI": "cyan",
    "CLI": "cyan",
    "Chat": "green",
    "LLM": "magenta",
    "Store": "bright_green",
}


def format_log_line(level: int, component: str, message: str) -> str:
    """Render one log entry as Rich markup."""
    timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
    if len(message) > LOG_MAX_MESSAGE_LENGTH:
        message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."
    level_color = LEVEL_COLORS.get(level, "white")
    comp_color = COMPONENT_COLORS.get(component, "white")
    return (
        f"[dim]{timestamp}[/] "
        f"[{level_color}]{LogLevel.name(level):<5}[/] "
        f"[{comp_color}]\\[{escape(component)}][/] {escape(message)}"
    )


class ConsoleLogSink:
    """Debug callback that prints entries at or above a threshold to a console."""

    def __init__(self, console: Console, level: int = LogLevel.WARNING):
        self._console = console
        self.level = level

    def __call__(self, level: str, component: str, message: str) -> None:
        numeric = LogLevel.from_string(level)
        if numeric < self.level:
            return
        self._console.print(format_log_line(numeric, component, message))
