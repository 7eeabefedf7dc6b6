"""Serialization of conversation history.

History is stored as a JSON array of ``{"role": ..., "content": ...}``
objects in message order.
"""

from pydantic import TypeAdapter, ValidationError

from ..llm.models import ChatMessage

_HISTORY_ADAPTER = TypeAdapter(list[ChatMessage])


class HistoryParseError(ValueError):
    """Stored history text is not a valid message sequence."""


def serialize_history(history: list[ChatMessage]) -> str:
    """Encode history as JSON text."""
    return _HISTORY_ADAPTER.dump_json(history).decode("utf-8")


def parse_history(raw: str) -> list[ChatMessage]:
    """Decode JSON text into a message list.

    Raises:
        HistoryParseError: If the text is not JSON or not a list of messages
    """
    try:
        return _HISTORY_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise HistoryParseError(
            f"Stored history is not a message sequence ({e.error_count()} errors)"
        ) from e
