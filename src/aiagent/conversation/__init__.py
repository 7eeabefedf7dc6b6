"""Conversation module for aiagent.

Provides the controller that runs chat turns against a completion service
and keeps the history in a key-value store.
"""

from .codec import HistoryParseError, parse_history, serialize_history
from .controller import (
    HISTORY_KEY,
    NO_RESPONSE_MESSAGE,
    SERVICE_FAILURE_MESSAGE,
    ConversationController,
)
from .payload import build_request_payload

__all__ = [
    "ConversationController",
    "HISTORY_KEY",
    "HistoryParseError",
    "NO_RESPONSE_MESSAGE",
    "SERVICE_FAILURE_MESSAGE",
    "build_request_payload",
    "parse_history",
    "serialize_history",
]
