"""
aiagent: a small chat client for hosted language models.

A ConversationController keeps the message history in a key-value store,
prepends a persona prompt at call time and sends one completion request
per turn. The CLI and the Textual TUI are thin hosts around it.
"""

__version__ = "0.1.0"

from .conversation import ConversationController, build_request_payload
from .llm import (
    ChatMessage,
    CompletionError,
    CompletionResponse,
    CompletionService,
    Role,
    create_completion_service,
)
from .store import KeyValueStore, create_store

__all__ = [
    "ChatMessage",
    "CompletionError",
    "CompletionResponse",
    "CompletionService",
    "ConversationController",
    "KeyValueStore",
    "Role",
    "build_request_payload",
    "create_completion_service",
    "create_store",
]
