"""Persistence store module for aiagent.

Provides the synchronous key-value storage the conversation history lives in.
"""

from .base import KeyValueStore
from .factory import create_store
from .file import FileStore
from .in_memory import InMemoryStore

__all__ = [
    "FileStore",
    "InMemoryStore",
    "KeyValueStore",
    "create_store",
]
