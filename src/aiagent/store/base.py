"""Abstract base class for key-value persistence backends.

This module defines the interface the conversation controller persists
through. The abstraction hides:
- Storage location (process memory, files on disk)
- Write atomicity mechanism

Access is synchronous. Every ``set`` replaces the whole value.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """Abstract synchronous key-value store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored text for ``key``, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is a no-op."""

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
