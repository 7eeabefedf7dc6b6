"""In-memory key-value store.

Simple dict-based storage for session-only history.
Data is lost when the application exits.
"""

from .base import KeyValueStore


class InMemoryStore(KeyValueStore):
    """In-memory store (session-only).

    Suitable for single-session use or testing.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    @property
    def backend_type(self) -> str:
        return "memory"
