"""File-backed key-value store.

Keeps one text file per key inside a directory, so history survives
restarts.
"""

import os
import re
import tempfile
from pathlib import Path

from .base import KeyValueStore

DEFAULT_STORE_DIR = Path.home() / ".aiagent"

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class FileStore(KeyValueStore):
    """Directory of ``<key>.json`` files.

    Writes go to a temporary file in the same directory and are moved into
    place with ``os.replace``, so readers never see a partial value.
    """

    def __init__(self, path: str | Path = DEFAULT_STORE_DIR, suffix: str = ".json"):
        self._root = Path(path).expanduser()
        self._suffix = suffix

    def _path_for(self, key: str) -> Path:
        if not key:
            raise ValueError("Store key must be non-empty")
        return self._root / f"{_UNSAFE_KEY_CHARS.sub('_', key)}{self._suffix}"

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            with path.open(encoding="utf-8", newline="") as fh:
                return fh.read()
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        self._root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._root, prefix=".tmp-", suffix=self._suffix)
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    @property
    def backend_type(self) -> str:
        return "file"

    @property
    def path(self) -> Path:
        return self._root
