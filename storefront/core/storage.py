"""
Key-value storage

String-keyed, string-valued persistence in the shape of the browser's
localStorage. Writes are whole-value overwrites; there is no coordination
between two processes writing the same file.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from .errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Minimal storage contract used by the cart and auth session"""

    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """In-memory storage"""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


class FileStorage:
    """
    Storage backed by a single JSON object on disk.

    Every write replaces the whole file through a temporary file so a reader
    never sees a half-written document.
    """

    FILENAME = "storage.json"

    def __init__(self, directory: str):
        self.path = Path(directory) / self.FILENAME

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"Unexpected storage layout in {self.path}")
        return data

    def _dump(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StorageError(f"Cannot write {self.path}: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._dump(data)


def create_storage(storage_path: Optional[str] = None) -> KeyValueStorage:
    """File storage when a path is configured, memory otherwise"""
    if storage_path:
        logger.debug(f"Using file storage at {storage_path}")
        return FileStorage(storage_path)
    return MemoryStorage()
