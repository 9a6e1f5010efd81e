"""
Key-value stores

Values are opaque strings; callers serialize. Writes replace the whole value
under a key.
"""
import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from typing import Dict, Optional

from habitdesk.core.exceptions import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Get/set/remove by key"""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Stored value, or None if the key is absent"""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the value under a key"""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key; removing an absent key is a no-op"""


class InMemoryStore(KeyValueStore):
    """Process-local store, used for reminder markers and in tests"""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def remove(self, key: str) -> None:
        with self._lock:
            self._data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON object on disk.

    The file is rewritten on every set/remove via a temp file and rename.
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = threading.Lock()

    def _read(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read store file {self.path}: {e}")
            raise StorageError(f"Failed to read store: {e}")
        if not isinstance(data, dict):
            raise StorageError(f"Store file {self.path} does not hold a JSON object")
        return data

    def _write(self, data: Dict[str, str]) -> None:
        tmp_path = f"{self.path}.tmp"
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Failed to write store file {self.path}: {e}")
            raise StorageError(f"Failed to write store: {e}")

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)

    def remove(self, key: str) -> None:
        with self._lock:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)


def create_store(path: str = "") -> KeyValueStore:
    """Build the persistent store for a configured path (empty means in-memory)"""
    if path:
        logger.info(f"Using JSON file store at {path}")
        return JsonFileStore(path)
    logger.warning("STORAGE_PATH not set. Habits will only be kept in memory.")
    return InMemoryStore()
