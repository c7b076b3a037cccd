"""
Key/value storage backends.

Every backend stores opaque text under string keys, the same contract as a
browser's localStorage. Serialization is the caller's business (see
``ecomission.core.store``).
"""

from __future__ import annotations

import os
import re
from abc import ABC, abstractmethod
from typing import Dict, Optional

from ecomission.core.config import Settings, get_settings


class StorageBackend(ABC):
    """Text values under string keys."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the stored text, or None when the key is absent."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete key. Removing an absent key is not an error."""


class MemoryStorage(StorageBackend):
    """Process-local dict. Used by tests and throwaway runs."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage(StorageBackend):
    """One UTF-8 file per key inside ``data_dir``."""

    _SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")

    def __init__(self, data_dir: str):
        self.data_dir = data_dir

    def _path(self, key: str) -> str:
        return os.path.join(self.data_dir, self._SAFE_KEY.sub("_", key) + ".json")

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not os.path.exists(path):
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def set_item(self, key: str, value: str) -> None:
        os.makedirs(self.data_dir, exist_ok=True)
        path = self._path(key)
        tmp_path = f"{path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(value)
        os.replace(tmp_path, path)

    def remove_item(self, key: str) -> None:
        try:
            os.remove(self._path(key))
        except FileNotFoundError:
            pass


class MongoStorage(StorageBackend):
    """Documents shaped ``{key, value}`` in a single MongoDB collection."""

    def __init__(self, collection_name: str):
        self.collection_name = collection_name

    def _collection(self):
        # Imported lazily so memory/file deployments never touch pymongo.
        from ecomission.core.database import Database
        return Database.get_collection(self.collection_name)

    def get_item(self, key: str) -> Optional[str]:
        doc = self._collection().find_one({"key": key}, {"_id": 0, "value": 1})
        if not doc:
            return None
        return doc.get("value")

    def set_item(self, key: str, value: str) -> None:
        self._collection().update_one(
            {"key": key},
            {"$set": {"key": key, "value": value}},
            upsert=True,
        )

    def remove_item(self, key: str) -> None:
        self._collection().delete_one({"key": key})


def create_backend(settings: Optional[Settings] = None) -> StorageBackend:
    """Build the backend named by ``STORAGE_BACKEND``."""
    settings = settings or get_settings()
    kind = (settings.STORAGE_BACKEND or "").strip().lower()

    if kind == "memory":
        return MemoryStorage()
    if kind == "file":
        return FileStorage(settings.DATA_DIR)
    if kind == "mongo":
        return MongoStorage(settings.MONGO_COLLECTION)

    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND!r}")
