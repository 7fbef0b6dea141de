"""
Local Key-Value Persistence

Stores the serialized tree as a single string value in a key-value
store, alongside the time of the last save.

Author: YSNRFD
Version: 1.0.0
"""

import json
import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .base import StorageBackend
from . import serializer
from weavefs.filesystem.nodes import FolderNode
from weavefs.exceptions import PersistenceError, StorageLoadError
from weavefs.logger import Logger


class KeyValueStore(ABC):
    """String-to-string durable store."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Get a value, or None if the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store a value."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove a key if present."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """Process-local store. Contents vanish with the process."""

    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class JsonFileKeyValueStore(KeyValueStore):
    """
    Key-value store kept in one JSON document on disk.

    Writes go to a temporary file in the same directory which then
    replaces the document, so a crash never leaves it half written.

    Example:
        >>> store = JsonFileKeyValueStore('~/.weavefs/storage.json')
        >>> store.set('greeting', 'hello')
    """

    def __init__(self, path: str):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StorageLoadError(
                f"Storage file is not valid JSON: {e}",
                backend="local",
                context={'file': str(self._path)}
            ) from e
        except OSError as e:
            raise StorageLoadError(
                f"Cannot read storage file: {e}",
                backend="local",
                context={'file': str(self._path)}
            ) from e
        if not isinstance(data, dict):
            raise StorageLoadError(
                "Storage file does not hold an object",
                backend="local",
                context={'file': str(self._path)}
            )
        return data

    def _write(self, data: dict[str, str]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp"
            )
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(data, f, ensure_ascii=False)
                os.replace(tmp_path, self._path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise PersistenceError(
                f"Cannot write storage file: {e}",
                backend="local",
                context={'file': str(self._path)}
            ) from e

    def get(self, key: str) -> Optional[str]:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read()
        except StorageLoadError:
            # a corrupt document is replaced on the next write
            data = {}
        data[key] = value
        self._write(data)

    def delete(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)


class LocalStorageBackend(StorageBackend):
    """
    Tree persistence over a KeyValueStore.

    The tree is stored under ``key`` and the ISO time of the last save
    under ``key + '-timestamp'``.
    """

    name = "local"

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        key: str = "weave-vfs",
        logger: Optional[Logger] = None
    ):
        super().__init__(logger)
        self._store = store if store is not None else InMemoryKeyValueStore()
        self._key = key

    @property
    def store(self) -> KeyValueStore:
        return self._store

    @property
    def timestamp_key(self) -> str:
        return f"{self._key}-timestamp"

    def save(self, root: FolderNode) -> None:
        try:
            self._store.set(self._key, serializer.dumps(root))
            self._store.set(
                self.timestamp_key,
                datetime.now(timezone.utc).isoformat()
            )
        except PersistenceError:
            raise
        except Exception as e:
            raise PersistenceError(
                f"Cannot save tree: {e}",
                backend=self.name
            ) from e

    def load(self) -> Optional[FolderNode]:
        text = self._store.get(self._key)
        if text is None:
            return None
        root = serializer.loads(text)
        self._logger.debug(
            "Loaded tree",
            context={'key': self._key, 'saved_at': self._store.get(self.timestamp_key)}
        )
        return root

    def last_saved(self) -> Optional[datetime]:
        """Time of the last successful save, if any."""
        value = self._store.get(self.timestamp_key)
        if value is None:
            return None
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            self._logger.warning("Unreadable save timestamp", context={'value': value})
            return None

    def clear(self) -> None:
        """Forget the saved tree."""
        self._store.delete(self._key)
        self._store.delete(self.timestamp_key)

    def __repr__(self) -> str:
        return f"LocalStorageBackend(store={type(self._store).__name__}, key={self._key!r})"
