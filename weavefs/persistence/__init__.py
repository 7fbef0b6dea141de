"""
WeaveFS Persistence

Storage backends that keep the tree across restarts.
"""

from .base import StorageBackend
from .local import (
    KeyValueStore,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    LocalStorageBackend,
)
from .remote import ObjectStorageClient, RemoteRecord, RemoteStorageBackend
from .factory import create_storage_backend

__all__ = [
    "StorageBackend",
    "KeyValueStore",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "LocalStorageBackend",
    "ObjectStorageClient",
    "RemoteRecord",
    "RemoteStorageBackend",
    "create_storage_backend",
]
