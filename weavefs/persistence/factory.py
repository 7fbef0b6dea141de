"""
Storage Backend Factory

Builds the storage backend named by the persistence configuration.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional

import httpx

from .base import StorageBackend
from .local import LocalStorageBackend, InMemoryKeyValueStore, JsonFileKeyValueStore
from .remote import ObjectStorageClient, RemoteStorageBackend
from weavefs.core.config_loader import PersistenceConfig
from weavefs.exceptions import ConfigValidationError
from weavefs.logger import get_logger


def create_storage_backend(
    config: PersistenceConfig,
    transport: Optional[httpx.BaseTransport] = None
) -> StorageBackend:
    """
    Create a storage backend from configuration.

    Args:
        config: Persistence settings
        transport: HTTP transport override for the remote backend

    Raises:
        ConfigValidationError: If the backend name is unknown
    """
    logger = get_logger('storage')

    if config.backend == 'memory':
        backend: StorageBackend = LocalStorageBackend(
            InMemoryKeyValueStore(),
            key=config.storage_key,
            logger=logger
        )
    elif config.backend == 'local':
        backend = LocalStorageBackend(
            JsonFileKeyValueStore(config.storage_path),
            key=config.storage_key,
            logger=logger
        )
    elif config.backend == 'remote':
        client = ObjectStorageClient(
            config.remote_url,
            token=config.remote_token,
            timeout=config.timeout,
            transport=transport,
        )
        backend = RemoteStorageBackend(client, logger=logger)
    else:
        raise ConfigValidationError(
            f"Unknown storage backend: {config.backend}",
            key="persistence.backend"
        )

    logger.info("Storage backend ready", context={'backend': repr(backend)})
    return backend
