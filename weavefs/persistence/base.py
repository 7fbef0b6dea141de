"""
Storage Backend Interface

The tree store calls save() after every successful mutation and load()
once at startup. Backends decide where the tree lives.

Author: YSNRFD
Version: 1.0.0
"""

from abc import ABC, abstractmethod
from typing import Optional

from weavefs.filesystem.nodes import FolderNode
from weavefs.logger import Logger, get_logger


class StorageBackend(ABC):
    """
    Abstract durable store for a whole tree.

    Implementations must round-trip structure and content. The local
    backend also round-trips timestamps exactly.
    """

    name = "abstract"

    def __init__(self, logger: Optional[Logger] = None):
        self._logger = logger or get_logger('storage')

    @abstractmethod
    def save(self, root: FolderNode) -> None:
        """
        Persist the tree rooted at root.

        Raises:
            PersistenceError: If the write fails
        """
        pass

    @abstractmethod
    def load(self) -> Optional[FolderNode]:
        """
        Read the saved tree.

        Returns:
            The root folder, or None when nothing has been saved yet

        Raises:
            StorageLoadError: If saved state exists but is unreadable
        """
        pass

    def close(self) -> None:
        """Release any held resources."""
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
