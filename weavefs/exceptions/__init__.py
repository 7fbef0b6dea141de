"""
WeaveFS Exception Hierarchy

Architecture:
    BootException
    ├── BootFailureError
    └── ConfigValidationError
    FileSystemException
    ├── NodeNotFoundError
    ├── NodeExistsError
    ├── DirectoryNotEmptyError
    ├── InvalidPathError
    ├── NotAFileError
    ├── NotAFolderError
    └── RootProtectionError
        ├── CannotDeleteRootError
        └── CannotMoveRootError
    PersistenceException
    └── PersistenceError
        ├── StorageLoadError
        └── RemoteStorageError
    ShellException
    └── ShellCommandError
"""

from .boot_exceptions import (
    BootException,
    BootFailureError,
    ConfigValidationError,
)

from .fs_exceptions import (
    FileSystemException,
    NodeNotFoundError,
    NodeExistsError,
    DirectoryNotEmptyError,
    InvalidPathError,
    NotAFileError,
    NotAFolderError,
    RootProtectionError,
    CannotDeleteRootError,
    CannotMoveRootError,
)

from .persistence_exceptions import (
    PersistenceException,
    PersistenceError,
    StorageLoadError,
    RemoteStorageError,
)

from .shell_exceptions import (
    ShellException,
    ShellCommandError,
)

__all__ = [
    # Boot exceptions
    "BootException",
    "BootFailureError",
    "ConfigValidationError",
    # Filesystem exceptions
    "FileSystemException",
    "NodeNotFoundError",
    "NodeExistsError",
    "DirectoryNotEmptyError",
    "InvalidPathError",
    "NotAFileError",
    "NotAFolderError",
    "RootProtectionError",
    "CannotDeleteRootError",
    "CannotMoveRootError",
    # Persistence exceptions
    "PersistenceException",
    "PersistenceError",
    "StorageLoadError",
    "RemoteStorageError",
    # Shell exceptions
    "ShellException",
    "ShellCommandError",
]
