"""
Filesystem Exceptions

Exceptions raised by the tree store and path handling. Messages are
written in the lowercase Unix style so the shell can print them after a
command prefix unchanged.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class FileSystemException(Exception):
    """
    Base exception for all filesystem-related errors.

    Attributes:
        message: Human-readable error description
        path: Path associated with the error (if applicable)
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.error_code = error_code or 4000
        self.context = context or {}
        if path:
            self.context["path"] = path

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.path:
            base = f"{base} (path={self.path})"
        return base

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"path={self.path!r}, "
            f"error_code={self.error_code})"
        )


class NodeNotFoundError(FileSystemException):
    """
    The path does not resolve to any node.

    Example:
        >>> raise NodeNotFoundError("/Documents/missing.txt")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"no such file or directory: {path}",
            path=path,
            error_code=4001,
            context=context
        )


class NodeExistsError(FileSystemException):
    """
    A sibling with the same name already exists.

    Example:
        >>> raise NodeExistsError("/Desktop/Welcome.txt")
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"file already exists: {path}",
            path=path,
            error_code=4002,
            context=context
        )


class DirectoryNotEmptyError(FileSystemException):
    """
    Directory is not empty.

    Raised by callers that opt into an emptiness check (``rmdir``); the
    tree store itself deletes folders unconditionally.
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"directory not empty: {path}",
            path=path,
            error_code=4004,
            context=context
        )


class InvalidPathError(FileSystemException):
    """
    The path cannot be used for the requested operation.

    Covers an empty final segment and moving or copying a folder into
    its own subtree.

    Example:
        >>> raise InvalidPathError("/a/b", reason="cannot move a folder into itself")
    """

    def __init__(
        self,
        path: str,
        reason: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if reason:
            ctx["reason"] = reason
        super().__init__(
            message=f"{reason or 'invalid path'}: {path}",
            path=path,
            error_code=4006,
            context=ctx
        )
        self.reason = reason


class NotAFileError(FileSystemException):
    """
    Path is not a file.

    Raised when a content operation targets a folder.
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"is a directory: {path}",
            path=path,
            error_code=4008,
            context=context
        )


class NotAFolderError(FileSystemException):
    """
    Path is not a folder.

    Raised when listing, descending into, or creating inside a file.
    """

    def __init__(
        self,
        path: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=f"not a directory: {path}",
            path=path,
            error_code=4009,
            context=context
        )


class RootProtectionError(FileSystemException):
    """Base for operations that would delete, rename or move the root."""

    def __init__(
        self,
        message: str,
        error_code: int = 4010,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            path="/",
            error_code=error_code,
            context=context
        )


class CannotDeleteRootError(RootProtectionError):
    """The root folder can never be deleted."""

    def __init__(self, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message="cannot delete root directory",
            error_code=4011,
            context=context
        )


class CannotMoveRootError(RootProtectionError):
    """The root folder can never be moved or renamed."""

    def __init__(self, context: Optional[dict[str, Any]] = None) -> None:
        super().__init__(
            message="cannot move root directory",
            error_code=4012,
            context=context
        )
