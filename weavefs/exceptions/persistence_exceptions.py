"""
Persistence Exceptions

Exceptions raised while saving or loading the tree against a durable
store, either the local key-value store or the remote object storage.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class PersistenceException(Exception):
    """
    Base exception for storage backend errors.

    Attributes:
        message: Human-readable error description
        backend: Name of the backend that failed
        error_code: Numeric error code for programmatic handling
        context: Additional context about the error
    """

    def __init__(
        self,
        message: str,
        backend: Optional[str] = None,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.backend = backend
        self.error_code = error_code or 5000
        self.context = context or {}
        if backend:
            self.context["backend"] = backend

    def __str__(self) -> str:
        base = f"[Error {self.error_code}] {self.message}"
        if self.backend:
            base = f"{base} (backend={self.backend})"
        return base


class PersistenceError(PersistenceException):
    """
    Saving the tree failed.

    The in-memory mutation that triggered the save has already been
    applied and is not rolled back.
    """

    def __init__(
        self,
        message: str,
        backend: Optional[str] = None,
        error_code: int = 5001,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            backend=backend,
            error_code=error_code,
            context=context
        )


class StorageLoadError(PersistenceError):
    """Saved state exists but cannot be read or decoded."""

    def __init__(
        self,
        message: str,
        backend: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(
            message=message,
            backend=backend,
            error_code=5002,
            context=context
        )


class RemoteStorageError(PersistenceError):
    """
    The remote object-storage service rejected a request or was unreachable.

    Example:
        >>> raise RemoteStorageError("File not found", status_code=404)
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        if url:
            ctx["url"] = url
        super().__init__(
            message=message,
            backend="remote",
            error_code=5003,
            context=ctx
        )
        self.status_code = status_code
        self.url = url
