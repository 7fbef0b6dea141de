"""
Shell Exceptions

Errors raised by built-in commands. The shell turns every one of them
into a single output line prefixed with the command name.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, Any


class ShellException(Exception):
    """Base exception for shell errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[int] = None,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or 6000
        self.context = context or {}


class ShellCommandError(ShellException):
    """
    Built-in command misuse or failure.

    Example:
        >>> str(ShellCommandError("mkdir", "missing operand"))
        'mkdir: missing operand'
    """

    def __init__(
        self,
        command: str,
        message: str,
        context: Optional[dict[str, Any]] = None
    ) -> None:
        ctx = context or {}
        ctx["command"] = command
        super().__init__(message, error_code=6001, context=ctx)
        self.command = command

    def __str__(self) -> str:
        return f"{self.command}: {self.message}"
