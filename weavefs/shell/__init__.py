"""
WeaveFS Shell

Line-oriented command interpreter over the virtual file system.
"""

from .parser import CommandParser, ParsedCommand, Redirection, Token, TokenType
from .history import CommandHistory
from .completion import Completer
from .builtins import BuiltinCommands, CLEAR_SCREEN, COMMAND_DOCS, format_size
from .shell import Shell, create_shell

__all__ = [
    "CommandParser",
    "ParsedCommand",
    "Redirection",
    "Token",
    "TokenType",
    "CommandHistory",
    "Completer",
    "BuiltinCommands",
    "CLEAR_SCREEN",
    "COMMAND_DOCS",
    "format_size",
    "Shell",
    "create_shell",
]
