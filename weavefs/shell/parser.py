"""
Command Parser Module

Parses shell command lines into structured commands.

Author: YSNRFD
Version: 1.0.0
"""

import re
from dataclasses import dataclass, field
from typing import Optional, List, Mapping
from enum import Enum

from weavefs.exceptions import ShellCommandError


VARIABLE_PATTERN = re.compile(r'\$(?:\{(\w+)\}|(\w+))')


class TokenType(Enum):
    """Token types for command parsing."""
    WORD = "word"
    PIPE = "pipe"
    REDIRECT_OUT = "redirect_out"
    REDIRECT_APPEND = "redirect_append"
    REDIRECT_IN = "redirect_in"


@dataclass
class Token:
    """A parsed token."""
    type: TokenType
    value: str


@dataclass
class Redirection:
    """A file redirection."""
    type: str  # "out", "append", "in"
    path: str


@dataclass
class ParsedCommand:
    """A parsed command line."""
    command: str
    args: List[str] = field(default_factory=list)
    redirections: List[Redirection] = field(default_factory=list)
    pipe_to: Optional['ParsedCommand'] = None

    def pipeline(self) -> List['ParsedCommand']:
        """This command followed by every command it pipes into."""
        commands = []
        current: Optional[ParsedCommand] = self
        while current:
            commands.append(current)
            current = current.pipe_to
        return commands


_REDIRECT_TYPES = {
    TokenType.REDIRECT_OUT: "out",
    TokenType.REDIRECT_APPEND: "append",
    TokenType.REDIRECT_IN: "in",
}


class CommandParser:
    """
    Parses shell command lines.

    Handles:
    - Command and arguments
    - Pipes (|)
    - Redirections (>, >>, <)
    - Single and double quoted strings (quotes are stripped)
    - Backslash escapes outside single quotes
    - $VAR and ${VAR} expansion outside single quotes

    Example:
        >>> parser = CommandParser()
        >>> cmd = parser.parse('echo "hello world" > /Desktop/out.txt')
        >>> cmd.args, cmd.redirections[0].path
        (['hello world'], '/Desktop/out.txt')
    """

    def parse(
        self,
        line: str,
        variables: Optional[Mapping[str, str]] = None
    ) -> Optional[ParsedCommand]:
        """
        Parse a command line.

        Args:
            line: Command line string
            variables: Values for $VAR expansion; None disables expansion

        Returns:
            ParsedCommand or None if the line is empty or a comment

        Raises:
            ShellCommandError: On a redirection or pipe without a target
        """
        line = line.strip()

        if not line or line.startswith('#'):
            return None

        tokens = self._tokenize(line, variables)

        if not tokens:
            return None

        return self._parse_tokens(tokens)

    def _tokenize(
        self,
        line: str,
        variables: Optional[Mapping[str, str]] = None
    ) -> List[Token]:
        """Convert a line into tokens."""
        tokens: List[Token] = []
        current = ""
        # a quoted empty string ("") still counts as a word
        has_word = False
        in_quote: Optional[str] = None
        i = 0

        def flush() -> None:
            nonlocal current, has_word
            if has_word:
                tokens.append(Token(TokenType.WORD, current))
            current = ""
            has_word = False

        while i < len(line):
            char = line[i]

            if char in ('"', "'") and in_quote is None:
                in_quote = char
                has_word = True
                i += 1
                continue

            if char == in_quote:
                in_quote = None
                i += 1
                continue

            if char == '\\' and in_quote != "'" and i + 1 < len(line):
                current += line[i + 1]
                has_word = True
                i += 2
                continue

            if char == '$' and in_quote != "'" and variables is not None:
                match = VARIABLE_PATTERN.match(line, i)
                if match:
                    name = match.group(1) or match.group(2)
                    value = variables.get(name, '')
                    current += value
                    has_word = has_word or bool(value) or in_quote is not None
                    i = match.end()
                    continue

            if in_quote:
                current += char
                i += 1
                continue

            if char == '|':
                flush()
                tokens.append(Token(TokenType.PIPE, '|'))
                i += 1
                continue

            if char == '>':
                flush()
                if i + 1 < len(line) and line[i + 1] == '>':
                    tokens.append(Token(TokenType.REDIRECT_APPEND, '>>'))
                    i += 2
                else:
                    tokens.append(Token(TokenType.REDIRECT_OUT, '>'))
                    i += 1
                continue

            if char == '<':
                flush()
                tokens.append(Token(TokenType.REDIRECT_IN, '<'))
                i += 1
                continue

            if char.isspace():
                flush()
                i += 1
                continue

            current += char
            has_word = True
            i += 1

        flush()
        return tokens

    def _parse_tokens(self, tokens: List[Token]) -> ParsedCommand:
        """Parse tokens into a command structure."""
        cmd = ParsedCommand(command="")
        current_cmd = cmd
        current_words: List[str] = []
        i = 0

        while i < len(tokens):
            token = tokens[i]

            if token.type == TokenType.WORD:
                current_words.append(token.value)

            elif token.type == TokenType.PIPE:
                if not current_words:
                    raise ShellCommandError("shell", "syntax error near unexpected token '|'")
                self._apply_words(current_cmd, current_words)
                current_words = []

                next_cmd = ParsedCommand(command="")
                current_cmd.pipe_to = next_cmd
                current_cmd = next_cmd

            else:
                if i + 1 >= len(tokens) or tokens[i + 1].type != TokenType.WORD:
                    raise ShellCommandError(
                        "shell",
                        f"syntax error near unexpected token '{token.value}'"
                    )
                current_cmd.redirections.append(
                    Redirection(type=_REDIRECT_TYPES[token.type], path=tokens[i + 1].value)
                )
                i += 1

            i += 1

        if current_cmd is not cmd and not current_words:
            raise ShellCommandError("shell", "syntax error near unexpected token '|'")

        self._apply_words(current_cmd, current_words)
        return cmd

    def _apply_words(self, cmd: ParsedCommand, words: List[str]) -> None:
        """Apply words to a command."""
        if words:
            cmd.command = words[0]
            cmd.args = words[1:]
