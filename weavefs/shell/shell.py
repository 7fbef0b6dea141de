"""
Weave Shell Module

The command-line interpreter behind the Terminal app. A line goes in,
a block of text comes out.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, List, Tuple

from .parser import CommandParser, ParsedCommand
from .builtins import BuiltinCommands, CLEAR_SCREEN
from .history import CommandHistory
from .completion import Completer
from weavefs.core.config_loader import ShellConfig
from weavefs.filesystem.nodes import FileNode, FolderNode, Node
from weavefs.filesystem.path_resolver import PathResolver
from weavefs.filesystem.vfs import VirtualFileSystem
from weavefs.sync.events import Source
from weavefs.sync.service import VFSSyncService
from weavefs.exceptions import (
    ShellCommandError,
    FileSystemException,
    PersistenceException,
    NotAFileError,
)
from weavefs.logger import Logger, get_logger


class Shell:
    """
    Weave Interactive Shell.

    Provides:
    - Command parsing with quotes and $VAR expansion
    - Built-in commands
    - Pipelines and I/O redirection
    - Command history and tab completion
    - Environment variables

    Mutations go through the sync service when one is attached so that
    other views see terminal changes.

    Example:
        >>> shell = Shell(vfs, sync)
        >>> shell.execute('mkdir Notes')
        ''
        >>> shell.execute('ls')
        'Notes/'
    """

    def __init__(
        self,
        vfs: VirtualFileSystem,
        sync: Optional[VFSSyncService] = None,
        config: Optional[ShellConfig] = None,
        logger: Optional[Logger] = None
    ):
        self._vfs = vfs
        self._sync = sync
        self._config = config or ShellConfig()
        self._logger = logger or get_logger('shell')
        self._parser = CommandParser()
        self._builtins = BuiltinCommands(self)
        self._history = CommandHistory(self._config.history_size)
        self._completer = Completer(self)
        self._running = False
        self._exiting = False
        self._clear_requested = False
        self._last_status = 0

        self._home = PathResolver.normalize(self._config.home)
        self._cwd = self._home if vfs.is_folder(self._home) else '/'
        self._environ: dict[str, str] = {
            'USER': self._config.user,
            'HOME': self._home,
            'PATH': '/bin:/usr/bin',
            'PWD': self._cwd,
            'SHELL': '/bin/wsh',
            'TERM': 'xterm-256color',
            'HOSTNAME': self._config.hostname,
        }

    @property
    def vfs(self) -> VirtualFileSystem:
        return self._vfs

    @property
    def sync(self) -> Optional[VFSSyncService]:
        return self._sync

    @property
    def config(self) -> ShellConfig:
        return self._config

    @property
    def builtins(self) -> BuiltinCommands:
        return self._builtins

    @property
    def history(self) -> CommandHistory:
        return self._history

    @property
    def home(self) -> str:
        return self._home

    @property
    def cwd(self) -> str:
        return self._cwd

    @cwd.setter
    def cwd(self, value: str):
        self._cwd = PathResolver.normalize(value)
        self._environ['PWD'] = self._cwd

    @property
    def environ(self) -> dict[str, str]:
        return self._environ

    @property
    def last_status(self) -> int:
        """Exit code of the most recent command line."""
        return self._last_status

    @property
    def exiting(self) -> bool:
        return self._exiting

    def get_variable(self, name: str) -> Optional[str]:
        """Get an environment variable."""
        return self._environ.get(name)

    def set_variable(self, name: str, value: str) -> None:
        """Set an environment variable."""
        self._environ[name] = value

    def resolve_path(self, path: str) -> str:
        """
        Resolve a command operand to an absolute path.

        '~' and '~/...' are relative to the home folder, anything else
        not starting with '/' to the working directory.
        """
        if path == '~':
            return self._home
        if path.startswith('~/'):
            return PathResolver.join(self._home, path[2:])
        return PathResolver.resolve(path, self._cwd)

    # Mutations, attributed to the terminal

    def create_file(self, path: str, content: str = "") -> FileNode:
        if self._sync:
            return self._sync.create_file(path, content, source=Source.TERMINAL)
        return self._vfs.create_file(path, content)

    def create_folder(self, path: str) -> FolderNode:
        if self._sync:
            return self._sync.create_folder(path, source=Source.TERMINAL)
        return self._vfs.create_folder(path)

    def update_file(self, path: str, content: str) -> FileNode:
        if self._sync:
            return self._sync.update_file(path, content, source=Source.TERMINAL)
        return self._vfs.update_file(path, content)

    def delete_node(self, path: str) -> Node:
        if self._sync:
            return self._sync.delete_node(path, source=Source.TERMINAL)
        return self._vfs.delete_node(path)

    def move_node(self, old_path: str, new_path: str) -> Node:
        if self._sync:
            return self._sync.move_node(old_path, new_path, source=Source.TERMINAL)
        return self._vfs.move_node(old_path, new_path)

    def copy_node(self, source_path: str, target_path: str) -> Node:
        if self._sync:
            return self._sync.copy_file(source_path, target_path, source=Source.TERMINAL)
        return self._vfs.copy_node(source_path, target_path)

    # Execution

    def execute(self, line: str) -> str:
        """
        Execute a command line.

        Args:
            line: Command line string

        Returns:
            The output text (possibly empty), an error message, or
            CLEAR_SCREEN when `clear` ran and its output was not redirected
        """
        self._clear_requested = False
        if line.strip():
            self._history.add(line.strip())

        try:
            cmd = self._parser.parse(line, self._environ)
        except ShellCommandError as e:
            self._last_status = 2
            return str(e)

        if cmd is None:
            self._last_status = 0
            return ''

        status, output = self._execute_pipeline(cmd)
        self._last_status = status
        if status == 0 and self._clear_requested:
            return CLEAR_SCREEN
        return output

    def _execute_pipeline(self, cmd: ParsedCommand) -> Tuple[int, str]:
        """Run each command, feeding its output to the next one."""
        output: Optional[str] = None
        status = 0

        for stage in cmd.pipeline():
            status, output = self._execute_command(stage, output)
            if status != 0:
                break

        return status, output or ''

    def _execute_command(self, cmd: ParsedCommand, stdin: Optional[str]) -> Tuple[int, str]:
        """Execute one pipeline stage with its redirections."""
        try:
            for redir in cmd.redirections:
                if redir.type == 'in':
                    stdin = self._vfs.get_file_content(self.resolve_path(redir.path))

            if not cmd.command:
                status, output = 0, ''
            else:
                status, output = self._builtins.execute(cmd.command, cmd.args, stdin)
            if status != 0:
                return status, output

            targets = [r for r in cmd.redirections if r.type in ('out', 'append')]
            for redir in targets:
                self._write_output(redir.path, output, append=(redir.type == 'append'))
            if targets:
                output = ''
                self._clear_requested = False

            return status, output

        except FileSystemException as e:
            return 1, f"{cmd.command or 'shell'}: {e.message}"
        except PersistenceException as e:
            self._logger.error("Redirect could not be saved", context={'error': e.message})
            return 1, f"{cmd.command or 'shell'}: {e.message}"

    def _write_output(self, target: str, text: str, append: bool = False) -> None:
        """Write command output to a file, ending it with a newline."""
        path = self.resolve_path(target)
        if text and not text.endswith('\n'):
            text += '\n'

        if self._vfs.is_folder(path):
            raise NotAFileError(path)

        if self._vfs.exists(path):
            content = self._vfs.get_file_content(path) + text if append else text
            self.update_file(path, content)
        else:
            self.create_file(path, text)

    # Interactive helpers

    def complete(self, line: str) -> Optional[str]:
        """Text to append for tab completion; None unless one match exists."""
        return self._completer.complete(line)

    def completion_candidates(self, line: str) -> List[str]:
        """Every completion for the word being typed."""
        return self._completer.candidates(line)

    def navigate_history(self, direction: str) -> Optional[str]:
        """Step through history with 'up' or 'down'."""
        return self._history.navigate(direction)

    def get_prompt(self) -> str:
        """Generate the shell prompt."""
        if self._cwd == self._home:
            cwd_display = '~'
        elif self._home != '/' and PathResolver.is_within(self._cwd, self._home):
            cwd_display = '~' + self._cwd[len(self._home):]
        else:
            cwd_display = self._cwd

        user = self._environ.get('USER', self._config.user)
        return f"{user}@{self._config.hostname}:{cwd_display}{self._config.prompt}"

    def run(self, welcome: Optional[str] = None) -> None:
        """
        Run the interactive shell.

        This is the main REPL loop.
        """
        self._running = True
        self._exiting = False

        if welcome:
            print(f"\n{welcome}")
        print("Type 'help' for a list of commands.\n")

        while self._running and not self._exiting:
            try:
                line = input(self.get_prompt())
            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print("^C")
                continue

            output = self.execute(line)

            if output == CLEAR_SCREEN:
                print(output, end='')
            elif output:
                print(output, end='' if output.endswith('\n') else '\n')

        self._running = False

    def request_clear(self) -> None:
        """Ask the host to wipe its display once the current line finishes."""
        self._clear_requested = True

    def request_exit(self) -> None:
        """Request the shell to exit."""
        self._exiting = True

    def stop(self) -> None:
        """Stop the shell."""
        self._running = False

    def run_script(self, script: str) -> List[str]:
        """
        Run a script (multiple commands).

        Stops early when a line runs exit.

        Returns:
            Output of each executed line
        """
        outputs = []

        for line in script.split('\n'):
            line = line.strip()
            if line and not line.startswith('#'):
                outputs.append(self.execute(line))
                if self._exiting:
                    break

        return outputs


def create_shell(
    vfs: VirtualFileSystem,
    sync: Optional[VFSSyncService] = None,
    config: Optional[ShellConfig] = None
) -> Shell:
    """Factory function to create a shell."""
    return Shell(vfs, sync, config)
