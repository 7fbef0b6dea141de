"""
Shell Built-in Commands

Implements the Unix-like commands of the terminal. Every command takes
its arguments plus optional piped input and returns its output as text.

Author: YSNRFD
Version: 1.0.0
"""

import re
from datetime import datetime
from typing import Optional, Callable, List, Tuple, Set, TYPE_CHECKING

from weavefs.filesystem.nodes import FolderNode, Node
from weavefs.filesystem.path_resolver import PathResolver
from weavefs.exceptions import (
    ShellCommandError,
    FileSystemException,
    PersistenceException,
    DirectoryNotEmptyError,
    NotAFolderError,
)
from weavefs.logger import get_logger

if TYPE_CHECKING:
    from .shell import Shell


# ANSI erase-display and cursor-home; Shell.execute returns it after `clear`.
CLEAR_SCREEN = "\033[2J\033[H"

HEAD_TAIL_LINES = 10

IDENTIFIER = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')

FOLDER_COLOR = '\033[1;34m'
RESET_COLOR = '\033[0m'

# name -> (synopsis, summary, help section)
COMMAND_DOCS: dict[str, Tuple[str, str, str]] = {
    'pwd': ("pwd", "print the current working directory", "Navigation"),
    'cd': ("cd [dir | - | ~]", "change the working directory", "Navigation"),
    'ls': ("ls [-l] [-a] [path]", "list directory contents", "Navigation"),
    'tree': ("tree [path]", "draw the folder hierarchy", "Navigation"),
    'find': ("find <pattern> [path]", "find files by name ('*' matches anything)", "Navigation"),
    'du': ("du [path]", "total size of the files directly inside a folder", "Navigation"),
    'mkdir': ("mkdir [-p] <dir>...", "create folders", "File Operations"),
    'rmdir': ("rmdir <dir>...", "remove empty folders", "File Operations"),
    'touch': ("touch <file>...", "create empty files", "File Operations"),
    'rm': ("rm [-r] [-f] <path>...", "remove files and folders", "File Operations"),
    'cp': ("cp [-r] <source>... <dest>", "copy files and folders", "File Operations"),
    'mv': ("mv <source>... <dest>", "move or rename files and folders", "File Operations"),
    'cat': ("cat [file]...", "print and concatenate files", "Text Processing"),
    'echo': ("echo [text]...", "print text; use > or >> to write a file", "Text Processing"),
    'grep': ("grep [-i] <pattern> [file]...", "print matching lines with line numbers", "Text Processing"),
    'head': ("head [file]...", "print the first 10 lines", "Text Processing"),
    'tail': ("tail [file]...", "print the last 10 lines", "Text Processing"),
    'wc': ("wc [file]...", "count lines, words and characters", "Text Processing"),
    'sort': ("sort [-r] [file]...", "sort lines", "Text Processing"),
    'uniq': ("uniq [-c] [file]...", "collapse adjacent duplicate lines", "Text Processing"),
    'whoami': ("whoami", "print the current user", "Environment"),
    'date': ("date", "print the current date and time", "Environment"),
    'env': ("env", "print environment variables", "Environment"),
    'export': ("export [KEY=VALUE]...", "set environment variables", "Environment"),
    'which': ("which <command>...", "locate a command", "Environment"),
    'history': ("history", "list previously entered commands", "Shell"),
    'man': ("man <command>", "show the manual entry for a command", "Shell"),
    'help': ("help", "list available commands", "Shell"),
    'clear': ("clear", "clear the terminal screen", "Shell"),
    'exit': ("exit", "leave the shell", "Shell"),
}

HELP_SECTIONS = ["Navigation", "File Operations", "Text Processing", "Environment", "Shell"]


def format_size(size: int) -> str:
    """Human readable size: '512 B', '1.5 KB', '2.0 MB'."""
    if size < 1024:
        return f"{size} B"
    value = size / 1024
    for unit in ('KB', 'MB', 'GB'):
        if value < 1024 or unit == 'GB':
            return f"{value:.1f} {unit}"
        value /= 1024
    return f"{value:.1f} GB"


def split_flags(command: str, args: List[str], allowed: str) -> Tuple[Set[str], List[str]]:
    """
    Separate single-letter flags from operands.

    Flags may be clustered ('-la'). '--' ends flag parsing; a lone '-'
    is an operand.

    Raises:
        ShellCommandError: On a flag not in allowed
    """
    flags: Set[str] = set()
    operands: List[str] = []
    parsing = True

    for arg in args:
        if parsing and arg == '--':
            parsing = False
        elif parsing and arg.startswith('-') and len(arg) > 1:
            for letter in arg[1:]:
                if letter not in allowed:
                    raise ShellCommandError(command, f"invalid option -- '{letter}'")
                flags.add(letter)
        else:
            operands.append(arg)

    return flags, operands


class BuiltinCommands:
    """
    Built-in shell commands.

    Commands read the tree through the shell's VirtualFileSystem and
    route every mutation through the shell, which forwards it to the
    sync service when one is attached.
    """

    def __init__(self, shell: 'Shell'):
        """
        Initialize built-in commands.

        Args:
            shell: The shell instance
        """
        self._shell = shell
        self._logger = get_logger('shell')
        self._commands: dict[str, Callable[[List[str], Optional[str]], str]] = {
            'pwd': self.cmd_pwd,
            'cd': self.cmd_cd,
            'ls': self.cmd_ls,
            'tree': self.cmd_tree,
            'find': self.cmd_find,
            'du': self.cmd_du,
            'mkdir': self.cmd_mkdir,
            'rmdir': self.cmd_rmdir,
            'touch': self.cmd_touch,
            'rm': self.cmd_rm,
            'cp': self.cmd_cp,
            'mv': self.cmd_mv,
            'cat': self.cmd_cat,
            'echo': self.cmd_echo,
            'grep': self.cmd_grep,
            'head': self.cmd_head,
            'tail': self.cmd_tail,
            'wc': self.cmd_wc,
            'sort': self.cmd_sort,
            'uniq': self.cmd_uniq,
            'whoami': self.cmd_whoami,
            'date': self.cmd_date,
            'env': self.cmd_env,
            'export': self.cmd_export,
            'which': self.cmd_which,
            'history': self.cmd_history,
            'man': self.cmd_man,
            'help': self.cmd_help,
            'clear': self.cmd_clear,
            'exit': self.cmd_exit,
            'quit': self.cmd_exit,
        }

    def command_names(self) -> List[str]:
        """Names of all built-in commands."""
        return list(self._commands)

    def is_builtin(self, name: str) -> bool:
        """Check if a command is built-in."""
        return name in self._commands

    def execute(self, name: str, args: List[str], stdin: Optional[str] = None) -> Tuple[int, str]:
        """
        Execute a built-in command.

        Errors never escape: they become a single message line prefixed
        with the command name.

        Returns:
            Tuple of (exit code, output text)
        """
        cmd = self._commands.get(name)
        if cmd is None:
            return 127, f"{name}: command not found"

        try:
            return 0, cmd(args, stdin)
        except ShellCommandError as e:
            self._logger.debug("Command failed", context={'command': name, 'error': e.message})
            return 1, str(e)
        except FileSystemException as e:
            self._logger.debug("Command failed", context={'command': name, 'error': e.message})
            return 1, f"{name}: {e.message}"
        except PersistenceException as e:
            self._logger.error("Command could not be saved", context={'command': name, 'error': e.message})
            return 1, f"{name}: {e.message}"
        except Exception as e:
            self._logger.exception("Unexpected command failure", exc=e, context={'command': name})
            return 1, f"{name}: {e}"

    # Helpers

    def _resolve(self, path: str) -> str:
        return self._shell.resolve_path(path)

    def _read_inputs(
        self,
        command: str,
        operands: List[str],
        stdin: Optional[str]
    ) -> List[Tuple[Optional[str], str]]:
        """Collect (name, text) from file operands, or from stdin without any."""
        vfs = self._shell.vfs

        if not operands:
            if stdin is None:
                raise ShellCommandError(command, "missing file operand")
            return [(None, stdin)]

        sources = []
        for operand in operands:
            path = self._resolve(operand)
            if not vfs.exists(path):
                raise ShellCommandError(command, f"{operand}: no such file or directory")
            if vfs.is_folder(path):
                raise ShellCommandError(command, f"{operand}: is a directory")
            sources.append((operand, vfs.get_file_content(path)))
        return sources

    def _display_name(self, node: Node) -> str:
        if isinstance(node, FolderNode):
            if self._shell.config.use_colors:
                return f"{FOLDER_COLOR}{node.name}{RESET_COLOR}"
            return node.name + '/'
        return node.name

    def _long_entry(self, node: Node) -> str:
        user = self._shell.environ.get('USER', self._shell.config.user)
        if isinstance(node, FolderNode):
            perms, size = 'drwxr-xr-x', '     DIR'
        else:
            perms, size = '-rw-r--r--', f"{node.size:>8}"
        modified = node.modified.astimezone().strftime('%b %d %H:%M')
        return f"{perms} 1 {user} {user} {size} {modified} {self._display_name(node)}"

    def _columns(self, nodes: List[Node]) -> str:
        if not nodes:
            return ''
        width = self._shell.config.terminal_width
        col_width = min(20, max(12, max(len(self._display_name(n)) for n in nodes) + 3))
        per_line = max(1, width // col_width)

        lines = []
        for start in range(0, len(nodes), per_line):
            row = nodes[start:start + per_line]
            cells = []
            for node in row:
                name = self._display_name(node)
                # ANSI codes take no columns on screen
                visible = len(node.name) + (0 if self._shell.config.use_colors or not node.is_folder else 1)
                cells.append(name + ' ' * max(0, col_width - visible))
            lines.append(''.join(cells).rstrip())
        return '\n'.join(lines)

    # Navigation

    def cmd_pwd(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Print working directory."""
        return self._shell.cwd

    def cmd_cd(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Change directory."""
        if not args:
            target = self._shell.home
        elif args[0] == '-':
            target = self._shell.environ.get('OLDPWD', self._shell.cwd)
        else:
            target = self._resolve(args[0])

        name = args[0] if args else target
        if not self._shell.vfs.exists(target):
            raise ShellCommandError('cd', f"no such file or directory: {name}")
        if not self._shell.vfs.is_folder(target):
            raise ShellCommandError('cd', f"not a directory: {name}")

        self._shell.environ['OLDPWD'] = self._shell.cwd
        self._shell.cwd = target
        return ''

    def cmd_ls(self, args: List[str], stdin: Optional[str] = None) -> str:
        """List directory contents, folders first."""
        flags, operands = split_flags('ls', args, 'la')
        path = self._resolve(operands[0]) if operands else self._shell.cwd
        vfs = self._shell.vfs

        node = vfs.get_node(path)
        if node is None:
            raise ShellCommandError('ls', f"cannot access '{operands[0] if operands else path}': no such file or directory")

        if isinstance(node, FolderNode):
            entries = node.children
        else:
            entries = [node]

        if 'a' not in flags:
            entries = [e for e in entries if not e.name.startswith('.')]

        folders = sorted((e for e in entries if e.is_folder), key=lambda e: e.name.lower())
        files = sorted((e for e in entries if e.is_file), key=lambda e: e.name.lower())
        ordered = folders + files

        if 'l' in flags:
            lines = [f"total {len(ordered)}"]
            lines.extend(self._long_entry(entry) for entry in ordered)
            return '\n'.join(lines)

        return self._columns(ordered)

    def cmd_tree(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Render the folder hierarchy in store order."""
        label = args[0] if args else '.'
        node = self._shell.vfs.get_node(self._resolve(label))
        if node is None:
            raise ShellCommandError('tree', f"{label}: no such file or directory")
        if not isinstance(node, FolderNode):
            raise ShellCommandError('tree', f"{label}: not a directory")

        lines = [label]
        counts = {'dirs': 0, 'files': 0}

        def render(folder: FolderNode, prefix: str) -> None:
            for index, child in enumerate(folder.children):
                last = index == len(folder.children) - 1
                lines.append(f"{prefix}{'└── ' if last else '├── '}{child.name}")
                if isinstance(child, FolderNode):
                    counts['dirs'] += 1
                    render(child, prefix + ('    ' if last else '│   '))
                else:
                    counts['files'] += 1

        render(node, '')

        dirs, files = counts['dirs'], counts['files']
        lines.append('')
        lines.append(
            f"{dirs} {'directory' if dirs == 1 else 'directories'}, "
            f"{files} {'file' if files == 1 else 'files'}"
        )
        return '\n'.join(lines)

    def cmd_find(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Find files by name: find <pattern> [path] or find [path] -name <pattern>."""
        if '-name' in args:
            index = args.index('-name')
            if index + 1 >= len(args):
                raise ShellCommandError('find', "missing argument to '-name'")
            pattern = args[index + 1]
            location = args[0] if index > 0 else '.'
        else:
            if not args:
                raise ShellCommandError('find', "missing pattern")
            pattern = args[0]
            location = args[1] if len(args) > 1 else '.'

        start = self._resolve(location)
        if not self._shell.vfs.exists(start):
            raise ShellCommandError('find', f"'{location}': no such file or directory")

        return '\n'.join(self._shell.vfs.find_files(pattern, start))

    def cmd_du(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Total size of the files directly inside a folder."""
        label = args[0] if args else '.'
        node = self._shell.vfs.get_node(self._resolve(label))
        if node is None:
            raise ShellCommandError('du', f"cannot access '{label}': no such file or directory")

        if isinstance(node, FolderNode):
            total = sum(child.size for child in node.children if child.is_file)
        else:
            total = node.size

        return f"{format_size(total)}\t{label}"

    # File operations

    def cmd_mkdir(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Create directories."""
        flags, operands = split_flags('mkdir', args, 'p')
        if not operands:
            raise ShellCommandError('mkdir', "missing operand")

        vfs = self._shell.vfs
        for operand in operands:
            path = self._resolve(operand)
            if 'p' not in flags:
                self._shell.create_folder(path)
                continue

            current = '/'
            for name in PathResolver.components(path):
                current = PathResolver.join(current, name)
                if not vfs.exists(current):
                    self._shell.create_folder(current)
                elif not vfs.is_folder(current):
                    raise NotAFolderError(current)
        return ''

    def cmd_rmdir(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Remove empty directories."""
        if not args:
            raise ShellCommandError('rmdir', "missing operand")

        vfs = self._shell.vfs
        for operand in args:
            path = self._resolve(operand)
            if path != '/' and vfs.list_children(path):
                raise DirectoryNotEmptyError(path)
            self._shell.delete_node(path)
        return ''

    def cmd_touch(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Create empty files; existing paths are left untouched."""
        if not args:
            raise ShellCommandError('touch', "missing file operand")

        for operand in args:
            path = self._resolve(operand)
            if not self._shell.vfs.exists(path):
                self._shell.create_file(path, '')
        return ''

    def cmd_rm(self, args: List[str], stdin: Optional[str] = None) -> str:
        """
        Remove files and folders.

        Folders are removed with their contents whether or not -r is
        given.
        """
        flags, operands = split_flags('rm', args, 'rRf')
        if not operands:
            if 'f' in flags:
                return ''
            raise ShellCommandError('rm', "missing operand")

        for operand in operands:
            path = self._resolve(operand)
            if path != '/' and not self._shell.vfs.exists(path):
                if 'f' in flags:
                    continue
                raise ShellCommandError('rm', f"cannot remove '{operand}': no such file or directory")
            self._shell.delete_node(path)
        return ''

    def _transfer_targets(self, command: str, operands: List[str]) -> List[Tuple[str, str, str]]:
        """
        Work out (operand, source path, target path) for cp and mv.

        A destination that is an existing folder receives the sources
        under their own names.
        """
        if not operands:
            raise ShellCommandError(command, "missing file operand")
        if len(operands) == 1:
            raise ShellCommandError(command, f"missing destination file operand after '{operands[0]}'")

        vfs = self._shell.vfs
        *sources, destination = operands
        dest_path = self._resolve(destination)
        into_folder = vfs.is_folder(dest_path)

        if len(sources) > 1 and not into_folder:
            raise ShellCommandError(command, f"target '{destination}' is not a directory")

        targets = []
        for operand in sources:
            source = self._resolve(operand)
            if not vfs.exists(source):
                raise ShellCommandError(command, f"cannot stat '{operand}': no such file or directory")
            target = PathResolver.join(dest_path, PathResolver.basename(source)) if into_folder else dest_path
            if target == source:
                raise ShellCommandError(command, f"'{operand}' and '{destination}' are the same file")
            targets.append((operand, source, target))
        return targets

    def cmd_cp(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Copy files, and folders with -r."""
        flags, operands = split_flags('cp', args, 'rR')
        vfs = self._shell.vfs

        for operand, source, target in self._transfer_targets('cp', operands):
            if vfs.is_folder(source) and not flags & {'r', 'R'}:
                raise ShellCommandError('cp', f"-r not specified; omitting directory '{operand}'")
            if vfs.is_file(source) and vfs.is_file(target):
                self._shell.update_file(target, vfs.get_file_content(source))
            else:
                self._shell.copy_node(source, target)
        return ''

    def cmd_mv(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Move or rename files and folders."""
        _, operands = split_flags('mv', args, '')
        for _, source, target in self._transfer_targets('mv', operands):
            self._shell.move_node(source, target)
        return ''

    # Text processing

    def cmd_cat(self, args: List[str], stdin: Optional[str] = None) -> str:
        """
        Concatenate files.

        Every operand is checked; if any is missing or a folder, the
        command fails with one line per bad operand and prints no data.
        """
        if not args:
            if stdin is None:
                raise ShellCommandError('cat', "missing file operand")
            return stdin

        vfs = self._shell.vfs
        output = ''
        failures = []

        for operand in args:
            path = self._resolve(operand)
            if not vfs.exists(path):
                failures.append(f"{operand}: no such file or directory")
            elif vfs.is_folder(path):
                failures.append(f"{operand}: is a directory")
            else:
                output += vfs.get_file_content(path)

        if failures:
            raise ShellCommandError('cat', "\ncat: ".join(failures))

        return output

    def cmd_echo(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Print arguments."""
        return ' '.join(args)

    def cmd_grep(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Print lines matching a regular expression, with line numbers."""
        flags, operands = split_flags('grep', args, 'in')
        if not operands:
            raise ShellCommandError('grep', "usage: grep [-i] <pattern> [file]...")

        pattern, files = operands[0], operands[1:]
        try:
            regex = re.compile(pattern, re.IGNORECASE if 'i' in flags else 0)
        except re.error:
            raise ShellCommandError('grep', f"invalid pattern: {pattern}")

        sources = self._read_inputs('grep', files, stdin)
        show_name = len(sources) > 1

        matches = []
        for name, text in sources:
            for number, line in enumerate(text.splitlines(), start=1):
                if regex.search(line):
                    prefix = f"{name}:" if show_name else ''
                    matches.append(f"{prefix}{number}:{line}")
        return '\n'.join(matches)

    def _slice_lines(self, command: str, args: List[str], stdin: Optional[str], head: bool) -> str:
        sources = self._read_inputs(command, args, stdin)
        blocks = []
        for name, text in sources:
            lines = text.splitlines()
            selected = lines[:HEAD_TAIL_LINES] if head else lines[-HEAD_TAIL_LINES:]
            block = '\n'.join(selected)
            if len(sources) > 1:
                block = f"==> {name} <==\n{block}"
            blocks.append(block)
        return '\n\n'.join(blocks)

    def cmd_head(self, args: List[str], stdin: Optional[str] = None) -> str:
        """First 10 lines."""
        return self._slice_lines('head', args, stdin, head=True)

    def cmd_tail(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Last 10 lines."""
        return self._slice_lines('tail', args, stdin, head=False)

    def cmd_wc(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Count lines, words and characters."""
        sources = self._read_inputs('wc', args, stdin)

        def row(lines: int, words: int, chars: int, name: Optional[str]) -> str:
            text = f"{lines:>7} {words:>7} {chars:>7}"
            return f"{text} {name}" if name else text

        rows = []
        totals = [0, 0, 0]
        for name, text in sources:
            counts = (len(text.splitlines()), len(text.split()), len(text))
            totals = [a + b for a, b in zip(totals, counts)]
            rows.append(row(*counts, name))

        if len(sources) > 1:
            rows.append(row(*totals, 'total'))
        return '\n'.join(rows)

    def cmd_sort(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Sort lines."""
        flags, operands = split_flags('sort', args, 'r')
        lines: List[str] = []
        for _, text in self._read_inputs('sort', operands, stdin):
            lines.extend(text.splitlines())
        return '\n'.join(sorted(lines, reverse='r' in flags))

    def cmd_uniq(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Collapse adjacent duplicate lines."""
        flags, operands = split_flags('uniq', args, 'c')
        lines: List[str] = []
        for _, text in self._read_inputs('uniq', operands, stdin):
            lines.extend(text.splitlines())

        groups: List[List] = []
        for line in lines:
            if groups and groups[-1][0] == line:
                groups[-1][1] += 1
            else:
                groups.append([line, 1])

        if 'c' in flags:
            return '\n'.join(f"{count:>7} {line}" for line, count in groups)
        return '\n'.join(line for line, _ in groups)

    # Environment

    def cmd_whoami(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Display current user."""
        return self._shell.environ.get('USER', self._shell.config.user)

    def cmd_date(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Display current date/time."""
        return datetime.now().astimezone().strftime('%a %b %d %H:%M:%S %Z %Y')

    def cmd_env(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Display environment."""
        return '\n'.join(f"{key}={value}" for key, value in self._shell.environ.items())

    def cmd_export(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Set environment variables."""
        if not args:
            return self.cmd_env([])

        for arg in args:
            name, sep, value = arg.partition('=')
            if not IDENTIFIER.match(name):
                raise ShellCommandError('export', f"'{arg}': not a valid identifier")
            if sep:
                self._shell.set_variable(name, value)
            else:
                self._shell.set_variable(name, self._shell.get_variable(name) or '')
        return ''

    def cmd_which(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Locate commands."""
        if not args:
            raise ShellCommandError('which', "missing command name")

        found = []
        for name in args:
            if not self.is_builtin(name):
                search_path = self._shell.environ.get('PATH', '')
                raise ShellCommandError('which', f"no {name} in ({search_path})")
            found.append(f"/bin/{name}")
        return '\n'.join(found)

    # Shell

    def cmd_history(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Display command history."""
        return '\n'.join(
            f"{number:>5}  {line}"
            for number, line in enumerate(self._shell.history.entries(), start=1)
        )

    def cmd_man(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Show a manual entry."""
        if not args:
            raise ShellCommandError('man', "what manual page do you want?")

        name = 'exit' if args[0] == 'quit' else args[0]
        if name not in COMMAND_DOCS:
            raise ShellCommandError('man', f"no manual entry for {args[0]}")

        synopsis, summary, section = COMMAND_DOCS[name]
        return '\n'.join([
            f"{name.upper()}(1)",
            "",
            "NAME",
            f"    {name} - {summary}",
            "",
            "SYNOPSIS",
            f"    {synopsis}",
            "",
            "SECTION",
            f"    {section}",
        ])

    def cmd_help(self, args: List[str], stdin: Optional[str] = None) -> str:
        """List available commands."""
        config = self._shell.config
        lines = [f"{config.hostname} shell - built-in commands", ""]
        for section in HELP_SECTIONS:
            lines.append(f"{section}:")
            for name, (synopsis, summary, doc_section) in COMMAND_DOCS.items():
                if doc_section == section:
                    lines.append(f"  {synopsis:<32} {summary}")
            lines.append("")
        lines.append("Use 'man <command>' for details. Pipes (|) and redirection (>, >>, <) are supported.")
        return '\n'.join(lines)

    def cmd_clear(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Clear screen."""
        self._shell.request_clear()
        return ''

    def cmd_exit(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Exit the shell."""
        self._shell.request_exit()
        return ''
