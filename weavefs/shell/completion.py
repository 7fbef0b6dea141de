"""
Tab Completion Module

Completes command names in the first position and directory entries
everywhere else.

Author: YSNRFD
Version: 1.0.0
"""

from typing import Optional, List, Tuple, TYPE_CHECKING

from weavefs.exceptions import FileSystemException

if TYPE_CHECKING:
    from .shell import Shell


class Completer:
    """
    Completion suggestions for a partial command line.

    Example:
        >>> completer.complete('hist')
        'ory '
        >>> completer.complete('cd Docu')
        'ments/'
    """

    def __init__(self, shell: 'Shell'):
        self._shell = shell

    def _matches(self, line: str) -> Tuple[str, List[Tuple[str, bool]]]:
        """
        Find matches for the word being typed.

        Returns:
            Tuple of (typed prefix, [(name, is_folder), ...])
        """
        if ' ' not in line.lstrip():
            prefix = line.lstrip()
            names = sorted(
                name for name in self._shell.builtins.command_names()
                if name.startswith(prefix)
            )
            return prefix, [(name, False) for name in names]

        partial = line.rsplit(' ', 1)[1]
        if '/' in partial:
            directory, prefix = partial.rsplit('/', 1)
            directory = directory or '/'
        else:
            directory, prefix = '.', partial

        try:
            entries = self._shell.vfs.list_children(self._shell.resolve_path(directory))
        except FileSystemException:
            return prefix, []

        matches = [
            (entry.name, entry.is_folder)
            for entry in entries
            if entry.name.startswith(prefix)
            and (prefix.startswith('.') or not entry.name.startswith('.'))
        ]
        return prefix, sorted(matches)

    def candidates(self, line: str) -> List[str]:
        """All matching names; folders carry a trailing slash."""
        _, matches = self._matches(line)
        return [name + '/' if is_folder else name for name, is_folder in matches]

    def complete(self, line: str) -> Optional[str]:
        """
        The text to append when exactly one match exists.

        Folders get a trailing '/', commands and files a trailing space.
        Returns None when there is no match or more than one.
        """
        prefix, matches = self._matches(line)
        if len(matches) != 1:
            return None
        name, is_folder = matches[0]
        return name[len(prefix):] + ('/' if is_folder else ' ')
