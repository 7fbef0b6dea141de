"""
Path Resolver Module

Pure string transforms over slash-separated paths. Nothing here touches
the tree and nothing here raises: every input maps to a canonical
absolute path.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass
from typing import List, Tuple


ROOT = '/'


@dataclass
class ParsedPath:
    """A parsed path with its components."""
    is_absolute: bool
    components: List[str]

    def __str__(self) -> str:
        if self.is_absolute:
            return '/' + '/'.join(self.components)
        return '/'.join(self.components) if self.components else '.'


class PathResolver:
    """
    Resolves and manipulates file system paths.

    Handles:
    - Absolute and relative paths
    - . and .. components (.. is capped at the root)
    - Repeated and trailing slashes

    Example:
        >>> PathResolver.normalize('//a//b/../c/')
        '/a/c'
        >>> PathResolver.resolve('notes.txt', '/Documents')
        '/Documents/notes.txt'
    """

    @staticmethod
    def parse(path: str) -> ParsedPath:
        """
        Parse a path into components.

        Empty components and '.' are dropped; '..' is kept for
        normalize() to resolve.
        """
        is_absolute = path.startswith('/')
        components = [c for c in path.split('/') if c and c != '.']
        return ParsedPath(is_absolute=is_absolute, components=components)

    @staticmethod
    def normalize(path: str) -> str:
        """
        Canonicalize a path.

        The result always has a leading slash and no trailing slash,
        except the root which is exactly '/'. An empty string is the root.

        Args:
            path: Path to normalize

        Returns:
            Canonical absolute path
        """
        result: List[str] = []

        for component in PathResolver.parse(path).components:
            if component == '..':
                if result:
                    result.pop()
            else:
                result.append(component)

        return '/' + '/'.join(result)

    @staticmethod
    def resolve(path: str, cwd: str = ROOT) -> str:
        """
        Resolve a path relative to a current working directory.

        Args:
            path: Absolute or relative path
            cwd: Current working directory (absolute)

        Returns:
            Canonical absolute path
        """
        if PathResolver.is_absolute(path):
            return PathResolver.normalize(path)

        base = '' if cwd in ('', ROOT) else cwd.rstrip('/')
        return PathResolver.normalize(f"{base}/{path}")

    @staticmethod
    def join(*paths: str) -> str:
        """
        Join path components; an absolute component restarts the path.

        Example:
            >>> PathResolver.join('/Documents', 'Notes', 'todo.txt')
            '/Documents/Notes/todo.txt'
        """
        if not paths:
            return ROOT

        result = paths[0]

        for path in paths[1:]:
            if path.startswith('/'):
                result = path
            else:
                result = result.rstrip('/') + '/' + path

        return PathResolver.normalize(result)

    @staticmethod
    def dirname(path: str) -> str:
        """Get the parent portion of a path ('/' for the root)."""
        normalized = PathResolver.normalize(path)

        if normalized == ROOT:
            return ROOT

        return normalized.rsplit('/', 1)[0] or ROOT

    @staticmethod
    def basename(path: str) -> str:
        """Get the final segment of a path ('/' for the root)."""
        normalized = PathResolver.normalize(path)

        if normalized == ROOT:
            return ROOT

        return normalized.rsplit('/', 1)[1]

    @staticmethod
    def split(path: str) -> Tuple[str, str]:
        """Split a path into (dirname, basename)."""
        return (PathResolver.dirname(path), PathResolver.basename(path))

    @staticmethod
    def extension(name: str) -> str:
        """
        Get the extension of a file name, without the dot.

        Everything after the last '.' counts, so '.bashrc' has the
        extension 'bashrc' and 'archive.tar.gz' has 'gz'.
        """
        if '.' not in name:
            return ''
        return name.rsplit('.', 1)[1]

    @staticmethod
    def is_absolute(path: str) -> bool:
        """Check if a path is absolute."""
        return path.startswith('/')

    @staticmethod
    def is_within(path: str, ancestor: str) -> bool:
        """Check whether path equals ancestor or lies beneath it."""
        path = PathResolver.normalize(path)
        ancestor = PathResolver.normalize(ancestor)
        if ancestor == ROOT:
            return True
        return path == ancestor or path.startswith(ancestor + '/')

    @staticmethod
    def components(path: str) -> List[str]:
        """Get the segments of the canonical form of a path."""
        normalized = PathResolver.normalize(path)
        if normalized == ROOT:
            return []
        return normalized[1:].split('/')
