"""
Virtual File System (VFS) Module

The tree store: an in-memory hierarchy of folders and text files with
CRUD primitives over normalized paths.

- Every mutation either applies fully or raises before touching the tree
- Every successful mutation is handed to the storage backend, if any
- Reads hand out detached copies, never live nodes

Deleting a folder removes its whole subtree without checking whether it
is empty. Callers that want an emptiness guard (``rmdir``) check first.

Author: YSNRFD
Version: 1.0.0
"""

import re
from typing import Optional, Any, List, Iterator, Tuple, TYPE_CHECKING

from .nodes import (
    FileNode,
    FolderNode,
    Node,
    NodeType,
    clone_node,
    count_nodes,
    utcnow,
)
from .path_resolver import PathResolver, ROOT
from weavefs.exceptions import (
    NodeNotFoundError,
    NodeExistsError,
    InvalidPathError,
    NotAFileError,
    NotAFolderError,
    CannotDeleteRootError,
    CannotMoveRootError,
    PersistenceException,
    PersistenceError,
)
from weavefs.logger import Logger, get_logger

if TYPE_CHECKING:
    from weavefs.persistence.base import StorageBackend


ANALYSIS_TOP = 10


def glob_to_regex(pattern: str) -> 're.Pattern[str]':
    """
    Compile a simplified glob where '*' matches any run of characters.

    Matching is case-insensitive and covers the whole name.
    """
    parts = [re.escape(piece) for piece in pattern.split('*')]
    return re.compile('.*'.join(parts), re.IGNORECASE)


class FileSearch:
    """
    Lazy, restartable search for files by name.

    Each iteration walks the live tree again, so results reflect the
    tree at the time iteration starts. Do not mutate the tree while
    iterating.
    """

    def __init__(self, vfs: 'VirtualFileSystem', pattern: str, start: str = ROOT):
        self._vfs = vfs
        self.pattern = pattern
        self.start = PathResolver.normalize(start)
        self._regex = glob_to_regex(pattern)

    def __iter__(self) -> Iterator[str]:
        node = self._vfs._lookup(self.start)
        if node is None:
            return
        if isinstance(node, FileNode):
            if self._regex.fullmatch(node.name):
                yield self.start
            return
        yield from self._search(node, self.start)

    def _search(self, folder: FolderNode, path: str) -> Iterator[str]:
        # files of a folder come before anything found in its subfolders
        for child in folder.children:
            if isinstance(child, FileNode) and self._regex.fullmatch(child.name):
                yield PathResolver.join(path, child.name)
        for child in folder.children:
            if isinstance(child, FolderNode):
                yield from self._search(child, PathResolver.join(path, child.name))

    def __repr__(self) -> str:
        return f"FileSearch(pattern={self.pattern!r}, start={self.start!r})"


class VirtualFileSystem:
    """
    In-memory tree store.

    Paths passed in are normalized before use, so callers may pass any
    absolute path. Relative resolution against a working directory is
    the shell's job.

    Example:
        >>> vfs = VirtualFileSystem()
        >>> vfs.create_folder('/Documents')
        >>> vfs.create_file('/Documents/notes.txt', 'hello')
        >>> vfs.get_file_content('/Documents/notes.txt')
        'hello'
    """

    def __init__(
        self,
        storage: Optional['StorageBackend'] = None,
        logger: Optional[Logger] = None
    ):
        self._root = FolderNode(name=ROOT)
        self._storage = storage
        self._logger = logger or get_logger('vfs')

    @property
    def storage(self) -> Optional['StorageBackend']:
        return self._storage

    # ------------------------------------------------------------------
    # Persistence

    def load(self) -> bool:
        """
        Replace the tree with the backend's saved state.

        Returns:
            True if saved state was found, False if there is none

        Raises:
            PersistenceException: If saved state exists but is unreadable
        """
        if self._storage is None:
            return False

        root = self._storage.load()
        if root is None:
            self._logger.info("No saved tree found")
            return False

        root.name = ROOT
        self._root = root
        stats = self.get_stats()
        self._logger.info("Tree loaded", context=stats)
        return True

    def save(self) -> None:
        """
        Write the whole tree to the storage backend.

        Raises:
            PersistenceError: If the backend fails
        """
        if self._storage is None:
            return

        try:
            self._storage.save(self._root)
        except PersistenceException as e:
            self._logger.error("Save failed", context={'error': e.message})
            raise
        except Exception as e:
            self._logger.error("Save failed", context={'error': str(e)})
            raise PersistenceError(
                f"Cannot save tree: {e}",
                backend=type(self._storage).__name__
            ) from e

    # ------------------------------------------------------------------
    # Lookup helpers

    def _lookup(self, path: str) -> Optional[Node]:
        """Walk from the root; None if a segment is missing or is a file."""
        node: Node = self._root
        for name in PathResolver.components(path):
            if not isinstance(node, FolderNode):
                return None
            child = node.get_child(name)
            if child is None:
                return None
            node = child
        return node

    def _require(self, path: str) -> Node:
        node = self._lookup(path)
        if node is None:
            raise NodeNotFoundError(path)
        return node

    def _require_folder(self, path: str) -> FolderNode:
        node = self._require(path)
        if not isinstance(node, FolderNode):
            raise NotAFolderError(path)
        return node

    def _require_file(self, path: str) -> FileNode:
        node = self._require(path)
        if not isinstance(node, FileNode):
            raise NotAFileError(path)
        return node

    def _prepare_create(self, path: str) -> Tuple[str, FolderNode, str]:
        """
        Validate a create target.

        Returns:
            Tuple of (normalized path, parent folder, new name)
        """
        resolved = PathResolver.normalize(path)
        if resolved == ROOT:
            raise NodeExistsError(resolved)

        parent_path, name = PathResolver.split(resolved)
        if not name:
            raise InvalidPathError(resolved, reason="empty name")

        parent = self._require_folder(parent_path)
        if parent.get_child(name) is not None:
            raise NodeExistsError(resolved)

        return resolved, parent, name

    # ------------------------------------------------------------------
    # Reads

    def get_node(self, path: str) -> Optional[Node]:
        """Get a detached copy of the node at path, or None."""
        node = self._lookup(PathResolver.normalize(path))
        return node.copy() if node is not None else None

    def get_node_type(self, path: str) -> Optional[NodeType]:
        """Get the variant of the node at path without copying it."""
        node = self._lookup(PathResolver.normalize(path))
        return node.node_type if node is not None else None

    def list_children(self, path: str) -> List[Node]:
        """
        List the children of a folder, in insertion order.

        Raises:
            NodeNotFoundError: If the path does not resolve
            NotAFolderError: If the path is a file
        """
        folder = self._require_folder(PathResolver.normalize(path))
        return [child.copy() for child in folder.children]

    def exists(self, path: str) -> bool:
        """Check if a node exists at path."""
        return self._lookup(PathResolver.normalize(path)) is not None

    def is_file(self, path: str) -> bool:
        """Check if path is a file."""
        return isinstance(self._lookup(PathResolver.normalize(path)), FileNode)

    def is_folder(self, path: str) -> bool:
        """Check if path is a folder."""
        return isinstance(self._lookup(PathResolver.normalize(path)), FolderNode)

    def get_file_content(self, path: str) -> str:
        """
        Read a file.

        Raises:
            NodeNotFoundError: If the path does not resolve
            NotAFileError: If the path is a folder
        """
        return self._require_file(PathResolver.normalize(path)).content

    def get_file_size(self, path: str) -> int:
        """Get the content length of a file."""
        return self._require_file(PathResolver.normalize(path)).size

    def snapshot(self) -> FolderNode:
        """Detached copy of the whole tree."""
        return self._root.copy()

    def walk(self, path: str = ROOT) -> Iterator[Tuple[str, NodeType]]:
        """
        Yield (path, node type) for every node under path, depth-first.

        The starting node itself comes first. Nothing is yielded if the
        path does not resolve.
        """
        start = PathResolver.normalize(path)
        node = self._lookup(start)
        if node is None:
            return

        stack: List[Tuple[str, Node]] = [(start, node)]
        while stack:
            current_path, current = stack.pop()
            yield current_path, current.node_type
            if isinstance(current, FolderNode):
                for child in reversed(current.children):
                    stack.append((PathResolver.join(current_path, child.name), child))

    def find_files(self, pattern: str, start: str = ROOT) -> FileSearch:
        """
        Find files whose name matches a simplified glob.

        Returns:
            A restartable iterable of absolute paths
        """
        return FileSearch(self, pattern, start)

    def search_content(self, query: str, start: str = ROOT) -> List[dict[str, Any]]:
        """
        Find files under start whose content contains query.

        Matching is case-insensitive. Files come in walk order.

        Returns:
            List of {'path': str, 'matches': int}, one per file with at
            least one non-overlapping occurrence
        """
        if not query:
            return []

        needle = query.lower()
        results = []
        for path, node_type in self.walk(start):
            if node_type is NodeType.FILE:
                matches = self._lookup(path).content.lower().count(needle)
                if matches:
                    results.append({'path': path, 'matches': matches})
        return results

    def analyze_directory(self, path: str = ROOT) -> dict[str, Any]:
        """
        Summarize the subtree at path.

        Returns:
            Dictionary with:
            - total_files, total_folders (path itself included), total_size
            - file_types: count per extension, 'no-extension' for none
            - largest_files: [{'path', 'size'}], biggest first
            - oldest_files: [{'path', 'created'}], earliest first
            - newest_files: [{'path', 'modified'}], latest first
            Each ranking holds at most ANALYSIS_TOP entries.

        Raises:
            NodeNotFoundError: If the path does not resolve
        """
        start = PathResolver.normalize(path)
        self._require(start)

        total_files = total_folders = total_size = 0
        file_types: dict[str, int] = {}
        files: List[Tuple[str, FileNode]] = []

        for node_path, node_type in self.walk(start):
            if node_type is NodeType.FOLDER:
                total_folders += 1
                continue
            node = self._lookup(node_path)
            total_files += 1
            total_size += node.size
            ext = node.extension or 'no-extension'
            file_types[ext] = file_types.get(ext, 0) + 1
            files.append((node_path, node))

        largest = sorted(files, key=lambda item: item[1].size, reverse=True)
        oldest = sorted(files, key=lambda item: item[1].created)
        newest = sorted(files, key=lambda item: item[1].modified, reverse=True)

        return {
            'total_files': total_files,
            'total_folders': total_folders,
            'total_size': total_size,
            'file_types': file_types,
            'largest_files': [
                {'path': p, 'size': n.size} for p, n in largest[:ANALYSIS_TOP]
            ],
            'oldest_files': [
                {'path': p, 'created': n.created} for p, n in oldest[:ANALYSIS_TOP]
            ],
            'newest_files': [
                {'path': p, 'modified': n.modified} for p, n in newest[:ANALYSIS_TOP]
            ],
        }

    def get_stats(self) -> dict[str, Any]:
        """
        Aggregate counts over the whole tree.

        The root itself is counted as a folder.
        """
        files, folders, size = count_nodes(self._root)
        return {
            'file_count': files,
            'folder_count': folders,
            'total_size': size,
        }

    # ------------------------------------------------------------------
    # Mutations

    def create_file(self, path: str, content: str = "") -> FileNode:
        """
        Create a file.

        Raises:
            NodeExistsError: If a sibling with that name exists
            NodeNotFoundError: If the parent does not exist
            NotAFolderError: If the parent is a file
            PersistenceError: If the tree changed but could not be saved
        """
        resolved, parent, name = self._prepare_create(path)

        when = utcnow()
        node = FileNode(name=name, content=content, created=when, modified=when)
        parent.add_child(node, when)

        self._logger.debug(
            "Created file",
            context={'path': resolved, 'size': node.size}
        )
        self.save()
        return node.copy()

    def create_folder(self, path: str) -> FolderNode:
        """
        Create an empty folder.

        Raises:
            NodeExistsError: If a sibling with that name exists
            NodeNotFoundError: If the parent does not exist
            NotAFolderError: If the parent is a file
            PersistenceError: If the tree changed but could not be saved
        """
        resolved, parent, name = self._prepare_create(path)

        when = utcnow()
        node = FolderNode(name=name, created=when, modified=when)
        parent.add_child(node, when)

        self._logger.debug("Created folder", context={'path': resolved})
        self.save()
        return node.copy()

    def update_file(self, path: str, content: str) -> FileNode:
        """
        Replace the content of a file.

        Raises:
            NodeNotFoundError: If the path does not resolve
            NotAFileError: If the path is a folder
            PersistenceError: If the tree changed but could not be saved
        """
        resolved = PathResolver.normalize(path)
        node = self._require_file(resolved)
        node.set_content(content)

        self._logger.debug(
            "Updated file",
            context={'path': resolved, 'size': node.size}
        )
        self.save()
        return node.copy()

    def delete_node(self, path: str) -> Node:
        """
        Remove a node, and with a folder its entire subtree.

        Returns:
            Detached copy of the removed node

        Raises:
            CannotDeleteRootError: If path is the root
            NodeNotFoundError: If the path does not resolve
            PersistenceError: If the tree changed but could not be saved
        """
        resolved = PathResolver.normalize(path)
        if resolved == ROOT:
            raise CannotDeleteRootError()

        self._require(resolved)
        parent = self._require_folder(PathResolver.dirname(resolved))
        node = parent.remove_child(PathResolver.basename(resolved))

        self._logger.debug(
            "Deleted node",
            context={'path': resolved, 'type': node.node_type.value}
        )
        self.save()
        return node

    def move_node(self, old_path: str, new_path: str) -> Node:
        """
        Relocate and/or rename a node.

        Moving a node onto its own path does nothing.

        Raises:
            CannotMoveRootError: If old_path is the root
            NodeNotFoundError: If the source or the new parent is missing
            NodeExistsError: If new_path is taken
            NotAFolderError: If the new parent is a file
            InvalidPathError: If a folder would move into its own subtree
            PersistenceError: If the tree changed but could not be saved
        """
        source = PathResolver.normalize(old_path)
        target = PathResolver.normalize(new_path)

        if source == ROOT:
            raise CannotMoveRootError()

        node = self._require(source)
        if source == target:
            return node.copy()

        if self._lookup(target) is not None:
            raise NodeExistsError(target)

        target_parent_path, target_name = PathResolver.split(target)
        new_parent = self._require_folder(target_parent_path)

        if isinstance(node, FolderNode) and PathResolver.is_within(target, source):
            raise InvalidPathError(target, reason="cannot move a folder into itself")

        old_parent = self._require_folder(PathResolver.dirname(source))

        when = utcnow()
        old_parent.remove_child(node.name, when)
        node.name = target_name
        new_parent.add_child(node, when)

        self._logger.debug(
            "Moved node",
            context={'from': source, 'to': target}
        )
        self.save()
        return node.copy()

    def copy_node(self, source_path: str, target_path: str) -> Node:
        """
        Copy a file or a whole folder to a new path.

        The copy gets fresh timestamps throughout.

        Raises:
            NodeNotFoundError: If the source or the target parent is missing
            NodeExistsError: If target_path is taken
            NotAFolderError: If the target parent is a file
            InvalidPathError: If a folder would be copied into itself
            PersistenceError: If the tree changed but could not be saved
        """
        source = PathResolver.normalize(source_path)
        node = self._require(source)

        target, parent, name = self._prepare_create(target_path)

        if isinstance(node, FolderNode) and PathResolver.is_within(target, source):
            raise InvalidPathError(target, reason="cannot copy a folder into itself")

        when = utcnow()
        clone = clone_node(node, name, when)
        parent.add_child(clone, when)

        self._logger.debug(
            "Copied node",
            context={'from': source, 'to': target}
        )
        self.save()
        return clone.copy()

    def __repr__(self) -> str:
        stats = self.get_stats()
        return (
            f"VirtualFileSystem(files={stats['file_count']}, "
            f"folders={stats['folder_count']}, "
            f"storage={type(self._storage).__name__ if self._storage else None})"
        )
