"""
VFS Sync Service

Publish/subscribe facade over the tree store. Every UI surface (file
manager, terminal, editor) mutates through this service so that all of
them observe the same changes.

For each successful mutation the service:
1. Applies it to the tree store (which saves it)
2. Appends an operation record to a bounded history
3. Invokes the matching callback on every registered listener

Failed mutations are neither recorded nor announced; the tree store's
error propagates unchanged. A save failure is the exception: the tree
already changed, so the operation is recorded and announced before the
PersistenceError is re-raised.

Author: YSNRFD
Version: 1.0.0
"""

from collections import deque
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Deque

from .events import OperationType, Source, VFSOperation
from weavefs.filesystem.nodes import FileNode, FolderNode, Node, NodeType
from weavefs.filesystem.path_resolver import PathResolver
from weavefs.filesystem.vfs import VirtualFileSystem
from weavefs.persistence.serializer import node_to_dict
from weavefs.exceptions import PersistenceError
from weavefs.logger import Logger, get_logger


DEFAULT_REQUIRED_FOLDERS = ['/Desktop', '/Documents', '/Downloads']


class VFSSyncService:
    """
    Notification layer over a shared VirtualFileSystem.

    Example:
        >>> sync = VFSSyncService(vfs)
        >>> unsubscribe = sync.add_listener(file_manager_view)
        >>> sync.create_file('/Desktop/todo.txt', 'milk', source='texteditor')
        >>> unsubscribe()
    """

    def __init__(
        self,
        vfs: VirtualFileSystem,
        max_history: int = 1000,
        logger: Optional[Logger] = None
    ):
        self._vfs = vfs
        self._listeners: List[Any] = []
        self._history: Deque[VFSOperation] = deque(maxlen=max_history)
        self._logger = logger or get_logger('sync')

    @property
    def vfs(self) -> VirtualFileSystem:
        return self._vfs

    @property
    def max_history(self) -> int:
        return self._history.maxlen

    # ------------------------------------------------------------------
    # Listeners

    def add_listener(self, listener: Any) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A function that unregisters the listener when called
        """
        self._listeners.append(listener)
        self._logger.debug(
            "Listener added",
            context={'listener': type(listener).__name__, 'count': len(self._listeners)}
        )

        def unsubscribe() -> None:
            self.remove_listener(listener)

        return unsubscribe

    def remove_listener(self, listener: Any) -> bool:
        """Unregister a listener; False if it was not registered."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def clear_listeners(self) -> None:
        """Unregister every listener."""
        self._listeners.clear()

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    # ------------------------------------------------------------------
    # Recording and dispatch

    def _commit(self, action: Callable[[], Any], operation: VFSOperation) -> Any:
        try:
            result = action()
        except PersistenceError:
            self._publish(operation)
            raise
        self._publish(operation)
        return result

    def _publish(self, operation: VFSOperation) -> None:
        self._history.append(operation)
        self._logger.debug(
            "Operation recorded",
            context={
                'type': operation.type.value,
                'path': operation.path,
                'source': operation.source,
            }
        )
        self._notify(operation)

    def _notify(self, operation: VFSOperation) -> None:
        is_file = operation.node_type is NodeType.FILE

        if operation.type is OperationType.CREATE:
            if is_file:
                callback, args = 'on_file_created', (operation.path, operation.content, operation.source)
            else:
                callback, args = 'on_folder_created', (operation.path, operation.source)
        elif operation.type is OperationType.UPDATE:
            callback, args = 'on_file_updated', (operation.path, operation.content, operation.source)
        elif operation.type is OperationType.DELETE:
            callback = 'on_file_deleted' if is_file else 'on_folder_deleted'
            args = (operation.path, operation.source)
        elif operation.type is OperationType.MOVE:
            callback, args = 'on_file_moved', (operation.path, operation.new_path, operation.source)
        elif operation.type is OperationType.COPY:
            callback, args = 'on_file_copied', (operation.path, operation.new_path, operation.source)
        else:
            raise ValueError(f"Unknown operation type: {operation.type}")

        for listener in list(self._listeners):
            handler = getattr(listener, callback, None)
            if not callable(handler):
                continue
            try:
                handler(*args)
            except Exception as e:
                self._logger.warning(
                    "Listener callback failed",
                    context={
                        'listener': type(listener).__name__,
                        'callback': callback,
                        'error': repr(e),
                    }
                )

    # ------------------------------------------------------------------
    # Mutations

    def create_file(self, path: str, content: str = "", source: str = Source.SYSTEM) -> FileNode:
        """Create a file and announce it."""
        path = PathResolver.normalize(path)
        operation = VFSOperation(
            type=OperationType.CREATE,
            path=path,
            source=source,
            node_type=NodeType.FILE,
            content=content,
        )
        return self._commit(lambda: self._vfs.create_file(path, content), operation)

    def create_folder(self, path: str, source: str = Source.SYSTEM) -> FolderNode:
        """Create a folder and announce it."""
        path = PathResolver.normalize(path)
        operation = VFSOperation(
            type=OperationType.CREATE,
            path=path,
            source=source,
            node_type=NodeType.FOLDER,
        )
        return self._commit(lambda: self._vfs.create_folder(path), operation)

    def update_file(self, path: str, content: str, source: str = Source.SYSTEM) -> FileNode:
        """Replace a file's content and announce it."""
        path = PathResolver.normalize(path)
        operation = VFSOperation(
            type=OperationType.UPDATE,
            path=path,
            source=source,
            node_type=NodeType.FILE,
            content=content,
        )
        return self._commit(lambda: self._vfs.update_file(path, content), operation)

    def delete_node(self, path: str, source: str = Source.SYSTEM) -> Node:
        """Delete a file or folder (with its subtree) and announce it."""
        path = PathResolver.normalize(path)
        node_type = self._vfs.get_node_type(path) or NodeType.FILE
        operation = VFSOperation(
            type=OperationType.DELETE,
            path=path,
            source=source,
            node_type=node_type,
        )
        return self._commit(lambda: self._vfs.delete_node(path), operation)

    def move_node(self, old_path: str, new_path: str, source: str = Source.SYSTEM) -> Node:
        """Move or rename a node and announce it."""
        old_path = PathResolver.normalize(old_path)
        new_path = PathResolver.normalize(new_path)
        node_type = self._vfs.get_node_type(old_path) or NodeType.FILE
        operation = VFSOperation(
            type=OperationType.MOVE,
            path=old_path,
            new_path=new_path,
            source=source,
            node_type=node_type,
        )
        return self._commit(lambda: self._vfs.move_node(old_path, new_path), operation)

    def copy_file(self, source_path: str, target_path: str, source: str = Source.SYSTEM) -> Node:
        """Copy a file or folder and announce it."""
        source_path = PathResolver.normalize(source_path)
        target_path = PathResolver.normalize(target_path)
        node_type = self._vfs.get_node_type(source_path) or NodeType.FILE
        operation = VFSOperation(
            type=OperationType.COPY,
            path=source_path,
            new_path=target_path,
            source=source,
            node_type=node_type,
        )
        return self._commit(lambda: self._vfs.copy_node(source_path, target_path), operation)

    # ------------------------------------------------------------------
    # Reads (not recorded, not announced)

    def get_node(self, path: str) -> Optional[Node]:
        return self._vfs.get_node(path)

    def list_dir(self, path: str) -> List[Node]:
        return self._vfs.list_children(path)

    def get_file_content(self, path: str) -> str:
        return self._vfs.get_file_content(path)

    def exists(self, path: str) -> bool:
        return self._vfs.exists(path)

    def is_file(self, path: str) -> bool:
        return self._vfs.is_file(path)

    def is_folder(self, path: str) -> bool:
        return self._vfs.is_folder(path)

    # ------------------------------------------------------------------
    # History and diagnostics

    def get_operation_history(self, limit: Optional[int] = None) -> List[VFSOperation]:
        """Recorded operations, oldest first."""
        history = list(self._history)
        if limit is not None:
            history = history[-limit:] if limit > 0 else []
        return history

    def get_operations_by_source(self, source: str, limit: int = 10) -> List[VFSOperation]:
        """The most recent operations from one source, oldest first."""
        matching = [op for op in self._history if op.source == source]
        return matching[-limit:] if limit > 0 else []

    def clear_history(self) -> None:
        """Forget all recorded operations."""
        self._history.clear()

    def export_state(self) -> dict[str, Any]:
        """Snapshot of the tree, its statistics and the operation history."""
        return {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'tree': node_to_dict(self._vfs.snapshot()),
            'stats': self._vfs.get_stats(),
            'history': [op.to_dict() for op in self._history],
            'listeners': len(self._listeners),
        }

    def validate_integrity(
        self,
        required_folders: Optional[List[str]] = None
    ) -> dict[str, Any]:
        """
        Check the tree for structural problems.

        Verifies that the required folders exist, that sibling names are
        unique and non-empty, and that every file's size matches its
        content.

        Returns:
            {'valid': bool, 'issues': [str, ...]}
        """
        issues: List[str] = []

        if required_folders is None:
            required_folders = DEFAULT_REQUIRED_FOLDERS
        for path in required_folders:
            if not self._vfs.is_folder(path):
                issues.append(f"missing required folder: {path}")

        def check(folder: FolderNode, path: str) -> None:
            seen = set()
            for child in folder.children:
                child_path = PathResolver.join(path, child.name)
                if not child.name or '/' in child.name:
                    issues.append(f"invalid name in {path}: {child.name!r}")
                if child.name in seen:
                    issues.append(f"duplicate name: {child_path}")
                seen.add(child.name)
                if isinstance(child, FileNode):
                    if child.size != len(child.content):
                        issues.append(f"size mismatch: {child_path}")
                elif isinstance(child, FolderNode):
                    check(child, child_path)

        check(self._vfs.snapshot(), '/')

        if issues:
            self._logger.warning("Integrity check failed", context={'issues': len(issues)})

        return {'valid': not issues, 'issues': issues}
