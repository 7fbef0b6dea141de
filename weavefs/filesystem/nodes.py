"""
Node Module

The two node variants of the tree: files holding text content and
folders owning an ordered list of children.

Author: YSNRFD
Version: 1.0.0
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import ClassVar, Optional, List, Union

from .path_resolver import PathResolver


class NodeType(Enum):
    """Node variants."""
    FILE = "file"
    FOLDER = "folder"


def utcnow() -> datetime:
    """Timestamp source for node creation and modification."""
    return datetime.now(timezone.utc)


@dataclass
class FileNode:
    """
    A file in the tree.

    ``size`` always equals ``len(content)``; use set_content() rather
    than assigning content directly.
    """

    node_type: ClassVar[NodeType] = NodeType.FILE

    name: str
    content: str = ""
    size: int = 0
    created: datetime = field(default_factory=utcnow)
    modified: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        self.size = len(self.content)

    @property
    def extension(self) -> str:
        return PathResolver.extension(self.name)

    @property
    def is_file(self) -> bool:
        return True

    @property
    def is_folder(self) -> bool:
        return False

    def set_content(self, content: str, when: Optional[datetime] = None) -> None:
        """Replace content, recompute size and bump modified."""
        self.content = content
        self.size = len(content)
        self.modified = when or utcnow()

    def copy(self) -> 'FileNode':
        """Detached copy with identical timestamps."""
        return copy.deepcopy(self)


@dataclass
class FolderNode:
    """
    A folder in the tree.

    Children keep insertion order and names are unique among them.
    """

    node_type: ClassVar[NodeType] = NodeType.FOLDER

    name: str
    children: List['Node'] = field(default_factory=list)
    created: datetime = field(default_factory=utcnow)
    modified: datetime = field(default_factory=utcnow)

    @property
    def is_file(self) -> bool:
        return False

    @property
    def is_folder(self) -> bool:
        return True

    def child_index(self, name: str) -> int:
        """Position of the named child, or -1."""
        for index, child in enumerate(self.children):
            if child.name == name:
                return index
        return -1

    def get_child(self, name: str) -> Optional['Node']:
        """Look up a direct child by name."""
        index = self.child_index(name)
        return self.children[index] if index >= 0 else None

    def add_child(self, node: 'Node', when: Optional[datetime] = None) -> None:
        """Append a child and bump modified. Callers check uniqueness."""
        self.children.append(node)
        self.modified = when or utcnow()

    def remove_child(self, name: str, when: Optional[datetime] = None) -> Optional['Node']:
        """Detach the named child and bump modified."""
        index = self.child_index(name)
        if index < 0:
            return None
        node = self.children.pop(index)
        self.modified = when or utcnow()
        return node

    def copy(self) -> 'FolderNode':
        """Detached deep copy of the whole subtree."""
        return copy.deepcopy(self)


Node = Union[FileNode, FolderNode]


def clone_node(node: Node, name: str, when: Optional[datetime] = None) -> Node:
    """
    Copy a node under a new name with fresh timestamps throughout.

    Folders are copied recursively; the result shares nothing with the
    source.
    """
    when = when or utcnow()
    if isinstance(node, FileNode):
        return FileNode(name=name, content=node.content, created=when, modified=when)
    if isinstance(node, FolderNode):
        return FolderNode(
            name=name,
            children=[clone_node(child, child.name, when) for child in node.children],
            created=when,
            modified=when,
        )
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def count_nodes(node: Node) -> tuple[int, int, int]:
    """Return (files, folders, total size) for a subtree, node included."""
    if isinstance(node, FileNode):
        return 1, 0, node.size
    if isinstance(node, FolderNode):
        files, folders, size = 0, 1, 0
        for child in node.children:
            f, d, s = count_nodes(child)
            files += f
            folders += d
            size += s
        return files, folders, size
    raise TypeError(f"Unknown node type: {type(node).__name__}")
