"""
WeaveFS Filesystem

The node model, path handling and the in-memory tree store.
"""

from .path_resolver import PathResolver, ParsedPath, ROOT
from .nodes import FileNode, FolderNode, Node, NodeType
from .vfs import VirtualFileSystem, FileSearch
from .defaults import seed_default_structure, DEFAULT_FOLDERS, DEFAULT_FILES

__all__ = [
    "PathResolver",
    "ParsedPath",
    "ROOT",
    "FileNode",
    "FolderNode",
    "Node",
    "NodeType",
    "VirtualFileSystem",
    "FileSearch",
    "seed_default_structure",
    "DEFAULT_FOLDERS",
    "DEFAULT_FILES",
]
