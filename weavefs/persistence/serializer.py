"""
Tree Serializer

Converts trees to and from plain JSON-compatible dicts. Timestamps are
written as ISO 8601 strings and parsed back into aware datetimes.

Author: YSNRFD
Version: 1.0.0
"""

import json
from datetime import datetime, timezone
from typing import Any

from weavefs.filesystem.nodes import FileNode, FolderNode, Node, NodeType
from weavefs.exceptions import StorageLoadError


def _format_time(value: datetime) -> str:
    return value.isoformat()


def _parse_time(value: Any) -> datetime:
    if not isinstance(value, str):
        raise StorageLoadError(f"Invalid timestamp: {value!r}")
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError as e:
        raise StorageLoadError(f"Invalid timestamp: {value!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def node_to_dict(node: Node) -> dict[str, Any]:
    """Convert a node (and its subtree) to a dict."""
    if isinstance(node, FileNode):
        return {
            'type': NodeType.FILE.value,
            'name': node.name,
            'extension': node.extension,
            'content': node.content,
            'size': node.size,
            'created': _format_time(node.created),
            'modified': _format_time(node.modified),
        }
    if isinstance(node, FolderNode):
        return {
            'type': NodeType.FOLDER.value,
            'name': node.name,
            'children': [node_to_dict(child) for child in node.children],
            'created': _format_time(node.created),
            'modified': _format_time(node.modified),
        }
    raise TypeError(f"Unknown node type: {type(node).__name__}")


def node_from_dict(data: Any) -> Node:
    """
    Rebuild a node from a dict produced by node_to_dict().

    Size and extension are recomputed from name and content.

    Raises:
        StorageLoadError: If the data does not describe a valid tree
    """
    if not isinstance(data, dict):
        raise StorageLoadError(f"Expected an object, got {type(data).__name__}")

    name = data.get('name')
    if not isinstance(name, str) or not name:
        raise StorageLoadError(f"Invalid node name: {name!r}")

    node_type = data.get('type')
    created = _parse_time(data.get('created'))
    modified = _parse_time(data.get('modified'))

    if node_type == NodeType.FILE.value:
        content = data.get('content', '')
        if not isinstance(content, str):
            raise StorageLoadError(f"Invalid content for {name}")
        return FileNode(name=name, content=content, created=created, modified=modified)

    if node_type == NodeType.FOLDER.value:
        raw_children = data.get('children', [])
        if not isinstance(raw_children, list):
            raise StorageLoadError(f"Invalid children for {name}")
        children = [node_from_dict(child) for child in raw_children]
        names = [child.name for child in children]
        if len(names) != len(set(names)):
            raise StorageLoadError(f"Duplicate child names in {name}")
        return FolderNode(name=name, children=children, created=created, modified=modified)

    raise StorageLoadError(f"Unknown node type: {node_type!r}")


def dumps(root: FolderNode) -> str:
    """Serialize a tree to a JSON string."""
    return json.dumps(node_to_dict(root), ensure_ascii=False)


def loads(text: str) -> FolderNode:
    """
    Deserialize a tree from a JSON string.

    Raises:
        StorageLoadError: If the text is not a serialized folder tree
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise StorageLoadError(f"Invalid JSON: {e}") from e

    root = node_from_dict(data)
    if not isinstance(root, FolderNode):
        raise StorageLoadError("Saved tree root is not a folder")
    return root
