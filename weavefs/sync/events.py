"""
Sync Events

Operation records and the listener protocol used by the notification
layer.

Author: YSNRFD
Version: 1.0.0
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, Any

from weavefs.filesystem.nodes import NodeType, utcnow


class OperationType(Enum):
    """Kinds of recorded mutations."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    MOVE = "move"
    COPY = "copy"


class Source:
    """Well-known origin tags for operations."""
    TERMINAL = "terminal"
    FILE_MANAGER = "filemanager"
    TEXT_EDITOR = "texteditor"
    SYSTEM = "system"


@dataclass
class VFSOperation:
    """A successful mutation as seen by the notification layer."""
    type: OperationType
    path: str
    source: str
    node_type: NodeType
    new_path: Optional[str] = None
    content: Optional[str] = None
    timestamp: datetime = field(default_factory=utcnow)

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data['type'] = self.type.value
        data['node_type'] = self.node_type.value
        data['timestamp'] = self.timestamp.isoformat()
        return data


class VFSEventListener:
    """
    Base listener with no-op callbacks.

    Subclass and override what you need. Any object with a subset of
    these methods can be registered as well; missing callbacks are
    skipped.
    """

    def on_file_created(self, path: str, content: str, source: str) -> None:
        pass

    def on_file_updated(self, path: str, content: str, source: str) -> None:
        pass

    def on_file_deleted(self, path: str, source: str) -> None:
        pass

    def on_file_moved(self, old_path: str, new_path: str, source: str) -> None:
        pass

    def on_file_copied(self, source_path: str, target_path: str, source: str) -> None:
        pass

    def on_folder_created(self, path: str, source: str) -> None:
        pass

    def on_folder_deleted(self, path: str, source: str) -> None:
        pass
