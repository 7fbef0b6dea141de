"""
WeaveFS Sync

Notification layer that keeps every UI surface in step with the tree.
"""

from .events import OperationType, Source, VFSOperation, VFSEventListener
from .service import VFSSyncService

__all__ = [
    "OperationType",
    "Source",
    "VFSOperation",
    "VFSEventListener",
    "VFSSyncService",
]
