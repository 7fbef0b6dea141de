"""
WeaveFS - The Weave OS Virtual File System

This package provides the in-memory file tree shared by the Weave OS
desktop apps, its persistence backends, the notification layer that
keeps every view in step, and the command-line shell behind the
Terminal app.
"""

__version__ = "1.0.0"
__author__ = "YSNRFD"

# Import main components for convenience
from .filesystem.vfs import VirtualFileSystem
from .sync.service import VFSSyncService
from .core.bootloader import Bootloader, boot_system
from .shell.shell import Shell, create_shell

__all__ = [
    'VirtualFileSystem',
    'VFSSyncService',
    'Bootloader',
    'boot_system',
    'Shell',
    'create_shell',
]
