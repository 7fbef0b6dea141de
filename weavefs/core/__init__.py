"""
WeaveFS Core Module

Core components including:
- Configuration Loader
- Bootloader (weavefs.core.bootloader)
"""

from .config_loader import (
    ConfigLoader,
    Config,
    SystemConfig,
    FilesystemConfig,
    PersistenceConfig,
    ShellConfig,
    SyncConfig,
    LoggingConfig,
    get_config,
)

__all__ = [
    # Configuration
    'ConfigLoader',
    'Config',
    'SystemConfig',
    'FilesystemConfig',
    'PersistenceConfig',
    'ShellConfig',
    'SyncConfig',
    'LoggingConfig',
    'get_config',
]
