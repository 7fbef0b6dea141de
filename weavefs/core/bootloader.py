"""
WeaveFS Bootloader

The bootloader is responsible for:
- Loading configuration
- Initializing logging
- Opening the storage backend
- Restoring (or seeding) the file tree
- Starting the sync service

Author: YSNRFD
Version: 1.0.0
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional
import sys
import time

import httpx

from weavefs.logger import Logger, get_logger, LogLevel
from weavefs.exceptions import (
    BootFailureError,
    PersistenceException,
)
from weavefs.core.config_loader import Config, ConfigLoader
from weavefs.filesystem.vfs import VirtualFileSystem
from weavefs.filesystem.defaults import seed_default_structure
from weavefs.persistence.base import StorageBackend
from weavefs.persistence.factory import create_storage_backend
from weavefs.sync.service import VFSSyncService
from weavefs.shell.shell import Shell


class BootStage(Enum):
    """Boot process stages."""
    PRE_INIT = auto()
    CONFIG_LOAD = auto()
    LOGGING_INIT = auto()
    STORAGE_INIT = auto()
    FILESYSTEM_INIT = auto()
    SERVICES_INIT = auto()
    COMPLETE = auto()
    FAILED = auto()


@dataclass
class BootResult:
    """Result of the boot process."""
    success: bool
    stage: BootStage
    message: str
    elapsed_time: float
    error: Optional[Exception] = None
    restored: bool = False
    seeded: int = 0


LEVEL_MAP = {
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'NOTICE': LogLevel.NOTICE,
    'WARNING': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'CRITICAL': LogLevel.CRITICAL,
}


class Bootloader:
    """
    The system bootloader.

    Boot Sequence:
        1. Pre-initialization checks
        2. Load configuration (defaults when the file is missing)
        3. Initialize logging
        4. Create the storage backend
        5. Load the saved tree; seed the default structure when none exists
        6. Start the sync service
        7. Complete

    A saved tree that cannot be read is logged and treated as absent, so
    a corrupt store never prevents startup.

    Example:
        >>> bootloader = Bootloader('config.json')
        >>> result = bootloader.boot()
        >>> if result.success:
        ...     bootloader.create_shell().run()
    """

    def __init__(
        self,
        config_path: Optional[str] = None,
        config: Optional[Config] = None,
        transport: Optional[httpx.BaseTransport] = None
    ):
        """
        Args:
            config_path: JSON configuration file
            config: Ready-made configuration; takes precedence over config_path
            transport: HTTP transport override for the remote backend
        """
        self._config_path = config_path
        self._config = config
        self._transport = transport
        self._stage = BootStage.PRE_INIT
        self._logger: Optional[Logger] = None
        self._start_time: float = 0
        self._storage: Optional[StorageBackend] = None
        self._vfs: Optional[VirtualFileSystem] = None
        self._sync: Optional[VFSSyncService] = None
        self._restored = False
        self._seeded = 0

    @property
    def stage(self) -> BootStage:
        """Get the current boot stage."""
        return self._stage

    @property
    def config(self) -> Config:
        return self._config or Config()

    def boot(self) -> BootResult:
        """
        Execute the boot sequence.

        Returns:
            BootResult indicating success or failure
        """
        self._start_time = time.time()

        try:
            self._stage = BootStage.PRE_INIT
            self._pre_init()

            self._stage = BootStage.CONFIG_LOAD
            self._load_config()

            self._stage = BootStage.LOGGING_INIT
            self._init_logging()

            self._logger = get_logger('bootloader')
            self._logger.info("WeaveFS bootloader starting...")

            self._stage = BootStage.STORAGE_INIT
            self._init_storage()

            self._stage = BootStage.FILESYSTEM_INIT
            self._init_filesystem()

            self._stage = BootStage.SERVICES_INIT
            self._init_services()

            self._stage = BootStage.COMPLETE
            elapsed = time.time() - self._start_time

            self._logger.info(
                "Boot complete",
                context={
                    'elapsed_ms': f"{elapsed * 1000:.2f}",
                    'restored': self._restored,
                    'seeded': self._seeded,
                }
            )

            return BootResult(
                success=True,
                stage=self._stage,
                message="System booted successfully",
                elapsed_time=elapsed,
                restored=self._restored,
                seeded=self._seeded,
            )

        except Exception as e:
            failed_stage = self._stage
            self._stage = BootStage.FAILED
            elapsed = time.time() - self._start_time

            if self._logger:
                self._logger.critical(f"Boot failed at stage {failed_stage.name}: {e}")

            return BootResult(
                success=False,
                stage=failed_stage,
                message=f"Boot failed: {e}",
                elapsed_time=elapsed,
                error=e
            )

    def _pre_init(self) -> None:
        """Pre-initialization checks."""
        if sys.version_info < (3, 10):
            raise BootFailureError(
                "Python 3.10+ required",
                subsystem="bootloader"
            )

    def _load_config(self) -> None:
        """Load system configuration."""
        if self._config is not None:
            ConfigLoader.validate(self._config)
            return

        loader = ConfigLoader()
        if self._config_path is None:
            self._config = Config()
            return

        try:
            self._config = loader.load(self._config_path)
        except BootFailureError:
            # Missing or unreadable file: run with defaults
            self._config = Config()

    def _init_logging(self) -> None:
        """Initialize the logging system."""
        settings = self.config.logging
        Logger.initialize(
            level=LEVEL_MAP.get(settings.level.upper(), LogLevel.WARNING),
            log_file=settings.log_file,
            use_colors=settings.use_colors,
            console_output=settings.console_output,
        )

    def _init_storage(self) -> None:
        """Create the configured storage backend."""
        self._storage = create_storage_backend(self.config.persistence, transport=self._transport)

    def _init_filesystem(self) -> None:
        """Restore the saved tree or seed the default structure."""
        self._vfs = VirtualFileSystem(self._storage)

        try:
            self._restored = self._vfs.load()
        except PersistenceException as e:
            self._logger.warning(
                "Saved tree is unreadable; starting from an empty tree",
                context={'error': e.message}
            )
            self._restored = False

        if not self._restored and self.config.filesystem.seed_defaults:
            self._seeded = seed_default_structure(self._vfs)
            self._logger.info("Default structure created", context={'nodes': self._seeded})

    def _init_services(self) -> None:
        """Start the sync service."""
        self._sync = VFSSyncService(self._vfs, max_history=self.config.sync.max_history)

        report = self._sync.validate_integrity(self.config.filesystem.required_folders)
        if not report['valid']:
            self._logger.warning("Tree failed integrity check", context={'issues': report['issues']})

    def get_filesystem(self) -> Optional[VirtualFileSystem]:
        """Get the booted tree store."""
        return self._vfs

    def get_sync_service(self) -> Optional[VFSSyncService]:
        """Get the booted sync service."""
        return self._sync

    def create_shell(self) -> Shell:
        """
        Create a terminal session over the booted file system.

        Raises:
            BootFailureError: If the system has not booted
        """
        if self._vfs is None:
            raise BootFailureError("System is not booted", subsystem="shell")
        return Shell(self._vfs, self._sync, self.config.shell)

    def shutdown(self) -> None:
        """Shutdown the system gracefully."""
        if self._logger:
            self._logger.info("System shutdown initiated")

        if self._storage:
            self._storage.close()

        if self._logger:
            self._logger.info("System shutdown complete")


def boot_system(config_path: Optional[str] = None) -> tuple[BootResult, Bootloader]:
    """
    Convenience function to boot the system.

    Args:
        config_path: Path to configuration file

    Returns:
        Tuple of (BootResult, Bootloader)
    """
    bootloader = Bootloader(config_path)
    result = bootloader.boot()
    return result, bootloader
