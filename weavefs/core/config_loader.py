"""
WeaveFS Configuration Loader

Configuration management for the file system and its front-ends:
- JSON configuration file loading
- Default value handling
- Runtime configuration updates by dot-notation key
- Type-safe access to configuration values

Author: YSNRFD
Version: 1.0.0
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, List
import threading

from weavefs.exceptions import BootFailureError, ConfigValidationError


STORAGE_BACKENDS = ("memory", "local", "remote")


@dataclass
class SystemConfig:
    """System identification settings."""
    name: str = "Weave OS"
    version: str = "1.0.0"
    welcome_message: str = "Welcome to Weave OS"


@dataclass
class FilesystemConfig:
    """Tree store settings."""
    seed_defaults: bool = True
    required_folders: List[str] = field(default_factory=lambda: [
        "/Desktop", "/Documents", "/Downloads"
    ])


@dataclass
class PersistenceConfig:
    """Storage backend settings."""
    backend: str = "memory"
    storage_path: str = "~/.weavefs/storage.json"
    storage_key: str = "weave-vfs"
    remote_url: str = "http://localhost:5000/api"
    remote_token: Optional[str] = None
    timeout: float = 30.0


@dataclass
class ShellConfig:
    """Shell configuration settings."""
    user: str = "user"
    hostname: str = "weave"
    home: str = "/"
    prompt: str = "$ "
    history_size: int = 1000
    terminal_width: int = 80
    use_colors: bool = False


@dataclass
class SyncConfig:
    """Notification layer settings."""
    max_history: int = 1000


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True
    use_colors: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the file system, its storage
    backend and the shell.
    """
    system: SystemConfig = field(default_factory=SystemConfig)
    filesystem: FilesystemConfig = field(default_factory=FilesystemConfig)
    persistence: PersistenceConfig = field(default_factory=PersistenceConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)
    sync: SyncConfig = field(default_factory=SyncConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('config.json')
        >>> print(config.persistence.backend)
        local
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            BootFailureError: If the file cannot be loaded or parsed
            ConfigValidationError: If a value is out of range
        """
        path = Path(config_path)

        if not path.exists():
            raise BootFailureError(
                f"Configuration file not found: {config_path}",
                subsystem="config"
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise BootFailureError(
                f"Invalid JSON in configuration file: {e}",
                subsystem="config"
            )
        except OSError as e:
            raise BootFailureError(
                f"Cannot read configuration file: {e}",
                subsystem="config"
            )

        self._config = self.parse(data)
        self._loaded = True
        return self._config

    @staticmethod
    def parse(data: dict[str, Any]) -> Config:
        """Parse configuration data into a Config object."""
        config = Config()

        if 'system' in data:
            sys_data = data['system']
            config.system = SystemConfig(
                name=sys_data.get('name', config.system.name),
                version=sys_data.get('version', config.system.version),
                welcome_message=sys_data.get('welcome_message', config.system.welcome_message),
            )

        if 'filesystem' in data:
            fs_data = data['filesystem']
            config.filesystem = FilesystemConfig(
                seed_defaults=fs_data.get('seed_defaults', config.filesystem.seed_defaults),
                required_folders=list(fs_data.get('required_folders', config.filesystem.required_folders)),
            )

        if 'persistence' in data:
            store_data = data['persistence']
            config.persistence = PersistenceConfig(
                backend=store_data.get('backend', config.persistence.backend),
                storage_path=store_data.get('storage_path', config.persistence.storage_path),
                storage_key=store_data.get('storage_key', config.persistence.storage_key),
                remote_url=store_data.get('remote_url', config.persistence.remote_url),
                remote_token=store_data.get('remote_token', config.persistence.remote_token),
                timeout=float(store_data.get('timeout', config.persistence.timeout)),
            )

        if 'shell' in data:
            shell_data = data['shell']
            config.shell = ShellConfig(
                user=shell_data.get('user', config.shell.user),
                hostname=shell_data.get('hostname', config.shell.hostname),
                home=shell_data.get('home', config.shell.home),
                prompt=shell_data.get('prompt', config.shell.prompt),
                history_size=shell_data.get('history_size', config.shell.history_size),
                terminal_width=shell_data.get('terminal_width', config.shell.terminal_width),
                use_colors=shell_data.get('use_colors', config.shell.use_colors),
            )

        if 'sync' in data:
            sync_data = data['sync']
            config.sync = SyncConfig(
                max_history=sync_data.get('max_history', config.sync.max_history),
            )

        if 'logging' in data:
            log_data = data['logging']
            config.logging = LoggingConfig(
                level=log_data.get('level', config.logging.level),
                log_file=log_data.get('log_file', config.logging.log_file),
                console_output=log_data.get('console_output', config.logging.console_output),
                use_colors=log_data.get('use_colors', config.logging.use_colors),
            )

        ConfigLoader.validate(config)
        return config

    @staticmethod
    def validate(config: Config) -> None:
        """
        Check values that the rest of the system relies on.

        Raises:
            ConfigValidationError: On the first invalid value
        """
        if config.persistence.backend not in STORAGE_BACKENDS:
            raise ConfigValidationError(
                f"Unknown storage backend: {config.persistence.backend}",
                key="persistence.backend"
            )
        if config.shell.history_size < 1:
            raise ConfigValidationError(
                "History size must be positive",
                key="shell.history_size"
            )
        if config.sync.max_history < 1:
            raise ConfigValidationError(
                "Operation history size must be positive",
                key="sync.max_history"
            )
        if not config.shell.home.startswith('/'):
            raise ConfigValidationError(
                "Home path must be absolute",
                key="shell.home"
            )

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if not self._loaded:
            return Config()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'persistence.backend')
            default: Default value if key not found
        """
        obj: Any = self._config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Changes are not written back to disk.

        Raises:
            ConfigValidationError: If the key does not exist
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if hasattr(obj, final_key):
            setattr(obj, final_key, value)
            self._loaded = True
        else:
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

    def reload(self, config_path: str) -> Config:
        """Reload configuration from file."""
        return self.load(config_path)

    def reset(self) -> None:
        """Drop loaded settings and return to defaults."""
        self._config = Config()
        self._loaded = False

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: dataclass_to_dict(v) for k, v in obj.items()}
            else:
                return obj

        return dataclass_to_dict(self._config)


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    loader = ConfigLoader()
    return loader.config
