"""
KuriOS Configuration Loader

Configuration management providing:
- JSON configuration file loading
- Default value handling
- Runtime configuration updates
- Type-safe access to configuration values

Author: YSNRFD
Version: 1.0.0
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional
import threading

from kurios.exceptions import ConfigLoadError, ConfigValidationError


VERSION = "0.0.1"


@dataclass
class KernelConfig:
    """Program identification settings."""
    name: str = "KuriOS"
    version: str = VERSION
    boot_message: str = "KuriOS is now running. Type \"help\" for more information."


@dataclass
class EnvironmentConfig:
    """Environment file settings."""
    path: str = "directory.json"
    cache_dir: str = "."
    default_lock_key: str = "admin"


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    log_file: Optional[str] = None
    console_output: bool = True


@dataclass
class ShellConfig:
    """Shell configuration settings."""
    prompt: str = "> "
    tree_depth: int = 4
    default_channel: str = "default"


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings for the program.
    """
    kernel: KernelConfig = field(default_factory=KernelConfig)
    environment: EnvironmentConfig = field(default_factory=EnvironmentConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Handles loading configuration from JSON files and providing
    runtime configuration access.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('config.json')
        >>> print(config.environment.path)
        directory.json
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
            ConfigLoadError: If the file cannot be loaded or parsed
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigLoadError(
                f"Configuration file not found: {config_path}",
                path=config_path
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigLoadError(
                f"Invalid JSON in configuration file: {e}",
                path=config_path
            )
        except OSError as e:
            raise ConfigLoadError(
                f"Cannot read configuration file: {e}",
                path=config_path
            )

        if not isinstance(data, dict):
            raise ConfigLoadError(
                "Configuration file must contain a JSON object",
                path=config_path
            )

        self._config = self._parse_config(data)
        self._loaded = True
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into Config object."""
        config = Config()

        # Parse kernel config
        if 'kernel' in data:
            kernel_data = data['kernel']
            config.kernel = KernelConfig(
                name=kernel_data.get('name', config.kernel.name),
                version=kernel_data.get('version', config.kernel.version),
                boot_message=kernel_data.get('boot_message', config.kernel.boot_message),
            )

        # Parse environment config
        if 'environment' in data:
            env_data = data['environment']
            config.environment = EnvironmentConfig(
                path=env_data.get('path', config.environment.path),
                cache_dir=env_data.get('cache_dir', config.environment.cache_dir),
                default_lock_key=env_data.get('default_lock_key', config.environment.default_lock_key),
            )

        # Parse logging config
        if 'logging' in data:
            log_data = data['logging']
            config.logging = LoggingConfig(
                level=log_data.get('level', config.logging.level),
                log_file=log_data.get('log_file', config.logging.log_file),
                console_output=log_data.get('console_output', config.logging.console_output),
            )

        # Parse shell config
        if 'shell' in data:
            shell_data = data['shell']
            config.shell = ShellConfig(
                prompt=shell_data.get('prompt', config.shell.prompt),
                tree_depth=shell_data.get('tree_depth', config.shell.tree_depth),
                default_channel=shell_data.get('default_channel', config.shell.default_channel),
            )

        return config

    @property
    def config(self) -> Config:
        """Get the current configuration (defaults until a file is loaded)."""
        return self._config

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'shell.tree_depth')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Args:
            key: Dot-notation key (e.g., 'environment.cache_dir')
            value: Value to set

        Note:
            This modifies configuration at runtime but does not
            persist changes to disk.
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(key)

        final_key = parts[-1]
        if hasattr(obj, final_key):
            setattr(obj, final_key, value)
        else:
            raise ConfigValidationError(key)

    def reset(self) -> None:
        """Drop any loaded configuration and fall back to defaults."""
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
