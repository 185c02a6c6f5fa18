"""Configuration loading for ticketctl."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ticketctl.logging import (
    DEFAULT_BACKUP_COUNT,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_BYTES,
)

CONFIG_FILE_NAME = "ticketctl.yaml"
DEFAULT_STORE_PATH = ".tickets/tickets.json"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class StoreConfig:
    """Where the ticket store lives."""

    path: str = DEFAULT_STORE_PATH


@dataclass
class LoggingConfig:
    """Log file settings."""

    dir: str = DEFAULT_LOG_DIR
    level: str = DEFAULT_LOG_LEVEL
    max_bytes: int = DEFAULT_MAX_BYTES
    backup_count: int = DEFAULT_BACKUP_COUNT


@dataclass
class TicketctlConfig:
    """ticketctl configuration.

    Relative paths are resolved against root_path, the directory holding the
    config file (or the current directory when there is none).
    """

    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    root_path: Path = field(default_factory=Path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], root_path: Path) -> TicketctlConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.
            root_path: Root directory containing the config file.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a section or value has the wrong type.
        """
        store_data = _section(data, "store")
        store = StoreConfig(
            path=_typed(store_data, "path", str, DEFAULT_STORE_PATH),
        )

        logging_data = _section(data, "logging")
        logging_config = LoggingConfig(
            dir=_typed(logging_data, "dir", str, DEFAULT_LOG_DIR),
            level=_typed(logging_data, "level", str, DEFAULT_LOG_LEVEL),
            max_bytes=_typed(logging_data, "max_bytes", int, DEFAULT_MAX_BYTES),
            backup_count=_typed(logging_data, "backup_count", int, DEFAULT_BACKUP_COUNT),
        )

        return cls(store=store, logging=logging_config, root_path=root_path)

    def get_store_path(self) -> Path:
        """Get absolute path to the store file.

        TICKETCTL_STORE overrides the configured path.
        """
        return self._resolve(os.environ.get("TICKETCTL_STORE", self.store.path))

    def get_log_dir(self) -> Path:
        """Get absolute path to the log directory.

        TICKETCTL_LOG_DIR overrides the configured directory.
        """
        return self._resolve(os.environ.get("TICKETCTL_LOG_DIR", self.logging.dir))

    def get_log_level(self) -> str:
        """Get the log level, TICKETCTL_LOG_LEVEL taking precedence."""
        return os.environ.get("TICKETCTL_LOG_LEVEL", self.logging.level)

    def _resolve(self, path: str) -> Path:
        resolved = Path(path).expanduser()
        if not resolved.is_absolute():
            resolved = self.root_path / resolved
        return resolved.resolve()


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name)
    # A bare "store:" key parses as None
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' must be a mapping, got {type(section).__name__}")
    return section


def _typed(data: dict[str, Any], key: str, expected: type, default: Any) -> Any:
    value = data.get(key, default)
    # bool is an int subclass but never a valid size
    if not isinstance(value, expected) or isinstance(value, bool):
        raise ConfigError(f"'{key}' must be of type {expected.__name__}, got {value!r}")
    return value


def load_config(config_path: Path | str) -> TicketctlConfig:
    """Load ticketctl configuration from a YAML file.

    Args:
        config_path: Path to ticketctl.yaml file.

    Returns:
        Parsed configuration object.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    # An empty file means "all defaults"
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return TicketctlConfig.from_dict(data, config_path.resolve().parent)


def find_config(start_path: Path | str | None = None) -> Path | None:
    """Find ticketctl.yaml by walking up directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to ticketctl.yaml file, or None if there is none.
    """
    if start_path is None:
        start_path = Path.cwd()

    current = Path(start_path).resolve()

    for directory in (current, *current.parents):
        config_path = directory / CONFIG_FILE_NAME
        if config_path.is_file():
            return config_path

    return None


def resolve_config(config_path: Path | str | None = None) -> TicketctlConfig:
    """Load the given config file, or the nearest one, or the defaults.

    Args:
        config_path: Explicit config file. Auto-detected if not given.

    Returns:
        Configuration object. Defaults rooted at the current directory when
        no config file exists.

    Raises:
        ConfigError: If the config file is invalid.
    """
    if config_path is None:
        config_path = find_config()
    if config_path is None:
        return TicketctlConfig(root_path=Path.cwd())
    return load_config(config_path)
