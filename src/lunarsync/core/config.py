"""
Configuration management with YAML and environment variable support.

Environment variables take precedence over YAML configuration.
The YAML file can be written back, which is how the target list is edited
from the command line.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from lunarsync.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "LUNARSYNC_"

# Default configuration paths
DEFAULT_CONFIG_PATHS = [
    Path("lunarsync.yaml"),
    Path("lunarsync.yml"),
    Path(".lunarsync.yaml"),
    Path.home() / ".lunarsync" / "config.yaml",
]


class Config:
    """
    YAML + environment variable integrated configuration management.

    Environment variables take precedence over YAML values.
    Supports nested key access with dot notation (e.g., "conversion.source_key").

    Usage:
        config = Config()
        source_key = config.get("source_key", default="lunar-birthday")
        config.set("targets", ["People"])
        config.save()
    """

    def __init__(self, config_path: Path | str | None = None, env_file: Path | str | None = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML config file. If None, searches default locations.
            env_file: Path to .env file. If None, searches current directory.
        """
        env_path = Path(env_file) if env_file else None
        load_dotenv(dotenv_path=env_path, override=False)

        self._config: dict[str, Any] = {}
        self._config_path: Path | None = None

        self._load_yaml(config_path)

        logger.debug("Configuration initialized from: %s", self._config_path or "defaults only")

    def _load_yaml(self, config_path: Path | str | None = None) -> None:
        """Load YAML configuration file."""
        if config_path:
            path = Path(config_path)
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")
            self._config_path = path
        else:
            for default_path in DEFAULT_CONFIG_PATHS:
                if default_path.exists():
                    self._config_path = default_path
                    break

        if self._config_path:
            try:
                with self._config_path.open("r", encoding="utf-8") as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {self._config_path}: {e}") from e
            except OSError as e:
                raise ConfigurationError(f"Failed to read {self._config_path}: {e}") from e

            if loaded is None:
                loaded = {}
            if not isinstance(loaded, dict):
                raise ConfigurationError(
                    f"Configuration root must be a mapping: {self._config_path}",
                    details={"type": type(loaded).__name__},
                )
            self._config = loaded
            logger.info("Loaded configuration from: %s", self._config_path)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Environment variables take precedence over YAML.
        Supports dot notation for nested keys.

        Environment variable mapping:
            "range_past" -> LUNARSYNC_RANGE_PAST

        Args:
            key: Configuration key (dot notation supported)
            default: Default value if key not found

        Returns:
            Configuration value
        """
        env_key = f"{ENV_PREFIX}{key.upper().replace('.', '_')}"
        env_value = os.getenv(env_key)

        if env_value is not None:
            value = self._parse_env_value(env_value)
            logger.debug("Config %s from env: %s", key, value)
            return value

        value = self._get_nested(key)
        if value is not None:
            logger.debug("Config %s from yaml: %s", key, value)
            return value

        return default

    def set(self, key: str, value: Any) -> None:
        """Set a value in the YAML layer (dot notation creates nested mappings)."""
        parts = key.split(".")
        node = self._config
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value

    def save(self, path: Path | str | None = None) -> Path:
        """
        Write the YAML layer back to disk.

        Args:
            path: Destination file. Defaults to the loaded file, or the
                first default location when nothing was loaded.

        Returns:
            The path that was written

        Raises:
            ConfigurationError: If the file cannot be written
        """
        target = Path(path) if path else (self._config_path or DEFAULT_CONFIG_PATHS[0])
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("w", encoding="utf-8") as f:
                yaml.safe_dump(self._config, f, sort_keys=False, allow_unicode=True)
        except OSError as e:
            raise ConfigurationError(f"Failed to write {target}: {e}") from e

        self._config_path = target
        logger.info("Saved configuration to: %s", target)
        return target

    def _get_nested(self, key: str) -> Any:
        """Get nested value from config dict using dot notation."""
        parts = key.split(".")
        value = self._config

        for part in parts:
            if isinstance(value, dict):
                value = value.get(part)
            else:
                return None
            if value is None:
                return None

        return value

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """Parse environment variable string to appropriate type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        try:
            return float(value)
        except ValueError:
            pass

        return value

    @property
    def path(self) -> Path | None:
        """Path of the loaded (or last saved) YAML file."""
        return self._config_path

    def __repr__(self) -> str:
        return f"Config(path={self._config_path})"
