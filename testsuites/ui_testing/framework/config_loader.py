"""
================================================================================
Configuration Loader
================================================================================

Run settings for the UI suite, read from YAML and overridable per run.

Layers (highest priority first):
    1. Environment variables: dotted key upper-cased, dots -> underscores
       (ui.base_url -> UI_BASE_URL, timeouts.action -> TIMEOUTS_ACTION)
    2. Override file named by UI_CONFIG_FILE (deep-merged over the base)
    3. testsuites/config/config.yaml
    4. The default passed to get()

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "config.yaml"

OVERRIDE_FILE_ENV = "UI_CONFIG_FILE"

_TRUE_VALUES = ("true", "1", "yes", "on")


class ConfigurationError(Exception):
    """Unreadable configuration or an unknown setting value."""
    pass


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Top level of {path} must be a mapping")
    return data


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def env_key(key: str) -> str:
    """Environment variable that overrides a dotted key."""
    return key.upper().replace(".", "_")


class ConfigLoader:
    """
    Process-wide settings reader.

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("ui.base_url")
        'https://tmdb-discover.surge.sh'
        >>> config.get("timeouts.scroll_pause", 500)
        500
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: Base YAML file. Only honoured on first construction;
                call reset() to switch files.
        """
        if self._initialized:
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Dict[str, Any] = {}
        self._load()
        self._initialized = True

    def _load(self) -> None:
        if self._config_path.exists():
            config = _read_yaml(self._config_path)
            logger.debug(f"Loaded configuration from: {self._config_path}")
        else:
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            config = {}

        override = os.environ.get(OVERRIDE_FILE_ENV)
        if override:
            override_path = Path(override)
            if not override_path.exists():
                raise ConfigurationError(
                    f"{OVERRIDE_FILE_ENV} points to a missing file: {override_path}"
                )
            config = _deep_merge(config, _read_yaml(override_path))
            logger.debug(f"Applied configuration override: {override_path}")

        self._config = config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Value at a dotted path.

        An environment override is converted to the type of `default`
        (bool, int, float) when one is given.
        """
        raw = os.environ.get(env_key(key))
        if raw is not None:
            return self._convert_type(raw, default)

        node: Any = self._config
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return default
            node = node[part]
        return node

    def get_section(self, section: str) -> Dict[str, Any]:
        """Top-level mapping (e.g. "timeouts"), empty if absent."""
        value = self._config.get(section)
        return dict(value) if isinstance(value, dict) else {}

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._config)

    def reload(self) -> None:
        """Re-read the files (environment overrides are always live)."""
        self._load()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    @staticmethod
    def _convert_type(value: str, reference: Any) -> Any:
        if isinstance(reference, bool):
            return value.strip().lower() in _TRUE_VALUES
        for cast in (int, float):
            if isinstance(reference, cast):
                try:
                    return cast(value)
                except ValueError:
                    return value
        return value

    @classmethod
    def reset(cls) -> None:
        """Forget the singleton so the next ConfigLoader() re-reads files."""
        cls._instance = None


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "env_key",
]
