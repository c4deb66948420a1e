"""Configuration management for stacmodel.

This module provides layered settings with the following precedence
(highest to lowest):
1. Explicit argument
2. Environment variable (STACMODEL_<KEY>)
3. Config file
4. Built-in default

The config file is YAML, found at $STACMODEL_CONFIG or ./stacmodel.yaml.

Usage:
    from stacmodel.config import get_setting

    # Network transports are enabled unless turned off somewhere
    network = get_setting("network")

    # Explicit values win over everything else
    base_url = get_setting("schema_base_url", value="http://localhost:8000")
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

from stacmodel.errors import ConfigError, ConfigParseError

# Environment variable naming the config file
CONFIG_ENV_VAR = "STACMODEL_CONFIG"

# Config file looked up in the working directory when CONFIG_ENV_VAR is unset
CONFIG_FILENAME = "stacmodel.yaml"

# Built-in defaults; unknown keys in the config file are still allowed
DEFAULTS: dict[str, Any] = {
    "network": True,
    "schema_base_url": "https://schemas.stacspec.org",
    "http_timeout": "30s",
}

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def get_config_path() -> Path:
    """Get the path to the config file.

    Returns:
        $STACMODEL_CONFIG if set, else ./stacmodel.yaml
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return Path.cwd() / CONFIG_FILENAME


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file.

    Args:
        config_path: Config file to read (defaults to get_config_path()).

    Returns:
        Config dictionary. Returns empty dict if file doesn't exist.

    Raises:
        ConfigParseError: If the file is not valid YAML or not a mapping.
    """
    config_file = config_path if config_path is not None else get_config_path()

    if not config_file.exists():
        return {}

    content = config_file.read_text()
    if not content.strip():
        return {}

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigParseError(str(config_file), str(e)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigParseError(str(config_file), "top level must be a mapping")
    return data


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to a YAML file, creating parent directories.

    Args:
        config: Config dictionary to save.
        config_path: Destination (defaults to get_config_path()).
    """
    config_file = config_path if config_path is not None else get_config_path()
    config_file.parent.mkdir(parents=True, exist_ok=True)

    content = yaml.safe_dump(config, default_flow_style=False, sort_keys=False)
    config_file.write_text(content)


def _get_env_var_name(key: str) -> str:
    """Convert a setting key to environment variable name.

    Args:
        key: Setting key (e.g., "schema_base_url")

    Returns:
        Environment variable name (e.g., "STACMODEL_SCHEMA_BASE_URL")
    """
    return f"STACMODEL_{key.upper()}"


def _coerce_env_value(key: str, raw: str) -> Any:
    """Convert an environment string to the default's type (bools only)."""
    if isinstance(DEFAULTS.get(key), bool):
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigError(f"Invalid boolean for {_get_env_var_name(key)}: {raw!r}", key=key)
    return raw


def get_setting(
    key: str,
    value: Any | None = None,
    config_path: Path | None = None,
) -> Any | None:
    """Resolve a setting with full precedence.

    Args:
        key: Setting key (e.g., "network", "schema_base_url")
        value: Explicit value (highest precedence)
        config_path: Config file to consult (defaults to get_config_path())

    Returns:
        Resolved value, or None if not found at any level.
    """
    if value is not None:
        return value

    env_value = os.environ.get(_get_env_var_name(key))
    if env_value is not None:
        return _coerce_env_value(key, env_value)

    config = load_config(config_path)
    if key in config:
        return config[key]

    return DEFAULTS.get(key)


def list_settings(config_path: Path | None = None) -> dict[str, dict[str, Any]]:
    """List all settings with their sources.

    Returns:
        Dict mapping setting keys to {"value": ..., "source": ...} where
        source is "env", "config" or "default".
    """
    config = load_config(config_path)
    result: dict[str, dict[str, Any]] = {}

    for key in sorted(set(DEFAULTS) | set(config)):
        if _get_env_var_name(key) in os.environ:
            source = "env"
        elif key in config:
            source = "config"
        else:
            source = "default"
        result[key] = {"value": get_setting(key, config_path=config_path), "source": source}

    return result
