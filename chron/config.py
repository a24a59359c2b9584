"""
Configuration Module.

Loads the YAML configuration, resolves where day records and the project
registry live, and sets up logging.
"""

from __future__ import annotations

import copy
import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml

from chron.models import ChronError

APP_DIR_NAME = "chron-timetracking"
PROJECTS_FILE_NAME = "config.json"
DEFAULT_CONFIG_PATH = "config/config.yaml"
CONFIG_ENV_VAR = "CHRON_CONFIG"

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}

logger = logging.getLogger(__name__)


class ConfigError(ChronError):
    """Raised when the configuration file cannot be read or is invalid."""


def user_data_dir() -> Path:
    """Return the per-user data directory suitable for the platform."""
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming"
    else:
        base = os.environ.get("XDG_DATA_HOME") or Path.home() / ".local" / "share"
    return Path(base) / APP_DIR_NAME


def get_default_config() -> dict[str, Any]:
    """
    Get the default configuration.

    Returns:
        Default configuration dictionary with all required settings.
    """
    return {
        "storage": {
            "data_dir": None,
            "projects_file": None,
        },
        "logging": {"level": "WARNING"},
    }


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def resolve_config_path(config_path: str | None = None) -> Path:
    """Pick the config file: explicit path, then ``$CHRON_CONFIG``, then the default."""
    return Path(config_path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Load configuration from a YAML file.

    Values from the file are merged over :func:`get_default_config`.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Configuration dictionary. Returns the defaults if the file is missing.

    Raises:
        ConfigError: If the file cannot be parsed or has an invalid shape.
    """
    path = resolve_config_path(str(config_path) if config_path else None)
    if not path.exists():
        logger.debug("Config file not found: %s, using defaults", path)
        return get_default_config()

    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to load config {path}: {exc}") from exc

    if document is None:
        return get_default_config()
    if not isinstance(document, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(document).__name__}")

    config = _merge(get_default_config(), document)
    for section in ("storage", "logging"):
        if not isinstance(config[section], dict):
            raise ConfigError(f"Config section '{section}' in {path} must be a mapping")

    level = str(config["logging"].get("level", "WARNING")).strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"logging.level must be one of {', '.join(sorted(LOG_LEVELS))}")
    config["logging"]["level"] = level
    return config


def get_data_dir(config: dict[str, Any]) -> Path:
    """Return the directory holding the day records."""
    data_dir = config.get("storage", {}).get("data_dir")
    return Path(data_dir).expanduser() if data_dir else user_data_dir()


def get_projects_file(config: dict[str, Any]) -> Path:
    """Return the path of the project registry file."""
    projects_file = config.get("storage", {}).get("projects_file")
    if projects_file:
        return Path(projects_file).expanduser()
    return get_data_dir(config) / PROJECTS_FILE_NAME


def configure_logging(level: str) -> None:
    """Configure root logging for the command-line interface."""
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
