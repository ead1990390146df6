"""
traceviz.config.loader - Configuration file discovery and loading.

Configuration lives in a ``.traceviz.toml`` file, found by walking up from
the working directory, and is deep-merged over :data:`DEFAULT_CONFIG`.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from traceviz.config.defaults import DEFAULT_CONFIG
from traceviz.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".traceviz.toml"


def find_config_file(start_path: Path) -> Path | None:
    """Find ``.traceviz.toml`` in ``start_path`` or any parent directory.

    Stops at the first directory containing a ``.git`` entry.
    """
    current = start_path.resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if (current / ".git").exists() or current.parent == current:
            return None
        current = current.parent


def parse_toml_document(content: str) -> dict[str, Any]:
    """Parse TOML text into plain Python containers.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        return tomlkit.parse(content).unwrap()
    except TOMLKitError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e


def merge_configs(defaults: dict[str, Any], user: dict[str, Any]) -> dict[str, Any]:
    """Deep-merge ``user`` over ``defaults`` without mutating either.

    Nested tables merge key by key; any other value in ``user`` replaces
    the default outright (lists are not concatenated).
    """
    merged = copy.deepcopy(defaults)
    for key, value in user.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a config file and merge it over the defaults.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    try:
        user_config = parse_toml_document(content)
    except ConfigError as e:
        raise ConfigError(f"{config_path}: {e}") from e
    logger.debug("Loaded config from %s", config_path)
    return merge_configs(DEFAULT_CONFIG, user_config)


def get_config(config_path: Path | None = None, start_path: Path | None = None) -> dict[str, Any]:
    """Resolve the effective configuration.

    An explicit ``config_path`` wins; otherwise a config file is searched
    for from ``start_path`` (default: cwd). Without any file the defaults
    are returned.
    """
    path = config_path or find_config_file(start_path or Path.cwd())
    if path is None:
        return copy.deepcopy(DEFAULT_CONFIG)
    return load_config(path)
