"""
traceviz.config - Configuration loading and defaults
"""

from traceviz.config.defaults import DEFAULT_CONFIG
from traceviz.config.loader import (
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml_document,
)
from traceviz.config.settings import BarConfig, ColorConfig, DiagramConfig, FlowConfig

__all__ = [
    "DEFAULT_CONFIG",
    "find_config_file",
    "get_config",
    "load_config",
    "merge_configs",
    "parse_toml_document",
    "BarConfig",
    "ColorConfig",
    "DiagramConfig",
    "FlowConfig",
]
