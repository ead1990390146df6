"""
traceviz.config.settings - Typed views over the configuration dict.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any

from traceviz.config.defaults import DEFAULT_CONFIG


def _section(data: dict[str, Any], *keys: str) -> dict[str, Any]:
    for key in keys:
        value = data.get(key) if isinstance(data, dict) else None
        data = value if isinstance(value, dict) else {}
    return data


def _coerce(cls, raw: dict[str, Any]):
    """Build a settings dataclass, ignoring unknown keys."""
    names = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in raw.items() if k in names})


@dataclass
class BarConfig:
    """Geometry of the layer-coverage (bar and ribbon) diagram."""

    bar_width: float = 16
    height_per_node: float = 15
    min_bar_height: float = 30
    max_bar_height: float = 200
    bar_spacing: float = 15
    min_height: float = 150
    max_height: float = 800


@dataclass
class FlowConfig:
    """Geometry of the tag-level flow diagram."""

    node_height: float = 24
    node_gap: float = 6
    node_width: float = 20
    top_padding: float = 20
    bottom_padding: float = 60
    width: float = 1200
    reorder: bool = True


@dataclass
class ColorConfig:
    scheme: list[str] = field(
        default_factory=lambda: list(DEFAULT_CONFIG["colors"]["scheme"])
    )
    unknown: str = DEFAULT_CONFIG["colors"]["unknown"]


@dataclass
class DiagramConfig:
    """All settings the computation and layout engines read."""

    layer_order: list[str] = field(default_factory=list)
    bars: BarConfig = field(default_factory=BarConfig)
    flow: FlowConfig = field(default_factory=FlowConfig)
    colors: ColorConfig = field(default_factory=ColorConfig)
    skip_files: list[str] = field(default_factory=lambda: ["config.md"])

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> DiagramConfig:
        """Build settings from a merged configuration dict."""
        colors = _coerce(ColorConfig, _section(config, "colors"))
        if not colors.scheme:
            colors.scheme = list(DEFAULT_CONFIG["colors"]["scheme"])
        skip_files = _section(config, "summary").get("skip_files")
        return cls(
            layer_order=[str(name) for name in _section(config, "layers").get("order") or []],
            bars=_coerce(BarConfig, _section(config, "layout", "bars")),
            flow=_coerce(FlowConfig, _section(config, "layout", "flow")),
            colors=colors,
            skip_files=list(skip_files) if skip_files is not None else ["config.md"],
        )
