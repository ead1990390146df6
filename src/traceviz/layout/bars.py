"""Bars - Geometry of the layer-coverage diagram.

Each layer is drawn as a vertical bar whose height follows its node count
and coverage. Bars are chained vertically along their strongest incoming
connection, and each bar is divided into bands (one per connected layer
and direction) that the renderer joins with ribbons.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from traceviz.config.settings import BarConfig
from traceviz.graph.coverage import CoverageStats

logger = logging.getLogger(__name__)

# Minimum band height (px) on both ends for a ribbon to carry a label.
RIBBON_LABEL_MIN_HEIGHT = 12
CANVAS_PADDING = 20
COVERAGE_FLOOR = 0.3


@dataclass(frozen=True)
class Band:
    """Vertical extent of a band inside a bar."""

    y0: float
    y1: float

    @property
    def height(self) -> float:
        return self.y1 - self.y0


@dataclass
class BarLayout:
    """Bar heights, vertical offsets and downstream connections per layer."""

    bar_height: dict[str, float] = field(default_factory=dict)
    bar_offset_y: dict[str, float] = field(default_factory=dict)
    connections: dict[str, list[str]] = field(default_factory=dict)


@dataclass
class BandLayout:
    """Band endpoints: ``bands_up[L][T]`` / ``bands_down[L][T]``."""

    bands_up: dict[str, dict[str, Band]] = field(default_factory=dict)
    bands_down: dict[str, dict[str, Band]] = field(default_factory=dict)


@dataclass
class Ribbon:
    """A flow ribbon from ``source`` (upstream) to ``target`` (downstream)."""

    source: str
    target: str
    source_band: Band
    target_band: Band
    source_pct: str
    target_pct: str
    overlay: bool = False
    show_label: bool = False


@dataclass
class LayerBar:
    """Everything the renderer needs to draw one layer's bar."""

    layer: str
    total: int
    y0: float
    height: float
    covered_up: int
    covered_down: int
    up_height: float
    down_height: float
    up_pct: str
    down_pct: str


@dataclass
class LayerDiagram:
    """Complete geometry of the layer-coverage diagram."""

    layer_order: list[str]
    bars: list[LayerBar]
    bar_layout: BarLayout
    bands: BandLayout
    ribbons: list[Ribbon]
    height: float


def _clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def layout_bars(
    layer_order: Sequence[str],
    totals: dict[str, int],
    covered_up: dict[str, int],
    covered_down: dict[str, int],
    mass_down: dict[str, dict[str, float]],
    config: BarConfig | None = None,
) -> BarLayout:
    """Compute bar heights, vertical offsets and connection lists.

    A bar is ``max(covered_up, covered_down, 0.3 * total)`` nodes tall,
    clamped to the configured range. The first layer sits at offset 0;
    every later layer is stacked under its strongest source (the earlier
    layer sending it the most downstream mass, earliest on ties): at the
    source's own offset when it is the source's first connection, else
    just below the preceding connection. Layers without a source sit at 0.
    """
    config = config or BarConfig()
    order = list(layer_order)
    layout = BarLayout()

    for layer in order:
        total = totals.get(layer, 0)
        coverage = max(covered_up.get(layer, 0), covered_down.get(layer, 0), total * COVERAGE_FLOOR)
        layout.bar_height[layer] = _clamp(
            coverage * config.height_per_node, config.min_bar_height, config.max_bar_height
        )

    for k, layer in enumerate(order):
        outgoing = mass_down.get(layer, {})
        layout.connections[layer] = [t for t in order[k + 1 :] if outgoing.get(t, 0) > 0]

    for k, layer in enumerate(order):
        if k == 0:
            layout.bar_offset_y[layer] = 0
            continue

        strongest = None
        max_weight = 0.0
        for source in order[:k]:
            weight = mass_down.get(source, {}).get(layer, 0)
            if weight > max_weight:
                max_weight = weight
                strongest = source

        if strongest is None:
            layout.bar_offset_y[layer] = 0
            continue

        siblings = layout.connections[strongest]
        position = siblings.index(layer)
        if position == 0:
            layout.bar_offset_y[layer] = layout.bar_offset_y[strongest]
        else:
            previous = siblings[position - 1]
            layout.bar_offset_y[layer] = (
                layout.bar_offset_y[previous] + layout.bar_height[previous] + config.bar_spacing
            )

    return layout


def layout_bands(
    layer_order: Sequence[str],
    bar_offset_y: dict[str, float],
    bar_height: dict[str, float],
    mass_up: dict[str, dict[str, float]],
    mass_down: dict[str, dict[str, float]],
    totals: dict[str, int],
) -> BandLayout:
    """Stack each layer's mass into bands within its bar.

    Mass converts to pixels at ``bar_height / total``. Upstream bands are
    stacked from the bar's top, closest upstream layer first; downstream
    bands likewise, in layer order. Empty bands are omitted.
    """
    order = list(layer_order)
    bands = BandLayout()

    for k, layer in enumerate(order):
        total = totals.get(layer, 0)
        scale = bar_height.get(layer, 0) / total if total > 0 else 0
        top = bar_offset_y.get(layer, 0)

        bands.bands_up[layer] = {}
        cursor = top
        for target in reversed(order[:k]):
            h = mass_up.get(layer, {}).get(target, 0) * scale
            if h <= 0:
                continue
            bands.bands_up[layer][target] = Band(cursor, cursor + h)
            cursor += h

        bands.bands_down[layer] = {}
        cursor = top
        for target in order[k + 1 :]:
            h = mass_down.get(layer, {}).get(target, 0) * scale
            if h <= 0:
                continue
            bands.bands_down[layer][target] = Band(cursor, cursor + h)
            cursor += h

    return bands


def canvas_height(
    layer_order: Sequence[str], layout: BarLayout, config: BarConfig | None = None
) -> float:
    """Height of the diagram's drawing area, clamped to the configured range."""
    config = config or BarConfig()
    bottom = max(
        (layout.bar_offset_y.get(d, 0) + layout.bar_height.get(d, 0) for d in layer_order),
        default=0,
    )
    return _clamp(bottom + CANVAS_PADDING, config.min_height, config.max_height)


def ribbon_plan(stats: CoverageStats, bands: BandLayout) -> list[Ribbon]:
    """List ribbons in drawing order: adjacent layers, then overlays.

    A ribbon needs a band on both ends. Its label is shown when both ends
    are at least 12px tall and it is an overlay or the source layer fans
    out to more than one downstream layer.
    """
    order = stats.layer_order
    out_degree = stats.out_degree_down
    pairs = [(order[i], order[i + 1], False) for i in range(len(order) - 1)]
    pairs += [
        (order[i], order[j], True) for i in range(len(order)) for j in range(i + 2, len(order))
    ]

    ribbons = []
    for source, target, overlay in pairs:
        source_band = bands.bands_down.get(source, {}).get(target)
        target_band = bands.bands_up.get(target, {}).get(source)
        if source_band is None or target_band is None:
            continue
        source_pct = stats.mass_down_pct(source, target)
        tall_enough = min(source_band.height, target_band.height) >= RIBBON_LABEL_MIN_HEIGHT
        ribbons.append(
            Ribbon(
                source=source,
                target=target,
                source_band=source_band,
                target_band=target_band,
                source_pct=source_pct,
                target_pct=stats.mass_up_pct(target, source),
                overlay=overlay,
                show_label=bool(
                    tall_enough and source_pct and (overlay or out_degree[source] > 1)
                ),
            )
        )
    return ribbons


def layout_layer_diagram(
    stats: CoverageStats, config: BarConfig | None = None
) -> LayerDiagram | None:
    """Lay out the whole layer-coverage diagram.

    Returns:
        The diagram, or None when no layer has any node.
    """
    config = config or BarConfig()
    if stats.max_total() <= 0:
        logger.info("No traceability tags found; skipping layer diagram")
        return None

    order = stats.layer_order
    bar_layout = layout_bars(
        order, stats.total, stats.covered_up, stats.covered_down, stats.mass_down, config
    )
    bands = layout_bands(
        order,
        bar_layout.bar_offset_y,
        bar_layout.bar_height,
        stats.mass_up,
        stats.mass_down,
        stats.total,
    )

    bars = []
    for layer in order:
        total = stats.total.get(layer, 0)
        if not total:
            continue
        height = bar_layout.bar_height[layer]
        up = stats.covered_up.get(layer, 0)
        down = stats.covered_down.get(layer, 0)
        bars.append(
            LayerBar(
                layer=layer,
                total=total,
                y0=bar_layout.bar_offset_y[layer],
                height=height,
                covered_up=up,
                covered_down=down,
                up_height=up / total * height,
                down_height=down / total * height,
                up_pct=stats.up_pct(layer),
                down_pct=stats.down_pct(layer),
            )
        )

    return LayerDiagram(
        layer_order=list(order),
        bars=bars,
        bar_layout=bar_layout,
        bands=bands,
        ribbons=ribbon_plan(stats, bands),
        height=canvas_height(order, bar_layout, config),
    )
