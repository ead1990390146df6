"""Flow - Geometry of the tag-level flow diagram.

Tags are placed in one column per layer, ordered upstream to downstream,
and links are drawn between them. Within a column the tags can be
reordered by the barycenter of their neighbours in the previous column,
which keeps related tags roughly level with each other.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from traceviz.config.settings import FlowConfig
from traceviz.graph.adjacency import Link, valid_links

logger = logging.getLogger(__name__)

COLUMN_MARGIN = 20


@dataclass
class FlowNode:
    """A tag placed in the flow diagram."""

    index: int
    id: str
    layer: str
    file: str | None = None
    line: int = 0
    description: str = ""
    x0: float = 0.0
    x1: float = 0.0
    y0: float = 0.0
    y1: float = 0.0


@dataclass
class FlowDiagram:
    """Positioned nodes and index links of the flow diagram."""

    columns: list[str]
    nodes: list[FlowNode]
    links: list[Link]
    width: float
    height: float
    rows: int
    nodes_by_layer: dict[str, list[FlowNode]] = field(default_factory=dict)


def flow_column_order(layer_order: Sequence[str], present: Iterable[str]) -> list[str]:
    """Columns: the layer order, then any other present layer (e.g. Unknown)."""
    columns = list(layer_order)
    for name in present:
        if name not in columns:
            columns.append(name)
    return columns


def flow_dimensions(
    columns: Sequence[str],
    nodes_by_layer: dict[str, list[FlowNode]],
    config: FlowConfig | None = None,
) -> tuple[int, float]:
    """Row count (tallest column, at least 1) and total diagram height."""
    config = config or FlowConfig()
    tallest = max((len(nodes_by_layer.get(c, [])) for c in columns), default=0)
    rows = max(1, tallest)
    height = (
        config.top_padding
        + rows * config.node_height
        + max(0, rows - 1) * config.node_gap
        + config.bottom_padding
    )
    return rows, height


def position_nodes_in_grid(
    nodes_by_layer: dict[str, list[FlowNode]],
    columns: Sequence[str],
    width: float,
    height: float,
    config: FlowConfig | None = None,
) -> None:
    """Assign ``x0/x1/y0/y1`` to every node, one column per layer.

    Columns are spread evenly across the width and each column is centred
    vertically in the space between the top and bottom padding.
    """
    config = config or FlowConfig()
    denom = max(1, len(columns) - 1)
    available = max(0, height - config.top_padding - config.bottom_padding)
    max_x = width - COLUMN_MARGIN - config.node_width

    for i, column in enumerate(columns):
        column_nodes = nodes_by_layer.get(column, [])
        x = min((i / denom) * (width - 2 * COLUMN_MARGIN) + COLUMN_MARGIN, max_x)

        count = len(column_nodes)
        column_height = (
            count * config.node_height + max(0, count - 1) * config.node_gap if count else 0
        )
        start_y = config.top_padding + max(0, (available - column_height) / 2)

        for row, node in enumerate(column_nodes):
            node.x0 = x
            node.x1 = x + config.node_width
            node.y0 = start_y + row * (config.node_height + config.node_gap)
            node.y1 = node.y0 + config.node_height


def reorder_by_barycenter(
    nodes_by_layer: dict[str, list[FlowNode]],
    layer_order: Sequence[str],
    links: Iterable[Link],
    all_nodes: Sequence[FlowNode],
) -> None:
    """Reorder each column by the mean position of its neighbours upstream.

    Single forward pass: for every column after the first, a node's key is
    the average position (in the already reordered previous column) of its
    linked neighbours there. Nodes without such a neighbour sort last.
    The sort is stable, so ties keep their original order. Mutates
    ``nodes_by_layer`` in place.
    """
    neighbors: dict[int, list[int]] = {}
    for link in valid_links(links, len(all_nodes)):
        source = all_nodes[link.source].index
        target = all_nodes[link.target].index
        neighbors.setdefault(source, []).append(target)
        neighbors.setdefault(target, []).append(source)

    for k in range(1, len(layer_order)):
        column = nodes_by_layer.get(layer_order[k])
        if not column:
            continue
        previous = nodes_by_layer.get(layer_order[k - 1], [])
        position = {node.index: p for p, node in enumerate(previous)}

        def barycenter(node: FlowNode) -> float:
            placed = [position[n] for n in neighbors.get(node.index, []) if n in position]
            return sum(placed) / len(placed) if placed else math.inf

        nodes_by_layer[layer_order[k]] = sorted(column, key=barycenter)


def layout_flow_diagram(
    nodes: list[FlowNode],
    links: Sequence[Link],
    layer_order: Sequence[str],
    config: FlowConfig | None = None,
    width: float | None = None,
) -> FlowDiagram:
    """Group, optionally reorder, and position the flow diagram's nodes.

    Args:
        nodes: One FlowNode per tag, indexed like the dataset's tags.
        links: Index links (invalid ones are dropped).
        layer_order: Explicit layer order; other layers follow it.
        config: Flow geometry settings.
        width: Drawing width; defaults to ``config.width``.
    """
    config = config or FlowConfig()
    width = config.width if width is None else width

    nodes_by_layer: dict[str, list[FlowNode]] = {}
    for node in nodes:
        nodes_by_layer.setdefault(node.layer, []).append(node)
    columns = flow_column_order(layer_order, nodes_by_layer)

    drawable = valid_links(links, len(nodes))
    if len(drawable) != len(links):
        logger.warning("Dropped %d unresolved links from flow diagram", len(links) - len(drawable))

    if config.reorder:
        reorder_by_barycenter(nodes_by_layer, columns, drawable, nodes)

    rows, height = flow_dimensions(columns, nodes_by_layer, config)
    position_nodes_in_grid(nodes_by_layer, columns, width, height, config)

    return FlowDiagram(
        columns=columns,
        nodes=nodes,
        links=drawable,
        width=width,
        height=height,
        rows=rows,
        nodes_by_layer=nodes_by_layer,
    )
