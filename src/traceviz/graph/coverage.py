"""Coverage - Per-layer upstream/downstream coverage statistics.

For every node, the distinct layers among its neighbours are split into an
upstream set (earlier in the layer order) and a downstream set (later).
A node is "covered" in a direction when that set is non-empty, and it
contributes one unit of mass per direction, split equally across the
layers in the set. Same-layer neighbours and neighbours outside the layer
order are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

LESS_THAN_ONE = "<1%"


def format_pct(value: float, total: float) -> str:
    """Format ``value / total`` as a compact percentage label.

    Returns ``""`` when there is nothing to label (zero value or zero
    denominator), ``"<1%"`` below half a percent, a whole number at 10%
    and above, otherwise one decimal with a trailing ``.0`` removed.
    Rounding is half-up on the exact value.

    >>> format_pct(99, 1000)
    '9.9%'
    >>> format_pct(1, 1000)
    '<1%'
    """
    if not total or total <= 0 or not value:
        return ""
    p = (value / total) * 100
    if 0 < p < 0.5:
        return LESS_THAN_ONE
    exponent = Decimal("1") if p >= 10 else Decimal("0.1")
    text = str(Decimal(p).quantize(exponent, rounding=ROUND_HALF_UP))
    if text.endswith(".0"):
        text = text[:-2]
    return text + "%"


@dataclass
class CoverageStats:
    """Coverage record for every layer in ``layer_order``.

    Attributes:
        layer_order: Layers, upstream first.
        total: Node count per layer.
        covered_up: Nodes with at least one upstream neighbour layer.
        covered_down: Nodes with at least one downstream neighbour layer.
        mass_up: ``mass_up[L][T]`` - fractional mass L sends upstream to T.
        mass_down: ``mass_down[L][T]`` - fractional mass L sends downstream to T.
    """

    layer_order: list[str] = field(default_factory=list)
    total: dict[str, int] = field(default_factory=dict)
    covered_up: dict[str, int] = field(default_factory=dict)
    covered_down: dict[str, int] = field(default_factory=dict)
    mass_up: dict[str, dict[str, float]] = field(default_factory=dict)
    mass_down: dict[str, dict[str, float]] = field(default_factory=dict)

    @property
    def out_degree_up(self) -> dict[str, int]:
        """Number of layers each layer sends positive upstream mass to."""
        return {
            layer: sum(1 for m in self.mass_up.get(layer, {}).values() if m > 0)
            for layer in self.layer_order
        }

    @property
    def out_degree_down(self) -> dict[str, int]:
        """Number of layers each layer sends positive downstream mass to."""
        return {
            layer: sum(1 for m in self.mass_down.get(layer, {}).values() if m > 0)
            for layer in self.layer_order
        }

    def up_pct(self, layer: str) -> str:
        return format_pct(self.covered_up.get(layer, 0), self.total.get(layer, 0))

    def down_pct(self, layer: str) -> str:
        return format_pct(self.covered_down.get(layer, 0), self.total.get(layer, 0))

    def mass_up_pct(self, layer: str, target: str) -> str:
        return format_pct(self.mass_up.get(layer, {}).get(target, 0.0), self.total.get(layer, 0))

    def mass_down_pct(self, layer: str, target: str) -> str:
        return format_pct(
            self.mass_down.get(layer, {}).get(target, 0.0), self.total.get(layer, 0)
        )

    def max_total(self) -> int:
        return max((self.total.get(layer, 0) for layer in self.layer_order), default=0)


@dataclass
class FileCoverage:
    """Coverage of the tags of one layer found in one file."""

    total: int = 0
    up: int = 0
    down: int = 0
    version: str = "unknown"


def _layer_of(nodes_by_layer: dict[str, list[int]]) -> dict[int, str]:
    layer_of: dict[int, str] = {}
    for layer, indices in nodes_by_layer.items():
        for i in indices:
            layer_of[i] = layer
    return layer_of


def _neighbor_layers(
    node: int,
    layer: str,
    adjacency: Sequence[Sequence[int]],
    layer_of: dict[int, str],
    rank: dict[str, int],
) -> tuple[list[str], list[str]]:
    """Distinct upstream and downstream neighbour layers of a node."""
    own = rank[layer]
    up: dict[str, None] = {}
    down: dict[str, None] = {}
    neighbors = adjacency[node] if node < len(adjacency) else ()
    for j in neighbors:
        other = layer_of.get(j)
        if other is None or other == layer or other not in rank:
            continue
        if rank[other] < own:
            up[other] = None
        elif rank[other] > own:
            down[other] = None
    return list(up), list(down)


def compute_coverage(
    layer_order: Sequence[str],
    adjacency: Sequence[Sequence[int]],
    nodes_by_layer: dict[str, list[int]],
) -> CoverageStats:
    """Compute per-layer coverage counts and mass distribution.

    Args:
        layer_order: Layer names, upstream first.
        adjacency: Undirected adjacency list over node indices.
        nodes_by_layer: Node indices of each layer.

    Returns:
        CoverageStats with an entry for every layer in ``layer_order``.
    """
    order = list(layer_order)
    rank = {layer: k for k, layer in enumerate(order)}
    layer_of = _layer_of({k: v for k, v in nodes_by_layer.items() if k in rank})

    stats = CoverageStats(layer_order=order)
    for layer in order:
        stats.total[layer] = len(nodes_by_layer.get(layer, []))
        stats.covered_up[layer] = 0
        stats.covered_down[layer] = 0
        stats.mass_up[layer] = {t: 0.0 for t in order if t != layer}
        stats.mass_down[layer] = {t: 0.0 for t in order if t != layer}

    for layer in order:
        for i in nodes_by_layer.get(layer, []):
            up, down = _neighbor_layers(i, layer, adjacency, layer_of, rank)
            if up:
                stats.covered_up[layer] += 1
                weight = 1 / len(up)
                for target in up:
                    stats.mass_up[layer][target] += weight
            if down:
                stats.covered_down[layer] += 1
                weight = 1 / len(down)
                for target in down:
                    stats.mass_down[layer][target] += weight

    return stats


def compute_file_coverage(
    layer_order: Sequence[str],
    adjacency: Sequence[Sequence[int]],
    nodes_by_layer: dict[str, list[int]],
    file_names: Sequence[str],
    file_versions: Sequence[str],
    skip_files: Sequence[str] = ("config.md",),
) -> dict[str, dict[str, FileCoverage]]:
    """Break each layer's coverage down by source file.

    Args:
        layer_order: Layer names, upstream first.
        adjacency: Undirected adjacency list over node indices.
        nodes_by_layer: Node indices of each layer.
        file_names: Base filename per node index ('' when unknown).
        file_versions: File version descriptor per node index.
        skip_files: Base filenames never reported.

    Returns:
        ``{layer: {base filename: FileCoverage}}`` with filenames sorted.
    """
    order = list(layer_order)
    rank = {layer: k for k, layer in enumerate(order)}
    layer_of = _layer_of({k: v for k, v in nodes_by_layer.items() if k in rank})

    result: dict[str, dict[str, FileCoverage]] = {}
    for layer in order:
        per_file: dict[str, FileCoverage] = {}
        for i in nodes_by_layer.get(layer, []):
            name = file_names[i] if i < len(file_names) else ""
            if not name or name in skip_files:
                continue
            up, down = _neighbor_layers(i, layer, adjacency, layer_of, rank)
            entry = per_file.get(name)
            if entry is None:
                version = file_versions[i] if i < len(file_versions) else "unknown"
                entry = per_file[name] = FileCoverage(version=version)
            entry.total += 1
            if up:
                entry.up += 1
            if down:
                entry.down += 1
        result[layer] = {
            name: per_file[name] for name in sorted(per_file, key=lambda n: (n.lower(), n))
        }
    return result


__all__ = [
    "LESS_THAN_ONE",
    "format_pct",
    "CoverageStats",
    "FileCoverage",
    "compute_coverage",
    "compute_file_coverage",
]
