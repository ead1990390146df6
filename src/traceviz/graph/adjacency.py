"""Adjacency - Link derivation and undirected adjacency construction.

Links are derived from each tag's ``from_tags`` (parent -> child), resolved
from tag ids to node indices, and folded into an undirected adjacency list.
The adjacency is rebuilt for every computation and never patched in place.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, NamedTuple, Sequence

from traceviz.dataset import TraceTag
from traceviz.layers import UNKNOWN

logger = logging.getLogger(__name__)


class IdLink(NamedTuple):
    """A derived-from link between tag ids (source is the parent)."""

    source: str
    target: str


class Link(NamedTuple):
    """A link between node indices.

    Either end may be ``None`` (or otherwise invalid) for links whose tag
    id did not resolve; consumers skip such links.
    """

    source: Any
    target: Any


def derive_links(tags: Iterable[TraceTag]) -> list[IdLink]:
    """Derive parent -> child links from every tag's ``from_tags``.

    The ``NONE`` sentinel and empty entries produce no link.
    """
    return [IdLink(parent, tag.id) for tag in tags for parent in tag.parents]


def resolve_links(id_links: Iterable[IdLink], tags: Sequence[TraceTag]) -> list[Link]:
    """Map id links onto node indices.

    Unresolvable ends are kept as ``None`` and logged; use
    :func:`valid_links` to drop them.
    """
    index_by_id: dict[str, int] = {}
    for i, tag in enumerate(tags):
        if tag.id:
            index_by_id.setdefault(tag.id, i)

    links = []
    for i, link in enumerate(id_links):
        source = index_by_id.get(link.source)
        target = index_by_id.get(link.target)
        if source is None or target is None:
            logger.warning(
                "Link %d has undefined source/target: %s -> %s", i, link.source, link.target
            )
        links.append(Link(source, target))
    return links


def _is_node_index(value: Any, node_count: int) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value < node_count


def valid_links(links: Iterable[Link], node_count: int) -> list[Link]:
    """Links whose ends are both in-range node indices."""
    return [
        link
        for link in links
        if _is_node_index(link.source, node_count) and _is_node_index(link.target, node_count)
    ]


def build_adjacency(node_count: int, links: Iterable[Link]) -> list[list[int]]:
    """Build an undirected adjacency list over node indices.

    Each valid link adds the target to the source's list and vice versa.
    Links with a non-integer or out-of-range end are skipped with a
    warning. Runs in O(V + E).
    """
    adjacency: list[list[int]] = [[] for _ in range(node_count)]
    for link in links:
        if not (
            _is_node_index(link.source, node_count) and _is_node_index(link.target, node_count)
        ):
            logger.warning("Skipping malformed link %r -> %r", link.source, link.target)
            continue
        adjacency[link.source].append(link.target)
        adjacency[link.target].append(link.source)
    return adjacency


def partition_by_layer(
    node_types: Sequence[str],
    layer_order: Sequence[str] | None = None,
    include_unknown: bool = False,
) -> dict[str, list[int]]:
    """Group node indices by resolved layer name.

    Args:
        node_types: Resolved layer name per node index.
        layer_order: Layers to partition into. Every listed layer gets an
            entry (possibly empty); nodes of unlisted layers are left out.
            When omitted, groups are created in first-appearance order.
        include_unknown: Keep a group for ``"Unknown"`` nodes.

    Returns:
        Mapping of layer name to node indices in original dataset order.
    """
    groups: dict[str, list[int]] = {}
    if layer_order is not None:
        for name in layer_order:
            groups.setdefault(name, [])

    for i, name in enumerate(node_types):
        if name == UNKNOWN and not include_unknown:
            continue
        if layer_order is not None and name not in groups:
            continue
        groups.setdefault(name, []).append(i)
    return groups


__all__ = [
    "IdLink",
    "Link",
    "derive_links",
    "resolve_links",
    "valid_links",
    "build_adjacency",
    "partition_by_layer",
]
