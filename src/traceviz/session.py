"""
traceviz.session - One render cycle over a dataset snapshot.

A RenderSession runs the whole pipeline once: layer order, links,
adjacency, coverage, both diagram layouts, summaries and health. It owns
the colour assignment for its layers, so sessions never share state.
"""

from __future__ import annotations

import logging

from traceviz.config.settings import DiagramConfig
from traceviz.dataset import TraceDataset
from traceviz.graph.adjacency import (
    build_adjacency,
    derive_links,
    partition_by_layer,
    resolve_links,
    valid_links,
)
from traceviz.graph.coverage import compute_coverage, compute_file_coverage
from traceviz.layers import legend_types, resolve_layer_order
from traceviz.layout.bars import layout_layer_diagram
from traceviz.layout.flow import FlowNode, layout_flow_diagram
from traceviz.palette import ColorContext
from traceviz.paths import base_name
from traceviz.summary import file_layer_types, health_summary, layer_summaries

logger = logging.getLogger(__name__)


class RenderSession:
    """Computes every output the renderer consumes for one dataset.

    Args:
        dataset: The scanner output.
        config: Diagram settings (defaults when omitted).
        width: Flow diagram width; defaults to the configured width.
    """

    def __init__(
        self,
        dataset: TraceDataset,
        config: DiagramConfig | None = None,
        width: float | None = None,
    ) -> None:
        self.dataset = dataset
        self.config = config or DiagramConfig()

        tags = dataset.tags
        self.node_types = dataset.tag_types()
        self.layer_order = resolve_layer_order(self.node_types, self.config.layer_order)
        self.colors = ColorContext(
            self.config.colors.scheme, self.config.colors.unknown, self.layer_order
        )

        self.id_links = derive_links(tags)
        self.links = resolve_links(self.id_links, tags)
        self.direct_links = valid_links(self.links, len(tags))
        self.adjacency = build_adjacency(len(tags), self.direct_links)
        self.nodes_by_layer = partition_by_layer(self.node_types, self.layer_order)

        self.coverage = compute_coverage(self.layer_order, self.adjacency, self.nodes_by_layer)
        self.file_coverage = compute_file_coverage(
            self.layer_order,
            self.adjacency,
            self.nodes_by_layer,
            [base_name(dataset.tag_file_path(tag)) for tag in tags],
            [dataset.tag_file_version(tag) for tag in tags],
            skip_files=self.config.skip_files,
        )

        self.layer_diagram = layout_layer_diagram(self.coverage, self.config.bars)
        self.flow_diagram = layout_flow_diagram(
            self._flow_nodes(), self.links, self.layer_order, self.config.flow, width
        )
        self.summaries = layer_summaries(self.coverage, self.file_coverage)
        self.health = health_summary(dataset)
        self.file_types = file_layer_types(dataset)

        # Assign colours for every column shown, including Unknown.
        for column in self.flow_diagram.columns:
            self.colors.color(column)

        logger.debug(
            "Session computed: %d layers, %d tags, %d links",
            len(self.layer_order),
            len(tags),
            len(self.direct_links),
        )

    def _flow_nodes(self) -> list[FlowNode]:
        return [
            FlowNode(
                index=i,
                id=tag.id,
                layer=self.node_types[i],
                file=self.dataset.tag_file_path(tag),
                line=tag.line,
                description=tag.description,
            )
            for i, tag in enumerate(self.dataset.tags)
        ]

    @property
    def legend(self) -> list[str]:
        return legend_types(self.layer_order)

    def to_dict(self) -> dict:
        """JSON-compatible document for an external renderer."""
        from traceviz.serialize import serialize_session

        return serialize_session(self)
