"""Tests for the tag-level flow diagram layout."""

import logging

import pytest

from traceviz.config.settings import FlowConfig
from traceviz.graph.adjacency import Link
from traceviz.layout.flow import (
    FlowNode,
    flow_column_order,
    flow_dimensions,
    layout_flow_diagram,
    position_nodes_in_grid,
    reorder_by_barycenter,
)


def _nodes(*layers):
    return [FlowNode(index=i, id=f"@N{i}@", layer=layer) for i, layer in enumerate(layers)]


class TestFlowColumnOrder:
    """Tests for flow_column_order()."""

    def test_extra_layers_appended(self):
        assert flow_column_order(["A", "B"], ["B", "Unknown", "A"]) == ["A", "B", "Unknown"]

    def test_empty(self):
        assert flow_column_order([], []) == []


class TestFlowDimensions:
    """Tests for flow_dimensions()."""

    def test_tallest_column(self):
        nodes = _nodes("A", "A", "B")
        by_layer = {"A": nodes[:2], "B": nodes[2:]}
        assert flow_dimensions(["A", "B"], by_layer) == (2, 134)

    def test_single_row(self):
        nodes = _nodes("A")
        assert flow_dimensions(["A"], {"A": nodes}) == (1, 104)

    def test_no_nodes_still_one_row(self):
        assert flow_dimensions([], {}) == (1, 104)


class TestPositionNodesInGrid:
    """Tests for position_nodes_in_grid()."""

    def test_sample_positions(self, session):
        diagram = session.flow_diagram
        by_layer = diagram.nodes_by_layer
        req = by_layer["Requirement"]
        assert [n.x0 for n in req] == [20, 20]
        assert [n.y0 for n in req] == [20, 50]
        assert req[0].y1 == 44
        assert by_layer["Architecture"][0].x0 == pytest.approx(406.6667, abs=1e-3)
        assert by_layer["Architecture"][0].y0 == 35
        assert by_layer["Implementation"][0].x0 == pytest.approx(793.3333, abs=1e-3)

    def test_last_column_capped(self, session):
        ut = session.flow_diagram.nodes_by_layer["Unit Test"][0]
        assert ut.x0 == 1160
        assert ut.x1 == 1180

    def test_single_column(self):
        nodes = _nodes("A")
        position_nodes_in_grid({"A": nodes}, ["A"], 400, 104)
        assert nodes[0].x0 == 20
        assert nodes[0].y0 == 20


class TestReorderByBarycenter:
    """Tests for reorder_by_barycenter()."""

    def test_crossing_removed(self):
        """A0-B1 and A1-B0 puts B1 above B0."""
        nodes = _nodes("A", "A", "B", "B")
        by_layer = {"A": nodes[:2], "B": nodes[2:]}
        reorder_by_barycenter(by_layer, ["A", "B"], [Link(0, 3), Link(1, 2)], nodes)
        assert [n.index for n in by_layer["B"]] == [3, 2]

    def test_unlinked_nodes_last(self):
        nodes = _nodes("A", "B", "B", "B")
        by_layer = {"A": nodes[:1], "B": nodes[1:]}
        reorder_by_barycenter(by_layer, ["A", "B"], [Link(0, 3)], nodes)
        assert [n.index for n in by_layer["B"]] == [3, 1, 2]

    def test_ties_keep_order(self):
        nodes = _nodes("A", "B", "B")
        by_layer = {"A": nodes[:1], "B": nodes[1:]}
        reorder_by_barycenter(by_layer, ["A", "B"], [Link(0, 1), Link(0, 2)], nodes)
        assert [n.index for n in by_layer["B"]] == [1, 2]

    def test_first_column_untouched(self):
        nodes = _nodes("A", "A", "B")
        by_layer = {"A": nodes[:2], "B": nodes[2:]}
        reorder_by_barycenter(by_layer, ["A", "B"], [Link(1, 2)], nodes)
        assert [n.index for n in by_layer["A"]] == [0, 1]

    def test_sample_dataset(self, session):
        by_layer = session.flow_diagram.nodes_by_layer
        assert [n.id for n in by_layer["Implementation"]] == ["@IMP1@", "@IMP2@"]


class TestLayoutFlowDiagram:
    """Tests for layout_flow_diagram()."""

    def test_sample(self, session):
        diagram = session.flow_diagram
        assert diagram.columns == ["Requirement", "Architecture", "Implementation", "Unit Test"]
        assert diagram.rows == 2
        assert diagram.height == 134
        assert diagram.width == 1200
        assert len(diagram.links) == 4

    def test_unresolved_links_dropped(self, caplog):
        nodes = _nodes("A", "B")
        with caplog.at_level(logging.WARNING, logger="traceviz.layout.flow"):
            diagram = layout_flow_diagram(nodes, [Link(0, 1), Link(None, 1)], ["A", "B"])
        assert diagram.links == [Link(0, 1)]
        assert "Dropped 1" in caplog.text

    def test_reorder_disabled(self):
        nodes = _nodes("A", "A", "B", "B")
        diagram = layout_flow_diagram(
            nodes, [Link(0, 3), Link(1, 2)], ["A", "B"], FlowConfig(reorder=False)
        )
        assert [n.index for n in diagram.nodes_by_layer["B"]] == [2, 3]

    def test_unknown_column_last(self):
        nodes = _nodes("Unknown", "A")
        diagram = layout_flow_diagram(nodes, [], ["A"])
        assert diagram.columns == ["A", "Unknown"]

    def test_custom_width(self):
        nodes = _nodes("A", "B")
        diagram = layout_flow_diagram(nodes, [], ["A", "B"], width=600)
        assert diagram.nodes[1].x0 == 560
