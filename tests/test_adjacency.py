"""Tests for link derivation, adjacency and layer partitioning."""

import logging

from traceviz.graph.adjacency import (
    IdLink,
    Link,
    build_adjacency,
    derive_links,
    partition_by_layer,
    resolve_links,
    valid_links,
)
from traceviz.layers import UNKNOWN


class TestDeriveLinks:
    """Tests for derive_links()."""

    def test_parent_to_child(self, dataset):
        links = derive_links(dataset.tags)
        assert IdLink("@REQ1@", "@ARC1@") in links
        assert IdLink("@IMP1@", "@UT1@") in links

    def test_none_produces_no_link(self, dataset):
        links = derive_links(dataset.tags)
        assert all(link.source != "NONE" for link in links)
        assert len(links) == 5


class TestResolveLinks:
    """Tests for resolve_links()."""

    def test_resolves_to_indices(self, dataset):
        links = resolve_links(derive_links(dataset.tags), dataset.tags)
        assert Link(0, 2) in links
        assert Link(2, 3) in links

    def test_unresolved_end_logged(self, dataset, caplog):
        with caplog.at_level(logging.WARNING, logger="traceviz.graph.adjacency"):
            links = resolve_links(derive_links(dataset.tags), dataset.tags)
        assert Link(None, 5) in links
        assert "@MISSING@" in caplog.text

    def test_valid_links_drops_unresolved(self, dataset):
        links = resolve_links(derive_links(dataset.tags), dataset.tags)
        assert len(valid_links(links, len(dataset.tags))) == 4


class TestBuildAdjacency:
    """Tests for build_adjacency()."""

    def test_undirected(self):
        adj = build_adjacency(3, [Link(0, 1), Link(1, 2)])
        assert adj == [[1], [0, 2], [1]]

    def test_out_of_range_link_skipped(self, caplog):
        """An out-of-range index adds no edge and does not raise."""
        with caplog.at_level(logging.WARNING, logger="traceviz.graph.adjacency"):
            adj = build_adjacency(2, [Link(0, 5), Link(-1, 0)])
        assert adj == [[], []]
        assert "malformed link" in caplog.text

    def test_non_numeric_link_skipped(self):
        adj = build_adjacency(2, [Link("nodeA", "nodeB"), Link(None, 1), Link(True, 0)])
        assert adj == [[], []]

    def test_empty(self):
        assert build_adjacency(0, []) == []

    def test_duplicate_links_kept(self):
        assert build_adjacency(2, [Link(0, 1), Link(0, 1)]) == [[1, 1], [0, 0]]


class TestPartitionByLayer:
    """Tests for partition_by_layer()."""

    def test_preserves_dataset_order(self):
        types = ["B", "A", "B", "A", "B"]
        groups = partition_by_layer(types, ["A", "B"])
        assert groups == {"A": [1, 3], "B": [0, 2, 4]}

    def test_unknown_excluded(self):
        groups = partition_by_layer(["A", UNKNOWN, "A"])
        assert groups == {"A": [0, 2]}

    def test_unknown_kept_on_request(self):
        groups = partition_by_layer(["A", UNKNOWN], include_unknown=True)
        assert groups == {"A": [0], UNKNOWN: [1]}

    def test_every_listed_layer_present(self):
        groups = partition_by_layer(["A"], ["A", "B"])
        assert groups == {"A": [0], "B": []}

    def test_unlisted_layer_dropped(self):
        assert partition_by_layer(["A", "Z"], ["A"]) == {"A": [0]}
