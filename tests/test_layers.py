"""Tests for layer and file reference resolution."""

import logging

from traceviz.layers import (
    UNKNOWN,
    ByEncodedString,
    ByFileId,
    ByFilePath,
    ByLayerId,
    NoFile,
    NoLayer,
    file_ref_from_tag,
    layer_ref_from_tag,
    legend_types,
    resolve_file_path,
    resolve_layer_order,
    resolve_type,
)

LAYER_TABLE = ["Requirement", "Architecture", "Implementation"]


class TestLayerRefFromTag:
    """Tests for building layer reference variants."""

    def test_layer_id_wins(self):
        assert layer_ref_from_tag(1, "x:Legacy") == ByLayerId(1, "x:Legacy")

    def test_encoded_string_without_layer_id(self):
        assert layer_ref_from_tag(None, "path:Type") == ByEncodedString("path:Type")

    def test_negative_layer_id_uses_string(self):
        assert layer_ref_from_tag(-1, "path:Type") == ByEncodedString("path:Type")

    def test_non_integer_layer_id_uses_string(self):
        assert layer_ref_from_tag("2", "a:B") == ByEncodedString("a:B")
        assert layer_ref_from_tag(True, "a:B") == ByEncodedString("a:B")

    def test_nothing(self):
        assert layer_ref_from_tag(None, None) == NoLayer()
        assert layer_ref_from_tag(None, "") == NoLayer()


class TestResolveType:
    """Tests for resolve_type()."""

    def test_layer_id_resolves_through_table(self):
        assert resolve_type(ByLayerId(0), LAYER_TABLE) == "Requirement"
        assert resolve_type(ByLayerId(2, "ignored:Other"), LAYER_TABLE) == "Implementation"

    def test_out_of_range_layer_id_falls_back_to_string(self):
        assert resolve_type(ByLayerId(9, "path:Fallback"), LAYER_TABLE) == "Fallback"

    def test_out_of_range_layer_id_without_string(self):
        assert resolve_type(ByLayerId(9), LAYER_TABLE) == UNKNOWN

    def test_trailing_segment_trimmed(self):
        assert resolve_type(ByEncodedString("a:b: FinalType "), LAYER_TABLE) == "FinalType"

    def test_single_segment(self):
        assert resolve_type(ByEncodedString("TestType"), LAYER_TABLE) == "TestType"

    def test_blank_trailing_segment_is_unknown(self):
        assert resolve_type(ByEncodedString("path: "), LAYER_TABLE) == UNKNOWN

    def test_no_layer(self):
        assert resolve_type(NoLayer(), LAYER_TABLE) == UNKNOWN


class TestResolveFilePath:
    """Tests for file reference resolution."""

    FILES = ["docs/req.md", "docs/arc.md"]

    def test_file_id(self):
        assert resolve_file_path(file_ref_from_tag(1, None), self.FILES) == "docs/arc.md"

    def test_legacy_path(self):
        assert file_ref_from_tag(None, "legacy.md") == ByFilePath("legacy.md")
        assert resolve_file_path(ByFilePath("legacy.md"), self.FILES) == "legacy.md"

    def test_file_id_missing_table_falls_back_to_path(self):
        assert resolve_file_path(ByFileId(0, "fallback.md"), []) == "fallback.md"

    def test_out_of_range_file_id(self):
        assert resolve_file_path(ByFileId(99), self.FILES) is None

    def test_no_file(self):
        assert file_ref_from_tag(None, None) == NoFile()
        assert resolve_file_path(NoFile(), self.FILES) is None


class TestResolveLayerOrder:
    """Tests for resolve_layer_order()."""

    def test_explicit_order_filtered_to_present(self):
        types = ["Architecture", "Requirement", "Architecture"]
        explicit = ["Requirement", "Architecture", "Implementation"]
        assert resolve_layer_order(types, explicit) == ["Requirement", "Architecture"]

    def test_explicit_order_ignores_unlisted_layers(self):
        assert resolve_layer_order(["A", "Z"], ["A"]) == ["A"]

    def test_explicit_order_deduplicated(self):
        assert resolve_layer_order(["A", "B"], ["A", "B", "A"]) == ["A", "B"]

    def test_inferred_first_appearance(self, caplog):
        """Without an explicit order the first-seen order is used and logged."""
        with caplog.at_level(logging.INFO, logger="traceviz.layers"):
            order = resolve_layer_order(["Impl", "Req", "Impl", UNKNOWN, "Test"])
        assert order == ["Impl", "Req", "Test"]
        assert "inferred" in caplog.text

    def test_unknown_never_in_order(self):
        assert resolve_layer_order([UNKNOWN], [UNKNOWN]) == []


class TestLegendTypes:
    def test_order_used(self):
        assert legend_types(["A", "B"]) == ["A", "B"]

    def test_empty_falls_back_to_unknown(self):
        assert legend_types([]) == [UNKNOWN]
