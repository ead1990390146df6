"""
traceviz.summary - Textual coverage summaries and traceability health.

Both views are derived from the same coverage data as the diagrams, so
the percentages printed here match the diagram labels.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from traceviz.dataset import TraceDataset
from traceviz.graph.coverage import CoverageStats, FileCoverage, format_pct
from traceviz.layers import UNKNOWN
from traceviz.paths import base_name, file_extension, format_version_display, target_id

logger = logging.getLogger(__name__)

HEALTH_DEFAULT_EXTENSION = "txt"


@dataclass
class FileSummary:
    """Coverage of one layer's tags within one file."""

    name: str
    target_id: str
    extension: str
    version: str
    up_pct: str
    down_pct: str


@dataclass
class LayerSummary:
    """Upstream/downstream coverage of one layer."""

    layer: str
    total: int
    upstream: list[str] = field(default_factory=list)
    downstream: list[str] = field(default_factory=list)
    files: list[FileSummary] = field(default_factory=list)


def layer_summaries(
    stats: CoverageStats,
    file_coverage: dict[str, dict[str, FileCoverage]] | None = None,
) -> list[LayerSummary]:
    """Summarise every layer that has nodes and at least one connection.

    Upstream parts list the closest layer first; downstream parts follow
    layer order. Each part reads ``"<layer> <pct>"``.
    """
    order = stats.layer_order
    file_coverage = file_coverage or {}
    summaries = []

    for k, layer in enumerate(order):
        total = stats.total.get(layer, 0)
        if not total:
            continue

        upstream = [
            f"{target} {format_pct(stats.mass_up[layer][target], total)}"
            for target in reversed(order[:k])
            if stats.mass_up[layer].get(target, 0) > 0
        ]
        downstream = [
            f"{target} {format_pct(stats.mass_down[layer][target], total)}"
            for target in order[k + 1 :]
            if stats.mass_down[layer].get(target, 0) > 0
        ]
        if not upstream and not downstream:
            continue

        files = [
            FileSummary(
                name=name,
                target_id=target_id(name),
                extension=file_extension(name),
                version=format_version_display(cov.version),
                up_pct=format_pct(cov.up, cov.total),
                down_pct=format_pct(cov.down, cov.total),
            )
            for name, cov in file_coverage.get(layer, {}).items()
        ]
        summaries.append(
            LayerSummary(
                layer=layer, total=total, upstream=upstream, downstream=downstream, files=files
            )
        )
    return summaries


def file_layer_types(dataset: TraceDataset) -> dict[str, list[str]]:
    """Layers present in each file, keyed by base filename.

    Names are sorted; a file with only unresolvable tags maps to
    ``["Unknown"]``.
    """
    by_file: dict[str, set[str]] = {}
    for tag in dataset.iter_tags():
        path = dataset.tag_file_path(tag)
        if not path:
            continue
        by_file.setdefault(base_name(path), set()).add(dataset.tag_type(tag))

    result = {}
    for name, types in by_file.items():
        named = sorted(t for t in types if t and t != UNKNOWN)
        result[name] = named or [UNKNOWN]
    return result


@dataclass
class HealthEntry:
    """A tag listed in the health report, resolved for linking."""

    tag_id: str
    line: int
    file_name: str = "unknown"
    target_id: str | None = None
    extension: str | None = None
    layer: str = ""
    description: str = ""
    from_tags: str = ""
    missing_parent: str | None = None


@dataclass
class HealthSummary:
    """Traceability health figures and listings."""

    total_tags: int
    tags_with_links: int
    isolated_tags: int
    dangling_references: int
    tags_with_links_pct: int
    isolated_pct: int
    isolated: list[HealthEntry] = field(default_factory=list)
    dangling: list[HealthEntry] = field(default_factory=list)


def _health_entry(
    dataset: TraceDataset,
    tag_id: str,
    file_id: int | None,
    line: int,
    missing_parent: str | None = None,
) -> HealthEntry:
    entry = HealthEntry(tag_id=tag_id, line=line or 1, missing_parent=missing_parent)

    trace_file = dataset.file_by_id(file_id)
    if trace_file is not None and trace_file.path:
        entry.file_name = base_name(trace_file.path)
        entry.target_id = target_id(entry.file_name)
        entry.extension = file_extension(entry.file_name, default=HEALTH_DEFAULT_EXTENSION)

    tag = dataset.find_tag(tag_id)
    if tag is not None:
        layer = dataset.tag_type(tag)
        entry.layer = "" if layer == UNKNOWN else layer
        entry.description = tag.description
        entry.from_tags = ",".join(tag.parents)
    return entry


def health_summary(dataset: TraceDataset) -> HealthSummary | None:
    """Summarise the dataset's health section (None if it has none).

    ``tags_with_links`` is capped at ``total_tags``; percentages are
    floored to whole numbers.
    """
    health = dataset.health
    if health is None:
        return None

    total = health.total_tags
    with_links = health.tags_with_links
    if with_links > total:
        logger.warning(
            "Data inconsistency: tags_with_links (%d) > total_tags (%d). Capping to total_tags.",
            with_links,
            total,
        )
        with_links = total

    isolated_pct = (100 * health.isolated_tags) // total if total > 0 else 0
    with_links_pct = (100 * with_links) // total if total > 0 else 0

    return HealthSummary(
        total_tags=total,
        tags_with_links=with_links,
        isolated_tags=health.isolated_tags,
        dangling_references=health.dangling_references,
        tags_with_links_pct=with_links_pct,
        isolated_pct=isolated_pct,
        isolated=[
            _health_entry(dataset, item.id, item.file_id, item.line)
            for item in health.isolated_tag_list
        ],
        dangling=[
            _health_entry(dataset, item.child_tag, item.file_id, item.line, item.missing_parent)
            for item in health.dangling_reference_list
        ],
    )


def format_summary_text(summaries: Sequence[LayerSummary]) -> str:
    """Render layer summaries as indented plain text."""
    lines = []
    for summary in summaries:
        lines.append(summary.layer)
        if summary.upstream:
            lines.append(f"  upstream: {', '.join(summary.upstream)}")
        if summary.downstream:
            lines.append(f"  downstream: {', '.join(summary.downstream)}")
        for f in summary.files:
            lines.append(
                f"  {f.name} ({f.version}) upstream {f.up_pct} / downstream {f.down_pct}"
            )
    return "\n".join(lines)


def format_health_text(health: HealthSummary) -> str:
    """Render a health summary as plain text."""
    lines = [
        "Coverage Analysis",
        f"  Total Tags: {health.total_tags}",
        f"  Tags with Links: {health.tags_with_links} ({health.tags_with_links_pct}%)",
        f"  Isolated Tags: {health.isolated_tags} ({health.isolated_pct}%)",
        f"  Dangling References: {health.dangling_references}",
        "",
        "Isolated Tags",
    ]
    if not health.isolated:
        lines.append("  No isolated tags found.")
    for entry in health.isolated:
        lines.append(f"  {entry.tag_id} ({entry.file_name}:{entry.line})")

    lines += ["", "Dangling References"]
    if not health.dangling:
        lines.append("  No dangling references found.")
    for entry in health.dangling:
        lines.append(
            f"  {entry.tag_id} -> {entry.missing_parent} ({entry.file_name}:{entry.line})"
        )
    return "\n".join(lines)
