"""
traceviz.graph - Graph construction and coverage computation.
"""

from traceviz.graph.adjacency import (
    IdLink,
    Link,
    build_adjacency,
    derive_links,
    partition_by_layer,
    resolve_links,
    valid_links,
)
from traceviz.graph.coverage import (
    CoverageStats,
    FileCoverage,
    compute_coverage,
    compute_file_coverage,
    format_pct,
)

__all__ = [
    "IdLink",
    "Link",
    "build_adjacency",
    "derive_links",
    "partition_by_layer",
    "resolve_links",
    "valid_links",
    "CoverageStats",
    "FileCoverage",
    "compute_coverage",
    "compute_file_coverage",
    "format_pct",
]
