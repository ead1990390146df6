"""
traceviz - Requirements traceability coverage and diagram layout

Turns a tagged traceability dataset (requirements, architecture,
implementation, tests and the derived-from links between them) into
per-layer coverage statistics and the geometry of two diagrams: a
tag-level flow diagram and a layer-coverage ribbon diagram.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("traceviz")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed
__license__ = "MIT"

from traceviz.dataset import TraceDataset, load_dataset
from traceviz.errors import ConfigError, DatasetError, TracevizError
from traceviz.graph.coverage import CoverageStats, compute_coverage, format_pct
from traceviz.session import RenderSession

__all__ = [
    "__version__",
    "ConfigError",
    "CoverageStats",
    "DatasetError",
    "RenderSession",
    "TraceDataset",
    "TracevizError",
    "compute_coverage",
    "format_pct",
    "load_dataset",
]
