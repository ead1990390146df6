"""
traceviz.layers - Layer and file reference resolution.

Tags reference their layer either by index into the dataset's layer table
(current format) or through a legacy colon-delimited ``trace_target``
string. Both are modelled as variants of :data:`LayerRef` and resolved
through :func:`resolve_type`. File references follow the same pattern
with :data:`FileRef` and :func:`resolve_file_path`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Sequence, Union

logger = logging.getLogger(__name__)

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class ByLayerId:
    """Layer referenced by index into the layer table.

    ``trace_target`` is kept so an index outside the table can still fall
    back to the legacy encoding.
    """

    index: int
    trace_target: str | None = None


@dataclass(frozen=True)
class ByEncodedString:
    """Legacy reference: the layer is the last ``:`` segment of the string."""

    trace_target: str


@dataclass(frozen=True)
class NoLayer:
    """Tag carries no layer information at all."""


LayerRef = Union[ByLayerId, ByEncodedString, NoLayer]


@dataclass(frozen=True)
class ByFileId:
    """File referenced by index into the dataset's file table."""

    index: int
    path: str | None = None


@dataclass(frozen=True)
class ByFilePath:
    """Legacy reference: the path is stored on the tag itself."""

    path: str


@dataclass(frozen=True)
class NoFile:
    """Tag carries no file information."""


FileRef = Union[ByFileId, ByFilePath, NoFile]


def _as_index(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 0 else None


def layer_ref_from_tag(layer_id: Any, trace_target: Any) -> LayerRef:
    """Build the layer reference variant from raw tag fields."""
    target = str(trace_target) if trace_target else None
    index = _as_index(layer_id)
    if index is not None:
        return ByLayerId(index, target)
    if target:
        return ByEncodedString(target)
    return NoLayer()


def file_ref_from_tag(file_id: Any, file_path: Any) -> FileRef:
    """Build the file reference variant from raw tag fields."""
    path = str(file_path) if file_path else None
    index = _as_index(file_id)
    if index is not None:
        return ByFileId(index, path)
    if path:
        return ByFilePath(path)
    return NoFile()


def _decode_trace_target(trace_target: str | None) -> str:
    if not trace_target:
        return UNKNOWN
    return trace_target.split(":")[-1].strip() or UNKNOWN


def resolve_type(ref: LayerRef, layer_names: Sequence[str]) -> str:
    """Resolve a layer reference to its layer name.

    Args:
        ref: The tag's layer reference.
        layer_names: Layer table, indexed by layer id.

    Returns:
        The layer name, or ``"Unknown"`` when nothing resolves. Never raises.
    """
    if isinstance(ref, ByLayerId):
        if ref.index < len(layer_names):
            return layer_names[ref.index]
        logger.debug("layer_id %d not in layer table", ref.index)
        return _decode_trace_target(ref.trace_target)
    if isinstance(ref, ByEncodedString):
        return _decode_trace_target(ref.trace_target)
    return UNKNOWN


def resolve_file_path(ref: FileRef, file_paths: Sequence[str]) -> str | None:
    """Resolve a file reference to a path, or None when unresolvable."""
    if isinstance(ref, ByFileId):
        if ref.index < len(file_paths):
            return file_paths[ref.index]
        return ref.path
    if isinstance(ref, ByFilePath):
        return ref.path
    return None


def resolve_layer_order(
    types: Iterable[str],
    explicit_order: Sequence[str] | None = None,
) -> list[str]:
    """Determine the upstream-to-downstream layer order.

    With an explicit order, the result is that order filtered to layers
    present in ``types``. Without one, layers are taken in first-appearance
    order; this depends on how the dataset was generated and is best-effort.
    ``"Unknown"`` is never part of the order.
    """
    present: list[str] = []
    seen: set[str] = set()
    for name in types:
        if name and name != UNKNOWN and name not in seen:
            seen.add(name)
            present.append(name)

    if explicit_order:
        ordered: list[str] = []
        for name in explicit_order:
            if name in seen and name not in ordered:
                ordered.append(name)
        return ordered

    if present:
        logger.info("No explicit layer order; inferred %s from tag order", present)
    return present


def legend_types(layer_order: Sequence[str]) -> list[str]:
    """Layer names shown in a legend (``["Unknown"]`` when there are none)."""
    return list(layer_order) if layer_order else [UNKNOWN]


__all__ = [
    "UNKNOWN",
    "ByLayerId",
    "ByEncodedString",
    "NoLayer",
    "LayerRef",
    "ByFileId",
    "ByFilePath",
    "NoFile",
    "FileRef",
    "layer_ref_from_tag",
    "file_ref_from_tag",
    "resolve_type",
    "resolve_file_path",
    "resolve_layer_order",
    "legend_types",
]
