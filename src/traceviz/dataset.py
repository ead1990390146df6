"""
traceviz.dataset - Traceability dataset model and JSON loading.

The dataset is produced by an external tag scanner. Its shape::

    {
      "layers": [{"name": ...}],
      "files": [{"file": ..., "version": ...}],
      "trace_tags": [{"id", "layer_id" | "trace_target",
                      "file_id" | "file", "line", "description", "from_tags"}],
      "health": {...}            # optional
    }

Instances are built fresh for every render cycle and are not mutated by
the computation core.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator

from traceviz.errors import DatasetError
from traceviz.layers import (
    ByFileId,
    FileRef,
    LayerRef,
    NoFile,
    NoLayer,
    file_ref_from_tag,
    layer_ref_from_tag,
    resolve_file_path,
    resolve_type,
)

logger = logging.getLogger(__name__)

NO_PARENT = "NONE"


def _as_int(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _file_index(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@dataclass
class Layer:
    """A named stage of the traceability pipeline."""

    name: str


@dataclass
class TraceFile:
    """A scanned source file.

    Attributes:
        index: Position in the dataset's file table (the ``file_id``).
        path: File path as reported by the scanner.
        version: ``git:<rev>``, ``mtime:<timestamp>`` or ``unknown``.
    """

    index: int
    path: str
    version: str = "unknown"


@dataclass
class TraceTag:
    """A single traceable artifact (one tagged line in a file)."""

    index: int
    id: str
    layer_ref: LayerRef = field(default_factory=NoLayer)
    file_ref: FileRef = field(default_factory=NoFile)
    line: int = 0
    description: str = ""
    from_tags: list[str] = field(default_factory=list)
    file_version: str | None = None  # legacy per-tag version

    @property
    def parents(self) -> list[str]:
        """Parent tag ids, without the ``NONE`` sentinel."""
        return [p for p in self.from_tags if p and p != NO_PARENT]

    @classmethod
    def from_dict(cls, index: int, raw: dict[str, Any]) -> TraceTag:
        from_tags = raw.get("from_tags") or []
        if isinstance(from_tags, str):
            from_tags = [from_tags]
        return cls(
            index=index,
            id=str(raw.get("id") or ""),
            layer_ref=layer_ref_from_tag(raw.get("layer_id"), raw.get("trace_target")),
            file_ref=file_ref_from_tag(raw.get("file_id"), raw.get("file")),
            line=_as_int(raw.get("line")),
            description=str(raw.get("description") or ""),
            from_tags=[str(p) for p in from_tags if p is not None],
            file_version=raw.get("file_version"),
        )


@dataclass
class IsolatedTag:
    """A tag no other tag derives from."""

    id: str
    file_id: int | None = None
    line: int = 1


@dataclass
class DanglingReference:
    """A from-link whose parent tag does not exist."""

    child_tag: str
    missing_parent: str
    file_id: int | None = None
    line: int = 1


@dataclass
class HealthData:
    """Health section reported by the scanner."""

    total_tags: int = 0
    tags_with_links: int = 0
    isolated_tags: int = 0
    dangling_references: int = 0
    isolated_tag_list: list[IsolatedTag] = field(default_factory=list)
    dangling_reference_list: list[DanglingReference] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> HealthData:
        isolated = [
            IsolatedTag(
                id=str(item.get("id") or ""),
                file_id=_file_index(item.get("file_id")),
                line=_as_int(item.get("line")) or 1,
            )
            for item in raw.get("isolated_tag_list") or []
            if isinstance(item, dict)
        ]
        dangling = [
            DanglingReference(
                child_tag=str(item.get("child_tag") or ""),
                missing_parent=str(item.get("missing_parent") or ""),
                file_id=_file_index(item.get("file_id")),
                line=_as_int(item.get("line")) or 1,
            )
            for item in raw.get("dangling_reference_list") or []
            if isinstance(item, dict)
        ]
        return cls(
            total_tags=_as_int(raw.get("total_tags")),
            tags_with_links=_as_int(raw.get("tags_with_links")),
            isolated_tags=_as_int(raw.get("isolated_tags")),
            dangling_references=_as_int(raw.get("dangling_references")),
            isolated_tag_list=isolated,
            dangling_reference_list=dangling,
        )


@dataclass
class TraceDataset:
    """A snapshot of the scanner output."""

    layers: list[Layer] = field(default_factory=list)
    files: list[TraceFile] = field(default_factory=list)
    tags: list[TraceTag] = field(default_factory=list)
    health: HealthData | None = None

    @property
    def layer_names(self) -> list[str]:
        return [layer.name for layer in self.layers]

    @property
    def file_paths(self) -> list[str]:
        return [f.path for f in self.files]

    def iter_tags(self) -> Iterator[TraceTag]:
        yield from self.tags

    def tag_type(self, tag: TraceTag) -> str:
        """Resolved layer name of a tag ("Unknown" if unresolvable)."""
        return resolve_type(tag.layer_ref, self.layer_names)

    def tag_types(self) -> list[str]:
        """Resolved layer names, indexed like :attr:`tags`."""
        names = self.layer_names
        return [resolve_type(tag.layer_ref, names) for tag in self.tags]

    def tag_file_path(self, tag: TraceTag) -> str | None:
        return resolve_file_path(tag.file_ref, self.file_paths)

    def tag_file_version(self, tag: TraceTag) -> str:
        """Version descriptor of the file a tag lives in."""
        ref = tag.file_ref
        if isinstance(ref, ByFileId) and ref.index < len(self.files):
            return self.files[ref.index].version or "unknown"
        return tag.file_version or "unknown"

    def file_by_id(self, file_id: int | None) -> TraceFile | None:
        if file_id is None or not 0 <= file_id < len(self.files):
            return None
        return self.files[file_id]

    def find_tag(self, tag_id: str) -> TraceTag | None:
        for tag in self.tags:
            if tag.id == tag_id:
                return tag
        return None

    @classmethod
    def from_dict(cls, data: Any) -> TraceDataset:
        """Parse the scanner's JSON document.

        Raises:
            DatasetError: If ``data`` is not an object or has no tag list.
        """
        if not isinstance(data, dict):
            raise DatasetError("Traceability data must be a JSON object")

        raw_tags = data.get("trace_tags")
        if raw_tags is None:
            raw_tags = data.get("nodes")
        if not isinstance(raw_tags, list):
            raise DatasetError("Traceability data has no 'trace_tags' list")

        layers = []
        for entry in data.get("layers") or []:
            name = entry.get("name") if isinstance(entry, dict) else entry
            layers.append(Layer(name=str(name or "")))

        files = []
        for i, entry in enumerate(data.get("files") or []):
            if isinstance(entry, dict):
                files.append(
                    TraceFile(
                        index=i,
                        path=str(entry.get("file") or ""),
                        version=str(entry.get("version") or "unknown"),
                    )
                )
            else:
                files.append(TraceFile(index=i, path=str(entry or "")))

        tags = []
        for raw in raw_tags:
            if not isinstance(raw, dict):
                logger.warning("Skipping malformed trace tag entry: %r", raw)
                continue
            tags.append(TraceTag.from_dict(len(tags), raw))

        health_raw = data.get("health")
        health = HealthData.from_dict(health_raw) if isinstance(health_raw, dict) else None

        logger.debug(
            "Loaded dataset: %d layers, %d files, %d tags", len(layers), len(files), len(tags)
        )
        return cls(layers=layers, files=files, tags=tags, health=health)


def load_dataset(path: Path) -> TraceDataset:
    """Load a dataset from a JSON file.

    Raises:
        DatasetError: If the file cannot be read or is not valid JSON.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DatasetError(f"Cannot read traceability data {path}: {e}") from e
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise DatasetError(f"Invalid JSON in {path}: {e}") from e
    return TraceDataset.from_dict(data)


__all__ = [
    "NO_PARENT",
    "Layer",
    "TraceFile",
    "TraceTag",
    "IsolatedTag",
    "DanglingReference",
    "HealthData",
    "TraceDataset",
    "load_dataset",
]
