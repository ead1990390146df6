"""
traceviz.paths - File path helpers for source-viewer identifiers.

The identifiers built here link diagram elements back to the embedded
source viewer, so their format must not drift.
"""

from __future__ import annotations

import re

DEFAULT_EXTENSION = "sh"
TARGET_PREFIX = "Target_"

_EXTENSION_RE = re.compile(r"\.([^.]+)$")
_MTIME_SECONDS_RE = re.compile(r":\d{2}Z$")


def base_name(path: str | None) -> str:
    """Return the last ``/``-separated segment of a path ('' for None)."""
    if not path:
        return ""
    return str(path).split("/")[-1]


def file_extension(path: str | None, default: str = DEFAULT_EXTENSION) -> str:
    """Return the extension of the last dot-segment of ``path``.

    >>> file_extension("archive.tar.gz")
    'gz'
    >>> file_extension("Makefile")
    'sh'
    """
    match = _EXTENSION_RE.search(str(path or ""))
    return match.group(1) if match else default


def target_id(raw_name: str) -> str:
    """Build the source-viewer element id for a base filename."""
    return TARGET_PREFIX + str(raw_name).replace(".", "_")


def format_version_display(version: str | None) -> str:
    """Render a file version descriptor for display.

    Args:
        version: ``git:<rev>``, ``mtime:<ISO timestamp>``, ``unknown`` or
            any other free-form string.

    Returns:
        The revision for git versions, ``YYYY-MM-DD HH:MM`` for mtime
        versions, ``unknown`` when absent, otherwise the input unchanged.
    """
    if not version or version == "unknown":
        return "unknown"
    if version.startswith("git:"):
        return version[len("git:") :]
    if version.startswith("mtime:"):
        timestamp = version[len("mtime:") :]
        return _MTIME_SECONDS_RE.sub("", timestamp.replace("T", " ", 1))
    return version


__all__ = [
    "DEFAULT_EXTENSION",
    "base_name",
    "file_extension",
    "target_id",
    "format_version_display",
]
