"""
traceviz.palette - Per-session layer colour assignment.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from traceviz.config.defaults import DEFAULT_CONFIG
from traceviz.layers import UNKNOWN


class ColorContext:
    """Assigns a stable colour to each layer name.

    Colours are handed out from ``scheme`` in first-seen order and are
    never reassigned, so repeated lookups of the same name are idempotent.
    ``"Unknown"`` always gets the ``unknown`` colour. One context belongs
    to one render session.

    Args:
        scheme: Colour cycle for named layers.
        unknown: Colour reserved for ``"Unknown"``.
        layer_order: Names to assign up front, in order.
    """

    def __init__(
        self,
        scheme: Sequence[str] | None = None,
        unknown: str | None = None,
        layer_order: Iterable[str] = (),
    ) -> None:
        self.scheme = list(scheme or DEFAULT_CONFIG["colors"]["scheme"])
        self.unknown = unknown or DEFAULT_CONFIG["colors"]["unknown"]
        self._colors: dict[str, str] = {}
        for name in layer_order:
            self.color(name)
        self.color(UNKNOWN)

    def color(self, name: str) -> str:
        """Return the colour for ``name``, assigning one if needed."""
        existing = self._colors.get(name)
        if existing is not None:
            return existing
        if name == UNKNOWN:
            assigned = self.unknown
        else:
            assigned = self.scheme[len(self._colors) % len(self.scheme)]
        self._colors[name] = assigned
        return assigned

    def __contains__(self, name: object) -> bool:
        return name in self._colors

    def as_dict(self) -> dict[str, str]:
        return dict(self._colors)
