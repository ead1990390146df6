"""Serialization - Export computed layouts and statistics.

Converts a RenderSession into plain JSON-compatible dicts for an external
renderer. Nothing here carries adjacency or presentation state.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any

from traceviz.paths import base_name, file_extension, target_id

if TYPE_CHECKING:
    from traceviz.graph.coverage import CoverageStats
    from traceviz.layout.bars import LayerDiagram
    from traceviz.layout.flow import FlowDiagram, FlowNode
    from traceviz.session import RenderSession
    from traceviz.summary import HealthSummary


def serialize_coverage(stats: CoverageStats) -> dict[str, Any]:
    """Per-layer counts, percentages and mass maps."""
    layers = {}
    for layer in stats.layer_order:
        total = stats.total.get(layer, 0)
        entry: dict[str, Any] = {
            "total": total,
            "covered_up": stats.covered_up.get(layer, 0),
            "covered_down": stats.covered_down.get(layer, 0),
            "mass_up": dict(stats.mass_up.get(layer, {})),
            "mass_down": dict(stats.mass_down.get(layer, {})),
        }
        if total:
            entry["up_pct"] = stats.up_pct(layer)
            entry["down_pct"] = stats.down_pct(layer)
        layers[layer] = entry
    return {"layer_order": list(stats.layer_order), "layers": layers}


def serialize_node(node: FlowNode) -> dict[str, Any]:
    """A positioned flow node, with its source-viewer link if it has a file."""
    result: dict[str, Any] = {
        "index": node.index,
        "id": node.id,
        "layer": node.layer,
        "line": node.line,
        "description": node.description,
        "x0": node.x0,
        "x1": node.x1,
        "y0": node.y0,
        "y1": node.y1,
    }
    if node.file:
        result["file"] = node.file
        result["target_id"] = target_id(base_name(node.file))
        result["extension"] = file_extension(node.file)
    return result


def serialize_flow(diagram: FlowDiagram) -> dict[str, Any]:
    return {
        "columns": list(diagram.columns),
        "width": diagram.width,
        "height": diagram.height,
        "rows": diagram.rows,
        "nodes": [serialize_node(n) for n in diagram.nodes],
        "links": [{"source": link.source, "target": link.target} for link in diagram.links],
    }


def serialize_layer_diagram(diagram: LayerDiagram | None) -> dict[str, Any] | None:
    if diagram is None:
        return None

    def bands(side: dict) -> dict[str, Any]:
        return {
            layer: {t: {"y0": b.y0, "y1": b.y1} for t, b in targets.items()}
            for layer, targets in side.items()
        }

    return {
        "layer_order": list(diagram.layer_order),
        "height": diagram.height,
        "bars": [asdict(bar) for bar in diagram.bars],
        "connections": {k: list(v) for k, v in diagram.bar_layout.connections.items()},
        "bands_up": bands(diagram.bands.bands_up),
        "bands_down": bands(diagram.bands.bands_down),
        "ribbons": [asdict(r) for r in diagram.ribbons],
    }


def serialize_health(health: HealthSummary | None) -> dict[str, Any] | None:
    return asdict(health) if health is not None else None


def serialize_session(session: RenderSession) -> dict[str, Any]:
    """Serialize everything a session computed."""
    return {
        "layer_order": list(session.layer_order),
        "legend": [
            {"type": name, "color": session.colors.color(name)} for name in session.legend
        ],
        "colors": session.colors.as_dict(),
        "coverage": serialize_coverage(session.coverage),
        "layer_diagram": serialize_layer_diagram(session.layer_diagram),
        "flow_diagram": serialize_flow(session.flow_diagram),
        "summary": [asdict(s) for s in session.summaries],
        "file_types": dict(session.file_types),
        "health": serialize_health(session.health),
    }
