"""
traceviz.layout - Diagram geometry (layer-coverage bars and tag flow).
"""

from traceviz.layout.bars import (
    Band,
    BandLayout,
    BarLayout,
    LayerBar,
    LayerDiagram,
    Ribbon,
    canvas_height,
    layout_bands,
    layout_bars,
    layout_layer_diagram,
    ribbon_plan,
)
from traceviz.layout.flow import (
    FlowDiagram,
    FlowNode,
    flow_column_order,
    flow_dimensions,
    layout_flow_diagram,
    position_nodes_in_grid,
    reorder_by_barycenter,
)

__all__ = [
    "Band",
    "BandLayout",
    "BarLayout",
    "LayerBar",
    "LayerDiagram",
    "Ribbon",
    "canvas_height",
    "layout_bands",
    "layout_bars",
    "layout_layer_diagram",
    "ribbon_plan",
    "FlowDiagram",
    "FlowNode",
    "flow_column_order",
    "flow_dimensions",
    "layout_flow_diagram",
    "position_nodes_in_grid",
    "reorder_by_barycenter",
]
