"""
Colors and stroke styles for the Sankey and scatterplot charts.

Node tiers map to (fill, stroke, stroke width); link opacity depends on
whether anything is highlighted and whether the link carries highlighted
records.
"""

from __future__ import annotations

from sankeysync.core.highlight import NodeTier

__all__ = [
    "NODE_STYLES",
    "LINK_FILL",
    "LINK_ACTIVE_FILL",
    "LINK_OPACITY",
    "LINK_ACTIVE_OPACITY",
    "LINK_DIMMED_OPACITY",
    "OVERLAY_STROKE",
    "OVERLAY_WIDTH",
    "LABEL_COLOR",
    "TITLE_COLOR",
    "POINT_COLOR",
    "POINT_SELECTED_COLOR",
]

NODE_STYLES: dict[NodeTier, tuple[str, str, float]] = {
    NodeTier.SELECTED: ("#ff6b6b", "#d63031", 3.0),
    NodeTier.FLOW: ("#808080", "#333333", 1.0),
    NodeTier.DEFAULT: ("#d3d3d3", "#999999", 1.0),
}

LINK_FILL = "#aaaaaa"
LINK_ACTIVE_FILL = "#808080"
LINK_OPACITY = 0.5
LINK_ACTIVE_OPACITY = 0.75
LINK_DIMMED_OPACITY = 0.2

OVERLAY_STROKE = "#00b894"
OVERLAY_WIDTH = 2.0

LABEL_COLOR = "#333333"
TITLE_COLOR = "#555555"

POINT_COLOR = "#9aa5b1"
POINT_SELECTED_COLOR = "#00b894"
