"""
Layout and selection defaults.

Single source of truth for the numbers consumed by
``sankeysync.io.config.SankeySettings``. Zero-IO, stdlib only.

Notes:
    - Canvas size is the full chart; the drawable area is the canvas minus margins.
    - MAX_OVERLAY_PATHS is a rendering cap only. Truncation keeps the first N
      records of the highlight set.
"""

from __future__ import annotations

__all__ = [
    "CANVAS_WIDTH",
    "CANVAS_HEIGHT",
    "MARGIN_TOP",
    "MARGIN_RIGHT",
    "MARGIN_BOTTOM",
    "MARGIN_LEFT",
    "NODE_WIDTH",
    "NODE_PADDING",
    "MAX_OVERLAY_PATHS",
    "MIN_ACTIVE_ATTRIBUTES",
    "DEFAULT_ACTIVE_ATTRIBUTES",
    "DEFAULT_AVAILABLE_ATTRIBUTES",
    "ATTRIBUTE_LABELS",
    "VALUE_SUFFIXES",
]

CANVAS_WIDTH: int = 1200
CANVAS_HEIGHT: int = 600

MARGIN_TOP: int = 50
MARGIN_RIGHT: int = 150
MARGIN_BOTTOM: int = 50
MARGIN_LEFT: int = 150

# Fixed node (column bar) width and vertical gap between nodes in a column.
NODE_WIDTH: float = 15.0
NODE_PADDING: float = 10.0

MAX_OVERLAY_PATHS: int = 50

# Enforced by the dimension controls, not by the graph builder.
MIN_ACTIVE_ATTRIBUTES: int = 2

DEFAULT_ACTIVE_ATTRIBUTES: tuple[str, ...] = ("bedrooms", "bathrooms", "stories")
DEFAULT_AVAILABLE_ATTRIBUTES: tuple[str, ...] = (
    "parking",
    "mainroad",
    "guestroom",
    "basement",
    "hotwaterheating",
    "airconditioning",
    "prefarea",
    "furnishingstatus",
)

ATTRIBUTE_LABELS: dict[str, str] = {
    "bedrooms": "Bedrooms",
    "bathrooms": "Bathrooms",
    "stories": "Stories",
    "parking": "Parking",
    "mainroad": "Main Road",
    "guestroom": "Guest Room",
    "basement": "Basement",
    "hotwaterheating": "Hot Water",
    "airconditioning": "Air Conditioning",
    "prefarea": "Preferred Area",
    "furnishingstatus": "Furnishing",
}

# Numeric attributes get a short unit suffix in node labels ("2 bed").
VALUE_SUFFIXES: dict[str, str] = {
    "bedrooms": "bed",
    "bathrooms": "bath",
    "stories": "story",
    "parking": "park",
}
