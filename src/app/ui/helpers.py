"""
Shared UI helper utilities for the sankeysync Streamlit application.

This module centralizes small cross-cutting helpers (accelerators, selection
event parsing, text formatting) used by the UI modules. Keeping these here
avoids circular imports.

Notes:
    - Selection events are the dict-like objects Streamlit returns from
      ``st.altair_chart(..., on_select="rerun")``; parsing is tolerant of
      missing keys and of plain dicts, which keeps it testable.
    - This module contains no Streamlit state manipulation itself.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import altair as alt


def enable_vegafusion_optional() -> str | None:
    """Attempt to enable the VegaFusion accelerator for Altair if available.

    Returns:
        str | None: Short status message if enabling succeeded, otherwise None.

    Notes:
        This is an optional performance accelerator. If the environment does not
        have VegaFusion installed or configured, the function will fail silently
        and return None.
    """
    try:
        alt.data_transformers.enable("vegafusion")
        return "VegaFusion enabled (optional accelerator)."
    except Exception:
        return None


def _selection_of(event: Any, name: str) -> Any:
    if event is None:
        return None
    if isinstance(event, Mapping):
        selection = event.get("selection")
    else:
        selection = getattr(event, "selection", None)
    if not selection:
        return None
    return selection.get(name)


def clicked_node_id(event: Any, name: str) -> int | None:
    """Extract the clicked ``node_id`` from a point-selection event.

    Args:
        event (Any): Streamlit chart event (or an equivalent dict).
        name (str): Selection parameter name.

    Returns:
        int | None: The node id, or None if nothing was clicked.
    """
    points = _selection_of(event, name)
    if not points:
        return None
    first = points[0] if isinstance(points, Sequence) else points
    value = first.get("node_id") if isinstance(first, Mapping) else None
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def brush_bounds(event: Any, name: str) -> dict[str, list[float]] | None:
    """Extract ``{field: [lo, hi]}`` from an interval-selection event, or None."""
    raw = _selection_of(event, name)
    if not raw or not isinstance(raw, Mapping):
        return None
    out: dict[str, list[float]] = {}
    for field, extent in raw.items():
        if isinstance(extent, Sequence) and len(extent) == 2:
            out[str(field)] = [float(extent[0]), float(extent[1])]
    return out or None


def pluralize(n: int, noun: str, plural: str | None = None) -> str:
    """Return e.g. "1 house" / "3 houses"."""
    word = noun if n == 1 else (plural or f"{noun}s")
    return f"{n} {word}"
