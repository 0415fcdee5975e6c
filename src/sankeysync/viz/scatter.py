"""
Companion scatterplot (area vs price) with an interval brush.

The brush is a named selection (``BRUSH_SELECTION``) that hosts read to obtain
the externally sourced record selection. Points in the current highlight set
are drawn in the highlight color.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import altair as alt

from sankeysync.core.records import Record, index_set

from .theme import POINT_COLOR, POINT_SELECTED_COLOR

__all__ = [
    "BRUSH_SELECTION",
    "scatter_values",
    "scatter_chart",
    "records_in_brush",
]

BRUSH_SELECTION = "brush"


def scatter_values(
    records: Sequence[Record], x: str, y: str, highlight_set: Sequence[Record]
) -> list[dict[str, Any]]:
    """Plot rows for records that have numeric ``x`` and ``y`` values."""
    wanted = index_set(highlight_set)
    rows: list[dict[str, Any]] = []
    for r in records:
        xv, yv = r.get(x), r.get(y)
        if not isinstance(xv, (int, float)) or not isinstance(yv, (int, float)):
            continue
        rows.append({"index": r.index, x: xv, y: yv, "selected": r.index in wanted})
    return rows


def scatter_chart(
    records: Sequence[Record],
    *,
    x: str = "area",
    y: str = "price",
    highlight_set: Sequence[Record] = (),
    width: int = 600,
    height: int = 300,
) -> alt.TopLevelMixin:
    """Scatterplot of ``y`` against ``x`` with a brush and highlight coloring."""
    brush = alt.selection_interval(name=BRUSH_SELECTION, encodings=["x", "y"])
    return (
        alt.Chart(alt.Data(values=scatter_values(records, x, y, highlight_set)))
        .mark_circle(size=30, opacity=0.7)
        .encode(
            x=alt.X(f"{x}:Q", title=x),
            y=alt.Y(f"{y}:Q", title=y),
            color=alt.condition(
                alt.datum.selected, alt.value(POINT_SELECTED_COLOR), alt.value(POINT_COLOR)
            ),
            tooltip=[alt.Tooltip("index:Q"), alt.Tooltip(f"{x}:Q"), alt.Tooltip(f"{y}:Q")],
        )
        .add_params(brush)
        .properties(width=width, height=height)
    )


def records_in_brush(
    records: Sequence[Record], x: str, y: str, bounds: dict[str, Sequence[float]] | None
) -> list[Record]:
    """Records whose (x, y) fall inside brush ``bounds`` ({field: [lo, hi]}).

    Missing bounds for a field leave that field unconstrained; no bounds at all
    select nothing.
    """
    if not bounds:
        return []
    out: list[Record] = []
    for r in records:
        inside = True
        for field, value in ((x, r.get(x)), (y, r.get(y))):
            if field not in bounds:
                continue
            if not isinstance(value, (int, float)):
                inside = False
                break
            lo, hi = min(bounds[field]), max(bounds[field])
            if not lo <= value <= hi:
                inside = False
                break
        if inside:
            out.append(r)
    return out
