"""
Altair renderer for a SankeyView.

Layers, back to front: link ribbons, overlay paths, node rectangles, node
labels, column titles. All layers share one pixel coordinate system: x grows
right and y grows down from the top-left of the drawing area, with the
margins added around it.

Ribbons
- Each link is drawn as an area between two cubic Bezier curves, the band top
  and the band bottom. Both curves share the control x positions
  (x0, xm, xm, x1), so sampling them at the same parameter gives one x with a
  top and bottom y, which is exactly what ``mark_area`` (x, y, y2) draws.

Interaction
- Node rectangles carry a point selection named ``NODE_SELECTION`` on the
  ``node_id`` field (position in ``layout.nodes``); hosts map it back to a
  NodeKey with ``node_key_for_id``.
"""

from __future__ import annotations

import logging
import math
from typing import Any

import altair as alt

from sankeysync.core.highlight import NodeTier
from sankeysync.core.keys import NodeKey
from sankeysync.core.labels import format_attribute
from sankeysync.core.layout import PositionedLink
from sankeysync.core.sync import SankeyView
from sankeysync.io.config import SankeySettings

from .theme import (
    LABEL_COLOR,
    LINK_ACTIVE_FILL,
    LINK_ACTIVE_OPACITY,
    LINK_DIMMED_OPACITY,
    LINK_FILL,
    LINK_OPACITY,
    NODE_STYLES,
    OVERLAY_STROKE,
    OVERLAY_WIDTH,
    TITLE_COLOR,
)

__all__ = [
    "NODE_SELECTION",
    "ribbon_points",
    "node_values",
    "ribbon_values",
    "overlay_values",
    "column_title_values",
    "sankey_chart",
    "node_key_for_id",
]

logger = logging.getLogger(__name__)

NODE_SELECTION = "node_click"


def _bezier(p0: float, p1: float, p2: float, p3: float, t: float) -> float:
    u = 1.0 - t
    return u * u * u * p0 + 3 * u * u * t * p1 + 3 * u * t * t * p2 + t * t * t * p3


def ribbon_points(plink: PositionedLink, samples: int = 16) -> list[tuple[float, float, float]]:
    """Sample a ribbon as (x, y_top, y_bottom) triples from source to target.

    Returns an empty list if any coordinate is non-finite.
    """
    x0, x1 = plink.x0, plink.x1
    xm = (x0 + x1) / 2
    top0, bot0, top1, bot1 = plink.corners()
    out: list[tuple[float, float, float]] = []
    steps = max(samples, 2)
    for i in range(steps + 1):
        t = i / steps
        x = _bezier(x0, xm, xm, x1, t)
        yt = _bezier(top0, top0, top1, top1, t)
        yb = _bezier(bot0, bot0, bot1, bot1, t)
        if not all(math.isfinite(v) for v in (x, yt, yb)):
            logger.warning("invalid ribbon %s -> %s", plink.link.source, plink.link.target)
            return []
        out.append((x, yt, yb))
    return out


def node_values(view: SankeyView) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for node_id, p in enumerate(view.layout.nodes):
        state = view.nodes.get(p.key)
        tier = state.tier if state is not None else NodeTier.DEFAULT
        fill, stroke, stroke_width = NODE_STYLES[tier]
        rows.append(
            {
                "node_id": node_id,
                "key": str(p.key),
                "attribute": p.node.attribute,
                "value": str(p.node.value),
                "count": p.node.count,
                "matching": state.matching_count if state is not None else 0,
                "tier": tier.value,
                "label": state.label if state is not None else f"{p.node.name} ({p.node.count})",
                "x0": p.x0,
                "x1": p.x1,
                "y0": p.y0,
                "y1": p.y1,
                "cy": p.cy,
                "fill": fill,
                "stroke": stroke,
                "stroke_width": stroke_width,
            }
        )
    return rows


def ribbon_values(view: SankeyView, samples: int = 16) -> list[dict[str, Any]]:
    active = {(s.source, s.target): s.active for s in view.links}
    highlighting = bool(view.highlight_set)
    rows: list[dict[str, Any]] = []
    for plink in view.layout.links:
        is_active = active.get(plink.link.key, False)
        if not highlighting:
            fill, opacity = LINK_FILL, LINK_OPACITY
        elif is_active:
            fill, opacity = LINK_ACTIVE_FILL, LINK_ACTIVE_OPACITY
        else:
            fill, opacity = LINK_FILL, LINK_DIMMED_OPACITY
        link_id = f"{plink.link.source}->{plink.link.target}"
        for order, (x, yt, yb) in enumerate(ribbon_points(plink, samples)):
            rows.append(
                {
                    "link": link_id,
                    "order": order,
                    "x": x,
                    "y": yt,
                    "y2": yb,
                    "value": plink.value,
                    "active": is_active,
                    "fill": fill,
                    "opacity": opacity,
                }
            )
    return rows


def overlay_values(view: SankeyView) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for path in view.overlays:
        for order, (x, y) in enumerate(path.points):
            rows.append({"path": path.record.index, "order": order, "x": x, "y": y})
    return rows


def column_title_values(view: SankeyView, offset: float = 35.0) -> list[dict[str, Any]]:
    y = view.layout.settings.height + offset
    return [
        {"title": format_attribute(attribute), "x": x, "y": y}
        for _, attribute, x in view.layout.columns()
    ]


def _scales(settings: SankeySettings) -> tuple[alt.Scale, alt.Scale]:
    x = alt.Scale(
        domain=[-settings.margin_left, settings.inner_width + settings.margin_right],
        nice=False,
        zero=False,
    )
    y = alt.Scale(
        domain=[-settings.margin_top, settings.inner_height + settings.margin_bottom],
        nice=False,
        zero=False,
        reverse=True,
    )
    return x, y


def _empty_chart(settings: SankeySettings, message: str) -> alt.TopLevelMixin:
    # Streamlit rejects on_select for a chart without a selection param.
    click = alt.selection_point(
        name=NODE_SELECTION, fields=["node_id"], on="click", empty=False
    )
    return (
        alt.Chart(alt.Data(values=[{"text": message}]))
        .mark_text(color=TITLE_COLOR, fontSize=13)
        .encode(text="text:N")
        .add_params(click)
        .properties(width=settings.width, height=settings.height)
    )


def sankey_chart(
    view: SankeyView, settings: SankeySettings, *, samples: int = 16
) -> alt.TopLevelMixin:
    """Compose the layered Sankey chart for ``view``.

    Args:
        view (SankeyView): Controller snapshot.
        settings (SankeySettings): Canvas size and margins.
        samples (int): Bezier samples per ribbon.

    Returns:
        alt.TopLevelMixin: Layered chart, or a text placeholder for an empty diagram.
    """
    if view.layout.is_empty:
        return _empty_chart(settings, "No data or dimensions to render")

    xs, ys = _scales(settings)
    no_axis = alt.Axis(title=None, labels=False, ticks=False, domain=False, grid=False)

    ribbons = (
        alt.Chart(alt.Data(values=ribbon_values(view, samples)))
        .mark_area()
        .encode(
            x=alt.X("x:Q", scale=xs, axis=no_axis),
            y=alt.Y("y:Q", scale=ys, axis=no_axis),
            y2="y2:Q",
            detail="link:N",
            color=alt.Color("fill:N", scale=None),
            opacity=alt.Opacity("opacity:Q", scale=None),
            tooltip=[alt.Tooltip("link:N"), alt.Tooltip("value:Q")],
        )
    )

    overlays = (
        alt.Chart(alt.Data(values=overlay_values(view)))
        .mark_line(color=OVERLAY_STROKE, strokeWidth=OVERLAY_WIDTH, interpolate="monotone")
        .encode(
            x=alt.X("x:Q", scale=xs, axis=no_axis),
            y=alt.Y("y:Q", scale=ys, axis=no_axis),
            detail="path:N",
            order="order:Q",
        )
    )

    click = alt.selection_point(
        name=NODE_SELECTION, fields=["node_id"], on="click", empty=False
    )
    node_data = alt.Data(values=node_values(view))
    rects = (
        alt.Chart(node_data)
        .mark_rect(cursor="pointer")
        .encode(
            x=alt.X("x0:Q", scale=xs, axis=no_axis),
            x2="x1:Q",
            y=alt.Y("y0:Q", scale=ys, axis=no_axis),
            y2="y1:Q",
            color=alt.Color("fill:N", scale=None),
            stroke=alt.Stroke("stroke:N", scale=None),
            strokeWidth=alt.StrokeWidth("stroke_width:Q", scale=None),
            tooltip=[
                alt.Tooltip("attribute:N"),
                alt.Tooltip("value:N"),
                alt.Tooltip("count:Q"),
                alt.Tooltip("matching:Q"),
            ],
        )
        .add_params(click)
    )
    labels = (
        alt.Chart(node_data)
        .mark_text(align="right", baseline="middle", dx=-6, fontSize=11, color=LABEL_COLOR)
        .encode(
            x=alt.X("x0:Q", scale=xs, axis=no_axis),
            y=alt.Y("cy:Q", scale=ys, axis=no_axis),
            text="label:N",
        )
    )
    titles = (
        alt.Chart(alt.Data(values=column_title_values(view)))
        .mark_text(fontSize=12, fontWeight=600, color=TITLE_COLOR)
        .encode(
            x=alt.X("x:Q", scale=xs, axis=no_axis),
            y=alt.Y("y:Q", scale=ys, axis=no_axis),
            text="title:N",
        )
    )

    layers: list[alt.Chart] = [ribbons]
    if view.overlays:
        layers.append(overlays)
    layers += [rects, labels, titles]
    return (
        alt.layer(*layers)
        .properties(width=settings.width, height=settings.height)
        .configure_view(strokeOpacity=0)
    )


def node_key_for_id(view: SankeyView, node_id: int) -> NodeKey | None:
    """NodeKey of the node at ``node_id`` in ``view.layout.nodes``, or None."""
    if 0 <= node_id < len(view.layout.nodes):
        return view.layout.nodes[node_id].key
    return None
