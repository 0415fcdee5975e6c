from __future__ import annotations

import dataclasses
import math
from typing import Any

import pytest

from sankeysync.core.highlight import NodeTier
from sankeysync.core.keys import NodeKey
from sankeysync.core.records import Record
from sankeysync.core.sync import SankeyController, SelectionSource
from sankeysync.io.config import SankeySettings
from sankeysync.viz.sankey import (
    NODE_SELECTION,
    column_title_values,
    node_key_for_id,
    node_values,
    ribbon_points,
    ribbon_values,
    sankey_chart,
)
from sankeysync.viz.scatter import BRUSH_SELECTION, records_in_brush, scatter_chart, scatter_values
from sankeysync.viz.theme import LINK_ACTIVE_OPACITY, LINK_DIMMED_OPACITY, LINK_OPACITY, NODE_STYLES


def find_in_spec(obj: Any, predicate) -> bool:
    """Recursively scan a chart spec dict for a predicate match."""
    if isinstance(obj, dict):
        if predicate(obj):
            return True
        return any(find_in_spec(v, predicate) for v in obj.values())
    if isinstance(obj, list):
        return any(find_in_spec(v, predicate) for v in obj)
    return False


@pytest.fixture
def controller(houses: list[Record]) -> SankeyController:
    ctl = SankeyController(SankeySettings().layout_settings())
    ctl.on_data_changed(houses)
    ctl.on_attributes_changed(["bedrooms", "parking"])
    return ctl


def test_ribbon_points_span_link(controller: SankeyController) -> None:
    plink = controller.layout.links[0]
    pts = ribbon_points(plink, samples=8)
    assert len(pts) == 9
    top0, bot0, top1, bot1 = plink.corners()
    assert pts[0] == pytest.approx((plink.x0, top0, bot0))
    assert pts[-1] == pytest.approx((plink.x1, top1, bot1))
    xs = [p[0] for p in pts]
    assert xs == sorted(xs)


def test_node_rows_carry_tier_styles(controller: SankeyController) -> None:
    controller.on_node_clicked(NodeKey.of("bedrooms", 2))
    rows = node_values(controller.view())
    by_key = {r["key"]: r for r in rows}
    assert by_key["bedrooms-2"]["tier"] == "selected"
    assert by_key["bedrooms-2"]["fill"] == NODE_STYLES[NodeTier.SELECTED][0]
    assert by_key["bedrooms-4"]["fill"] == NODE_STYLES[NodeTier.DEFAULT][0]
    assert [r["node_id"] for r in rows] == list(range(len(rows)))


def test_ribbon_opacity_follows_highlight(
    controller: SankeyController, houses: list[Record]
) -> None:
    plain = ribbon_values(controller.view(), samples=4)
    assert {r["opacity"] for r in plain} == {LINK_OPACITY}

    controller.on_external_selection([houses[0]], SelectionSource.SCATTERPLOT)
    rows = ribbon_values(controller.view(), samples=4)
    active = {r["link"] for r in rows if r["opacity"] == LINK_ACTIVE_OPACITY}
    dimmed = {r["link"] for r in rows if r["opacity"] == LINK_DIMMED_OPACITY}
    assert active == {"bedrooms-2->parking-0"}
    assert len(dimmed) == len(controller.layout.links) - 1


def test_column_titles_below_columns(controller: SankeyController) -> None:
    titles = column_title_values(controller.view())
    assert [t["title"] for t in titles] == ["Bedrooms", "Parking"]
    assert all(t["y"] == controller.layout.settings.height + 35.0 for t in titles)


def test_sankey_chart_spec(controller: SankeyController, houses: list[Record]) -> None:
    controller.on_external_selection(houses[:2], SelectionSource.SCATTERPLOT)
    spec = sankey_chart(controller.view(), SankeySettings(), samples=4).to_dict()
    assert len(spec["layer"]) == 5
    assert find_in_spec(spec, lambda d: d.get("name") == NODE_SELECTION)
    assert find_in_spec(spec, lambda d: d.get("fields") == ["node_id"])
    assert find_in_spec(spec, lambda d: d.get("type") == "area" or d.get("mark") == "area")


def test_sankey_chart_empty_placeholder() -> None:
    ctl = SankeyController(SankeySettings().layout_settings())
    spec = sankey_chart(ctl.view(), SankeySettings()).to_dict()
    assert "layer" not in spec
    assert find_in_spec(spec, lambda d: d.get("type") == "text" or d.get("mark") == "text")
    # on_select="rerun" needs a named selection even on the placeholder.
    assert find_in_spec(spec, lambda d: d.get("name") == NODE_SELECTION)


def test_non_finite_layout_still_renders(houses: list[Record]) -> None:
    broken = dataclasses.replace(SankeySettings().layout_settings(), height=math.nan)
    ctl = SankeyController(broken)
    ctl.on_data_changed(houses)
    ctl.on_attributes_changed(["bedrooms", "parking"])
    view = ctl.view()
    assert view.layout.skipped_nodes
    assert ribbon_values(view) == []
    spec = sankey_chart(view, SankeySettings()).to_dict()
    assert find_in_spec(spec, lambda d: d.get("name") == NODE_SELECTION)


def test_ribbon_points_reject_non_finite_band(controller: SankeyController, caplog) -> None:
    plink = dataclasses.replace(controller.layout.links[0], y0=math.nan)
    assert ribbon_points(plink, samples=4) == []
    assert "invalid ribbon" in caplog.text


def test_node_key_for_id(controller: SankeyController) -> None:
    view = controller.view()
    assert node_key_for_id(view, 0) == view.layout.nodes[0].key
    assert node_key_for_id(view, len(view.layout.nodes)) is None
    assert node_key_for_id(view, -1) is None


def test_scatter_values_and_brush(houses: list[Record]) -> None:
    rows = scatter_values(houses, "area", "price", [houses[1]])
    assert [r["selected"] for r in rows] == [False, True, False, False, False]
    spec = scatter_chart(houses).to_dict()
    assert find_in_spec(spec, lambda d: d.get("name") == BRUSH_SELECTION)

    chosen = records_in_brush(houses, "area", "price", {"area": [3100, 4500]})
    assert [r.index for r in chosen] == [1, 2]
    both = records_in_brush(
        houses, "area", "price", {"area": [6500, 2900], "price": [0, 4_000_000]}
    )
    assert [r.index for r in both] == [0, 1]
    assert records_in_brush(houses, "area", "price", None) == []
