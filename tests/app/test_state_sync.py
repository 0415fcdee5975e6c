from __future__ import annotations

from sankeysync.core.keys import NodeKey
from sankeysync.core.records import Record
from sankeysync.core.sync import SelectionSource
from sankeysync.io.config import SankeySettings

from app.state import SyncHost


def _host(houses: list[Record]) -> SyncHost:
    host = SyncHost(SankeySettings(default_attributes=("bedrooms", "parking")))
    host.set_data(houses, ["bedrooms", "parking", "stories"])
    return host


def _node_id(host: SyncHost, key: NodeKey) -> int:
    return next(i for i, p in enumerate(host.view().layout.nodes) if p.key == key)


def test_set_data_uses_configured_attributes(houses: list[Record]) -> None:
    host = _host(houses)
    assert host.dimensions.active == ("bedrooms", "parking")
    assert host.controller.attributes == ("bedrooms", "parking")
    assert host.selected_items == ()


def test_click_shares_filter_as_sankey_selection(houses: list[Record]) -> None:
    host = _host(houses)
    assert host.click_node(_node_id(host, NodeKey.of("bedrooms", 2)))
    assert [r.index for r in host.selected_items] == [0, 1]
    assert host.selection_source is SelectionSource.SANKEY
    # echoed back as highlight, boxes kept
    assert host.controller.selected_boxes == {NodeKey.of("bedrooms", 2)}
    assert host.controller.highlight_set == host.selected_items
    assert host.click_nonce == 1


def test_brush_replaces_box_selection(houses: list[Record]) -> None:
    host = _host(houses)
    host.click_node(_node_id(host, NodeKey.of("bedrooms", 2)))
    host.brush({"area": [4000, 7000]})
    assert [r.index for r in host.selected_items] == [2, 3, 4]
    assert host.selection_source is SelectionSource.SCATTERPLOT
    assert host.controller.selected_boxes == frozenset()
    assert host.controller.highlight_source is SelectionSource.SCATTERPLOT


def test_clear_resets_everything(houses: list[Record]) -> None:
    host = _host(houses)
    host.click_node(_node_id(host, NodeKey.of("parking", 0)))
    host.clear()
    assert host.selected_items == ()
    assert host.controller.selected_boxes == frozenset()
    assert host.controller.view().overlays == []


def test_unknown_node_id_is_ignored(houses: list[Record]) -> None:
    host = _host(houses)
    assert not host.click_node(999)
    assert host.click_nonce == 0


def test_set_attributes_respects_minimum(houses: list[Record]) -> None:
    host = _host(houses)
    host.click_node(_node_id(host, NodeKey.of("parking", 1)))
    assert not host.set_attributes(["bedrooms"])
    assert host.controller.attributes == ("bedrooms", "parking")
    assert host.set_attributes(["bedrooms", "stories"])
    assert host.controller.attributes == ("bedrooms", "stories")
    # the parking box went away with its column
    assert host.controller.selected_boxes == frozenset()
    assert host.selected_items == ()
