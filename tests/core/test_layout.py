from __future__ import annotations

import dataclasses
import logging
import math

import pytest

from sankeysync.core.graph import build_graph
from sankeysync.core.keys import NodeKey
from sankeysync.core.layout import LayoutSettings, compute_layout, safe_div
from sankeysync.core.records import Record, make_records

SETTINGS = LayoutSettings(width=900.0, height=500.0, node_width=15.0, node_padding=10.0)


def test_columns_evenly_spaced(houses: list[Record]) -> None:
    rs = make_records([{**h.values, "stories": 1} for h in houses])
    layout = compute_layout(build_graph(rs, ["bedrooms", "parking", "stories"]), SETTINGS)
    xs = sorted({p.x0 for p in layout.nodes})
    assert xs == [0.0, 450.0, 900.0]
    assert all(p.x1 - p.x0 == pytest.approx(15.0) for p in layout.nodes)
    assert [a for _, a, _ in layout.columns()] == ["bedrooms", "parking", "stories"]


def test_single_column_sits_at_left(houses: list[Record]) -> None:
    layout = compute_layout(build_graph(houses, ["bedrooms"]), SETTINGS)
    assert {p.x0 for p in layout.nodes} == {0.0}


def test_heights_fill_column(houses: list[Record]) -> None:
    layout = compute_layout(build_graph(houses, ["bedrooms", "parking"]), SETTINGS)
    for dim in (0, 1):
        col = [p for p in layout.nodes if p.node.dim_index == dim]
        total = sum(p.height for p in col) + (len(col) - 1) * SETTINGS.node_padding
        assert total == pytest.approx(SETTINGS.height)
        for p in col:
            assert p.height == pytest.approx(p.node.count * (500.0 - 20.0) / 5)


def test_nodes_ordered_by_count_desc_then_value() -> None:
    rs = make_records([{"a": v} for v in ["x", "y", "y", "z", "z", "z", "w"]])
    layout = compute_layout(build_graph(rs, ["a"]), SETTINGS)
    order = [p.node.value for p in sorted(layout.nodes, key=lambda p: p.y0)]
    assert order == ["z", "y", "w", "x"]


def test_link_bands_tile_each_node(houses: list[Record]) -> None:
    layout = compute_layout(build_graph(houses, ["bedrooms", "parking"]), SETTINGS)
    for p in layout.nodes:
        out = [l for l in layout.links if l.source.key == p.key]
        inc = [l for l in layout.links if l.target.key == p.key]
        if out:
            assert sum(l.source_width for l in out) == pytest.approx(p.height)
            assert min(l.y0 for l in out) == pytest.approx(p.y0)
        if inc:
            assert sum(l.target_width for l in inc) == pytest.approx(p.height)
            assert min(l.y1 for l in inc) == pytest.approx(p.y0)


def test_link_ends_normalized_independently() -> None:
    # 3 records a=x; b splits 2/1, with b=q also fed by a=y.
    rs = make_records(
        [{"a": "x", "b": "p"}, {"a": "x", "b": "p"}, {"a": "x", "b": "q"}, {"a": "y", "b": "q"}]
    )
    layout = compute_layout(build_graph(rs, ["a", "b"]), SETTINGS)
    wanted = (NodeKey.of("a", "x"), NodeKey.of("b", "q"))
    xq = next(l for l in layout.links if l.link.key == wanted)
    assert xq.source_width == pytest.approx(xq.source.height / 3)
    assert xq.target_width == pytest.approx(xq.target.height / 2)


def test_empty_graph_gives_empty_layout() -> None:
    layout = compute_layout(build_graph([], ["a"]), SETTINGS)
    assert layout.is_empty
    assert layout.links == ()


def test_padding_overflow_clamps_heights(caplog) -> None:
    rs = make_records([{"a": i} for i in range(10)])
    tight = LayoutSettings(width=100.0, height=20.0, node_padding=10.0)
    with caplog.at_level(logging.WARNING):
        layout = compute_layout(build_graph(rs, ["a"]), tight)
    assert all(p.height == 0.0 for p in layout.nodes)
    assert "clamped" in caplog.text


def test_layout_is_deterministic(houses: list[Record]) -> None:
    g = build_graph(houses, ["bedrooms", "parking"])
    a = compute_layout(g, SETTINGS)
    b = compute_layout(g, SETTINGS)
    assert [(p.key, p.y0, p.y1) for p in a.nodes] == [(p.key, p.y0, p.y1) for p in b.nodes]
    assert [l.corners() for l in a.links] == [l.corners() for l in b.links]


def test_safe_div() -> None:
    assert safe_div(1.0, 0.0) == 0.0
    assert safe_div(6.0, 3.0) == 2.0


def test_non_finite_geometry_is_skipped_and_logged(houses: list[Record], caplog) -> None:
    g = build_graph(houses, ["bedrooms", "parking"])
    broken = dataclasses.replace(SETTINGS, height=math.nan)
    with caplog.at_level(logging.WARNING):
        layout = compute_layout(g, broken)
    assert layout.nodes == ()
    assert layout.is_empty
    assert len(layout.skipped_nodes) == len(g.nodes) == 6
    assert len(layout.skipped_links) == len(g.links)
    assert "skipping node" in caplog.text
    assert "skipping link" in caplog.text
