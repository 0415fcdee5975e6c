from __future__ import annotations

import pytest

from sankeysync.core.errors import InvalidAttributesError, UnknownNodeError
from sankeysync.core.graph import build_graph
from sankeysync.core.keys import NodeKey
from sankeysync.core.records import Record, make_records


def test_nodes_per_distinct_value_sorted(houses: list[Record]) -> None:
    g = build_graph(houses, ["bedrooms", "parking"])
    assert [str(n.key) for n in g.column(0)] == ["bedrooms-2", "bedrooms-3", "bedrooms-4"]
    assert [str(n.key) for n in g.column(1)] == ["parking-0", "parking-1", "parking-2"]
    assert [n.count for n in g.column(0)] == [2, 2, 1]
    assert g.node(NodeKey.of("bedrooms", 2)).name == "2 bed"


def test_column_sums_equal_record_count(houses: list[Record]) -> None:
    g = build_graph(houses, ["bedrooms", "parking"])
    for _, column in g.iter_columns():
        assert sum(n.count for n in column) == len(houses)


def test_links_between_adjacent_columns(houses: list[Record]) -> None:
    g = build_graph(houses, ["bedrooms", "parking"])
    pairs = {(str(l.source), str(l.target)): l.value for l in g.links}
    assert pairs == {
        ("bedrooms-2", "parking-0"): 1,
        ("bedrooms-2", "parking-1"): 1,
        ("bedrooms-3", "parking-0"): 1,
        ("bedrooms-3", "parking-2"): 1,
        ("bedrooms-4", "parking-1"): 1,
    }
    assert sum(l.value for l in g.links) == len(houses)


def test_link_sums_match_node_counts() -> None:
    rs = make_records(
        [{"a": "x", "b": 1, "c": "p"}, {"a": "x", "b": 1, "c": "q"}, {"a": "y", "b": 2, "c": "q"}]
    )
    g = build_graph(rs, ["a", "b", "c"])
    for node in g.nodes:
        out = sum(l.value for l in g.links if l.source == node.key)
        inc = sum(l.value for l in g.links if l.target == node.key)
        if node.dim_index < 2:
            assert out == node.count
        if node.dim_index > 0:
            assert inc == node.count


def test_build_is_deterministic(houses: list[Record]) -> None:
    a = build_graph(houses, ["bedrooms", "parking"])
    b = build_graph(houses, ["bedrooms", "parking"])
    assert [n.key for n in a.nodes] == [n.key for n in b.nodes]
    assert [[h.index for h in n.houses] for n in a.nodes] == [
        [h.index for h in n.houses] for n in b.nodes
    ]
    assert [l.key for l in a.links] == [l.key for l in b.links]


def test_empty_inputs_give_empty_graph(houses: list[Record]) -> None:
    assert build_graph([], ["bedrooms"]).is_empty
    assert build_graph(houses, []).is_empty


def test_single_attribute_has_no_links(houses: list[Record]) -> None:
    g = build_graph(houses, ["bedrooms"])
    assert len(g.nodes) == 3
    assert g.links == ()


def test_missing_values_form_none_node_without_links() -> None:
    rs = make_records([{"a": 1, "b": "x"}, {"a": 1}, {"a": 2, "b": "y"}])
    g = build_graph(rs, ["a", "b"])
    none_node = g.node(NodeKey.of("b", None))
    assert none_node.count == 1
    assert sum(n.count for n in g.column(1)) == 3
    assert all(l.target != none_node.key for l in g.links)
    assert sum(l.value for l in g.links) == 2


def test_invalid_attributes_raise(houses: list[Record]) -> None:
    with pytest.raises(InvalidAttributesError):
        build_graph(houses, ["bedrooms", "bedrooms"])
    with pytest.raises(InvalidAttributesError):
        build_graph(houses, ["bedrooms", 3])  # type: ignore[list-item]


def test_unknown_node_lookup(houses: list[Record]) -> None:
    g = build_graph(houses, ["bedrooms"])
    assert not g.has_node(NodeKey.of("bedrooms", 9))
    with pytest.raises(UnknownNodeError):
        g.node(NodeKey.of("bedrooms", 9))


def test_nan_cells_share_one_node() -> None:
    nan = float("nan")
    rs = make_records(
        [{"a": 1.0, "b": "x"}, {"a": nan, "b": "x"}, {"a": nan, "b": "y"}, {"a": 2.0}]
    )
    g = build_graph(rs, ["a", "b"])
    column = g.column(0)
    assert len(column) == 3
    assert len({n.key for n in g.nodes}) == len(g.nodes)
    missing = g.node(NodeKey.of("a", None))
    assert missing.count == 2
    assert missing.name == "n/a"
    # Missing cells never feed a link.
    assert {(str(l.source), str(l.target)) for l in g.links} == {("a-1.0", "b-x")}
