from __future__ import annotations

import math

from sankeysync.core.keys import NodeKey, value_sort_key
from sankeysync.core.labels import format_attribute, format_value


def test_node_key_equality_is_type_aware() -> None:
    assert NodeKey.of("bedrooms", 2) == NodeKey.of("bedrooms", 2)
    assert NodeKey.of("bedrooms", 2) != NodeKey.of("bedrooms", "2")
    assert NodeKey.of("parking", 1) != NodeKey.of("parking", True)
    assert NodeKey.of("bedrooms", 2) != NodeKey.of("stories", 2)


def test_int_and_float_values_are_distinct_nodes() -> None:
    assert NodeKey.of("bedrooms", 2) != NodeKey.of("bedrooms", 2.0)
    assert len({NodeKey.of("bedrooms", 2), NodeKey.of("bedrooms", 2.0)}) == 2
    assert sorted([2.0, 1, 3], key=value_sort_key) == [1, 2.0, 3]


def test_nan_shares_the_missing_key() -> None:
    nan = NodeKey.of("area", float("nan"))
    assert nan == NodeKey.of("area", float("nan"))
    assert nan == NodeKey.of("area", None)
    assert nan.value is None
    assert str(nan) == "area-None"


def test_node_key_separator_in_value_does_not_collide() -> None:
    a = NodeKey.of("a-b", "c")
    b = NodeKey.of("a", "b-c")
    assert str(a) == str(b) == "a-b-c"
    assert a != b
    assert len({a, b}) == 2


def test_value_sort_key_mixed_types() -> None:
    values = ["yes", None, 3, True, 1.5, float("nan"), "no"]
    ordered = sorted(values, key=value_sort_key)
    assert ordered[:4] == [1.5, 3, True, "no"]
    assert ordered[4] == "yes"
    tail = ordered[5:]
    assert None in tail
    assert any(isinstance(v, float) and math.isnan(v) for v in tail)


def test_labels() -> None:
    assert format_attribute("bedrooms") == "Bedrooms"
    assert format_attribute("unknown_col") == "unknown_col"
    assert format_value(3, "bedrooms") == "3 bed"
    assert format_value("yes", "mainroad") == "yes"
    assert format_value(None, "bedrooms") == "n/a"
