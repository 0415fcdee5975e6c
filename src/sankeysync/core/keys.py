"""
Structured node identity.

A node is identified by the pair (attribute, value). Values keep their type in
the key, so ``2``, ``2.0``, ``True`` and ``"2"`` under the same attribute are
four different nodes, and a value containing the separator cannot collide with
another key. The string form ``"attribute-value"`` is for display and
serialization only; program logic must not parse it.

Also hosts the natural sort key shared by the graph builder and the layout tie
break, so that mixed-type columns sort without raising.

Examples:
    >>> from sankeysync.core.keys import NodeKey
    >>> NodeKey.of("bedrooms", 2) == NodeKey.of("bedrooms", "2")
    False
    >>> str(NodeKey.of("bedrooms", 2))
    'bedrooms-2'
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any

from .typing import Scalar

__all__ = [
    "NodeKey",
    "is_missing",
    "value_sort_key",
]


def is_missing(value: Any) -> bool:
    """True for None and float NaN, the two spellings of an empty cell."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def _kind(value: Any) -> str:
    # bool is an int subclass; keep it apart from numbers.
    if value is None:
        return "none"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, int):
        return "int"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "str"
    return type(value).__name__


def value_sort_key(value: Scalar) -> tuple[int, Any]:
    """Return a total-order sort key for a cell value.

    Numbers sort numerically first, then bools, then strings, then anything
    else by its string form; ``None`` and NaN sort last.

    Args:
        value (Scalar): Cell value.

    Returns:
        tuple[int, Any]: (type rank, comparable value).
    """
    if is_missing(value):
        return (4, "")
    kind = _kind(value)
    if kind in ("int", "float"):
        return (0, value)
    if kind == "bool":
        return (1, int(bool(value)))
    if kind == "str":
        return (2, value)
    if kind == "none":
        return (4, "")
    return (3, str(value))


@dataclass(frozen=True, order=False)
class NodeKey:
    """Two-part node identity with value-type-aware equality.

    Attributes:
        attribute (str): Attribute (column) name.
        value (Scalar): Cell value shared by the node's records.
        kind (str): Value type tag taking part in equality and hashing.

    Notes:
        Build keys with ``NodeKey.of``; ``kind`` is derived from ``value``.
        NaN is stored as None, so every empty cell of a column shares one key.
    """

    attribute: str
    value: Any
    kind: str = field(default="", repr=False)

    @classmethod
    def of(cls, attribute: str, value: Scalar) -> NodeKey:
        if is_missing(value):
            value = None
        return cls(attribute=attribute, value=value, kind=_kind(value))

    def __str__(self) -> str:
        return f"{self.attribute}-{self.value}"
