"""
Layered flow graph construction.

``build_graph(records, attributes)`` turns the record store and an ordered
attribute list into one column of Nodes per attribute (one Node per distinct
value) and Links between adjacent columns (one Link per observed value pair).

Rules
- Node values in a column follow ``keys.value_sort_key`` (numbers, bools,
  strings, None last).
- A record missing an attribute falls into that column's None node, so every
  column sums to ``len(records)``. It takes no part in links touching that
  column.
- Links are ordered by (source value order, target value order); member
  records keep record-store order.
- Empty records or an empty attribute list yield an empty graph.

The builder is pure: identical inputs give identical keys, counts and member
records in identical order.

Examples:
    >>> from sankeysync.core.records import make_records
    >>> from sankeysync.core.graph import build_graph
    >>> rs = make_records([{"bedrooms": 2, "parking": 1}, {"bedrooms": 3, "parking": 1}])
    >>> g = build_graph(rs, ["bedrooms", "parking"])
    >>> [str(n.key) for n in g.nodes]
    ['bedrooms-2', 'bedrooms-3', 'parking-1']
    >>> [l.value for l in g.links]
    [1, 1]
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from .errors import InvalidAttributesError, UnknownNodeError
from .keys import NodeKey, value_sort_key
from .labels import format_value
from .records import Record
from .typing import Scalar

__all__ = [
    "Node",
    "Link",
    "FlowGraph",
    "build_graph",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """
    One distinct value of one attribute.

    Attributes:
        key (NodeKey): Structured (attribute, value) identity.
        dim_index (int): Column position of the attribute.
        houses (tuple[Record, ...]): Records holding ``key.value`` at ``key.attribute``.
        name (str): Display label of the value.
    """

    key: NodeKey
    dim_index: int
    houses: tuple[Record, ...]
    name: str

    @property
    def attribute(self) -> str:
        return self.key.attribute

    @property
    def value(self) -> Scalar:
        return self.key.value

    @property
    def count(self) -> int:
        return len(self.houses)


@dataclass(frozen=True)
class Link:
    """
    Aggregated transition between two nodes in adjacent columns.

    Attributes:
        source (NodeKey): Node in column i.
        target (NodeKey): Node in column i + 1.
        houses (tuple[Record, ...]): Records holding both endpoint values.
    """

    source: NodeKey
    target: NodeKey
    houses: tuple[Record, ...]

    @property
    def value(self) -> int:
        return len(self.houses)

    @property
    def key(self) -> tuple[NodeKey, NodeKey]:
        return (self.source, self.target)


@dataclass(frozen=True)
class FlowGraph:
    """Nodes (column-major, value-sorted) and links (pair-major) of one diagram."""

    attributes: tuple[str, ...] = ()
    nodes: tuple[Node, ...] = ()
    links: tuple[Link, ...] = ()
    _by_key: dict[NodeKey, Node] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self._by_key and self.nodes:
            self._by_key.update({n.key: n for n in self.nodes})

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node(self, key: NodeKey) -> Node:
        try:
            return self._by_key[key]
        except KeyError as exc:
            raise UnknownNodeError(str(key)) from exc

    def has_node(self, key: NodeKey) -> bool:
        return key in self._by_key

    def node_keys(self) -> frozenset[NodeKey]:
        return frozenset(self._by_key)

    def column(self, dim_index: int) -> list[Node]:
        return [n for n in self.nodes if n.dim_index == dim_index]

    def iter_columns(self) -> Iterator[tuple[int, list[Node]]]:
        for i in range(len(self.attributes)):
            col = self.column(i)
            if col:
                yield i, col


def _check_attributes(attributes: Sequence[str]) -> tuple[str, ...]:
    names = tuple(attributes)
    for a in names:
        if not isinstance(a, str):
            raise InvalidAttributesError(f"attribute names must be str, got {a!r}")
    if len(set(names)) != len(names):
        raise InvalidAttributesError(f"duplicate attribute names in {list(names)!r}")
    return names


def _group_by_value(records: Sequence[Record], attribute: str) -> dict[NodeKey, list[Record]]:
    groups: dict[NodeKey, list[Record]] = {}
    for r in records:
        groups.setdefault(NodeKey.of(attribute, r.get(attribute)), []).append(r)
    return groups


def build_graph(records: Sequence[Record], attributes: Sequence[str]) -> FlowGraph:
    """Build the layered flow graph for ``records`` over ``attributes``.

    Args:
        records (Sequence[Record]): Record store contents.
        attributes (Sequence[str]): Ordered column attributes.

    Returns:
        FlowGraph: Empty when either input is empty.

    Raises:
        InvalidAttributesError: If an attribute name is not a str or repeats.
    """
    names = _check_attributes(attributes)
    if not records or not names:
        return FlowGraph(attributes=names)

    nodes: list[Node] = []
    order: dict[NodeKey, int] = {}
    for dim_index, attribute in enumerate(names):
        groups = _group_by_value(records, attribute)
        for key in sorted(groups, key=lambda k: value_sort_key(k.value)):
            order[key] = len(order)
            nodes.append(
                Node(
                    key=key,
                    dim_index=dim_index,
                    houses=tuple(groups[key]),
                    name=format_value(key.value, attribute),
                )
            )

    links: list[Link] = []
    for src_attr, dst_attr in zip(names, names[1:]):
        pairs: dict[tuple[NodeKey, NodeKey], list[Record]] = {}
        for r in records:
            if not (r.has(src_attr) and r.has(dst_attr)):
                continue
            pair = (NodeKey.of(src_attr, r.get(src_attr)), NodeKey.of(dst_attr, r.get(dst_attr)))
            pairs.setdefault(pair, []).append(r)
        for src, dst in sorted(pairs, key=lambda p: (order[p[0]], order[p[1]])):
            links.append(Link(source=src, target=dst, houses=tuple(pairs[(src, dst)])))

    logger.debug(
        "built graph: %d records, %d attributes, %d nodes, %d links",
        len(records),
        len(names),
        len(nodes),
        len(links),
    )
    return FlowGraph(attributes=names, nodes=tuple(nodes), links=tuple(links))
