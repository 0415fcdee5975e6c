"""
Highlight channel: node tiers, labels, link activity and overlay paths.

The highlight set is a record selection sourced outside the engine (for
example a scatterplot brush, or the box filter echoed back by the host). It is
read-only here and never changes the box selection.

Node tiers, in priority order:
1. ``selected``: the node key is a selected box.
2. ``flow``: at least one highlighted record passes through the node.
3. ``default``: everything else.

Labels show ``"{name} ({count})"`` in the default tier or when nothing is
highlighted, and ``"{name} ({matching}/{count})"`` otherwise.

Links are ``active`` when they carry a highlighted record, ``dimmed`` otherwise.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from enum import Enum

from .graph import Link, Node
from .keys import NodeKey
from .layout import SankeyLayout
from .records import Record, index_set

__all__ = [
    "NodeTier",
    "NodeState",
    "LinkState",
    "OverlayPath",
    "node_states",
    "link_states",
    "node_label",
    "overlay_paths",
]


class NodeTier(str, Enum):
    SELECTED = "selected"
    FLOW = "flow"
    DEFAULT = "default"


@dataclass(frozen=True)
class NodeState:
    key: NodeKey
    tier: NodeTier
    matching_count: int
    label: str


@dataclass(frozen=True)
class LinkState:
    source: NodeKey
    target: NodeKey
    active: bool


@dataclass(frozen=True)
class OverlayPath:
    """Polyline through the node centres a highlighted record passes."""

    record: Record
    points: tuple[tuple[float, float], ...]


def node_label(node: Node, tier: NodeTier, matching_count: int, highlighting: bool) -> str:
    if highlighting and tier is not NodeTier.DEFAULT:
        return f"{node.name} ({matching_count}/{node.count})"
    return f"{node.name} ({node.count})"


def _tier(node: Node, selected: Collection[NodeKey], matching: int) -> NodeTier:
    if node.key in selected:
        return NodeTier.SELECTED
    if matching > 0:
        return NodeTier.FLOW
    return NodeTier.DEFAULT


def node_states(
    nodes: Sequence[Node],
    selected_boxes: Collection[NodeKey],
    highlight_set: Sequence[Record],
) -> dict[NodeKey, NodeState]:
    """Visual state of every node for the current boxes and highlight set."""
    wanted = index_set(highlight_set)
    out: dict[NodeKey, NodeState] = {}
    for node in nodes:
        matching = sum(1 for h in node.houses if h.index in wanted) if wanted else 0
        tier = _tier(node, selected_boxes, matching)
        out[node.key] = NodeState(
            key=node.key,
            tier=tier,
            matching_count=matching,
            label=node_label(node, tier, matching, bool(wanted)),
        )
    return out


def link_states(links: Sequence[Link], highlight_set: Sequence[Record]) -> list[LinkState]:
    wanted = index_set(highlight_set)
    return [
        LinkState(
            source=link.source,
            target=link.target,
            active=any(h.index in wanted for h in link.houses),
        )
        for link in links
    ]


def overlay_paths(
    layout: SankeyLayout, highlight_set: Sequence[Record], max_paths: int
) -> list[OverlayPath]:
    """Paths for the first ``max_paths`` highlighted records, in highlight order.

    A record's path visits, column by column, the centre of the node holding its
    value. Records that touch fewer than two positioned nodes yield no path.
    """
    if max_paths <= 0 or layout.is_empty:
        return []
    out: list[OverlayPath] = []
    for record in highlight_set[:max_paths]:
        points: list[tuple[float, float]] = []
        for attribute in layout.attributes:
            pnode = layout.node(NodeKey.of(attribute, record.get(attribute)))
            if pnode is not None:
                points.append((pnode.cx, pnode.cy))
        if len(points) > 1:
            out.append(OverlayPath(record=record, points=tuple(points)))
    return out
