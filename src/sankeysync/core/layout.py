"""
Column/flow layout for a FlowGraph.

``compute_layout(graph, settings)`` returns a SankeyLayout of positioned nodes
and links. It is a pure function of the graph and the drawing area; inputs are
not modified.

Columns
- ``spacing = width / max(num_columns - 1, 1)``; ``x0 = dim_index * spacing``;
  ``x1 = x0 + node_width``. A single column sits at x = 0.

Rows
- Within a column nodes are ordered by count (descending), ties by value order.
- ``scale = (height - (n - 1) * padding) / sum(count)``; node heights are
  ``count * scale`` and nodes stack top-down with ``padding`` gaps, so heights
  plus gaps fill ``height`` exactly.

Link bands
- At every node, outgoing links (and, separately, incoming links) are ordered
  by value (descending) and tile the node's full height:
  ``band = value * node_height / sum(attached values)``.
- Incoming and outgoing sides are normalized independently, so ribbon width is
  not conserved through a node.

Degenerate input
- 0/0 scales resolve to 0. A column whose padding exceeds the height gets zero
  node heights (logged).
- Any node or link with a non-finite coordinate is left out of ``nodes`` /
  ``links``, kept in ``skipped_nodes`` / ``skipped_links`` and logged; the rest
  of the pass continues.
"""

from __future__ import annotations

import logging
import math
from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from .graph import FlowGraph, Link, Node
from .keys import NodeKey, value_sort_key

__all__ = [
    "LayoutSettings",
    "PositionedNode",
    "PositionedLink",
    "SankeyLayout",
    "compute_layout",
    "safe_div",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutSettings:
    """
    Drawing area and node geometry for one layout pass.

    Attributes:
        width (float): Inner drawing width (canvas minus horizontal margins).
        height (float): Inner drawing height (canvas minus vertical margins).
        node_width (float): Fixed node rectangle width.
        node_padding (float): Vertical gap between nodes of a column.
    """

    width: float
    height: float
    node_width: float = 15.0
    node_padding: float = 10.0


@dataclass(frozen=True)
class PositionedNode:
    node: Node
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def key(self) -> NodeKey:
        return self.node.key

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @property
    def cx(self) -> float:
        return (self.x0 + self.x1) / 2

    @property
    def cy(self) -> float:
        return (self.y0 + self.y1) / 2

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x0, self.y0, self.x1, self.y1))


@dataclass(frozen=True)
class PositionedLink:
    """
    Ribbon geometry for one link.

    Attributes:
        link (Link): Graph link.
        source (PositionedNode): Source rectangle.
        target (PositionedNode): Target rectangle.
        y0 (float): Top of the band at the source node.
        y1 (float): Top of the band at the target node.
        source_width (float): Band height at the source node.
        target_width (float): Band height at the target node.
    """

    link: Link
    source: PositionedNode
    target: PositionedNode
    y0: float
    y1: float
    source_width: float
    target_width: float

    @property
    def x0(self) -> float:
        return self.source.x1

    @property
    def x1(self) -> float:
        return self.target.x0

    @property
    def value(self) -> int:
        return self.link.value

    def corners(self) -> tuple[float, float, float, float]:
        """(source top, source bottom, target top, target bottom)."""
        return (self.y0, self.y0 + self.source_width, self.y1, self.y1 + self.target_width)

    def is_finite(self) -> bool:
        vals = (self.x0, self.x1, *self.corners())
        return all(math.isfinite(v) for v in vals)


@dataclass(frozen=True)
class SankeyLayout:
    """Positioned nodes and links, plus anything skipped for invalid geometry."""

    settings: LayoutSettings
    attributes: tuple[str, ...] = ()
    nodes: tuple[PositionedNode, ...] = ()
    links: tuple[PositionedLink, ...] = ()
    skipped_nodes: tuple[Node, ...] = ()
    skipped_links: tuple[Link, ...] = ()
    _by_key: dict[NodeKey, PositionedNode] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self._by_key and self.nodes:
            self._by_key.update({p.key: p for p in self.nodes})

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node(self, key: NodeKey) -> PositionedNode | None:
        return self._by_key.get(key)

    def columns(self) -> list[tuple[int, str, float]]:
        """(dim_index, attribute, x centre) for every column that has nodes."""
        seen: dict[int, float] = {}
        for p in self.nodes:
            seen.setdefault(p.node.dim_index, p.cx)
        return [(i, self.attributes[i], seen[i]) for i in sorted(seen)]


def safe_div(num: float, den: float) -> float:
    """Division that maps x/0 to 0.0 instead of raising or producing NaN."""
    if den == 0:
        return 0.0
    return num / den


def _row_order(column: Iterable[Node]) -> list[Node]:
    return sorted(column, key=lambda n: (-n.count, value_sort_key(n.value)))


def _place_columns(graph: FlowGraph, settings: LayoutSettings) -> list[PositionedNode]:
    columns = list(graph.iter_columns())
    spacing = settings.width / max(len(columns) - 1, 1)
    placed: list[PositionedNode] = []
    for position, (dim_index, column) in enumerate(columns):
        x0 = position * spacing
        x1 = x0 + settings.node_width
        n = len(column)
        available = settings.height - (n - 1) * settings.node_padding
        if available < 0:
            logger.warning(
                "column %r: padding %.1f x %d exceeds height %.1f; node heights clamped to 0",
                graph.attributes[dim_index],
                settings.node_padding,
                n - 1,
                settings.height,
            )
            available = 0.0
        scale = safe_div(available, sum(node.count for node in column))
        y = 0.0
        for node in _row_order(column):
            h = node.count * scale
            placed.append(PositionedNode(node=node, x0=x0, y0=y, x1=x1, y1=y + h))
            y += h + settings.node_padding
    return placed


def _bands(
    attached: Mapping[NodeKey, list[Link]],
    positions: Mapping[NodeKey, PositionedNode],
    other_end: str,
) -> dict[tuple[NodeKey, NodeKey], tuple[float, float]]:
    """Tile each node's height with the bands of its attached links.

    Returns a mapping link key -> (band top, band height).
    """
    out: dict[tuple[NodeKey, NodeKey], tuple[float, float]] = {}
    for key, links in attached.items():
        pnode = positions.get(key)
        if pnode is None:
            continue

        def _tie(link: Link) -> float:
            other = positions.get(getattr(link, other_end))
            return other.y0 if other is not None else math.inf

        ordered = sorted(links, key=lambda link: (-link.value, _tie(link)))
        scale = safe_div(pnode.height, sum(link.value for link in ordered))
        y = pnode.y0
        for link in ordered:
            w = link.value * scale
            out[link.key] = (y, w)
            y += w
    return out


def compute_layout(graph: FlowGraph, settings: LayoutSettings) -> SankeyLayout:
    """Position every node and link of ``graph`` inside ``settings``' drawing area.

    Args:
        graph (FlowGraph): Graph from ``build_graph``.
        settings (LayoutSettings): Drawing area and node geometry.

    Returns:
        SankeyLayout: Empty for an empty graph.
    """
    if graph.is_empty:
        return SankeyLayout(settings=settings, attributes=graph.attributes)

    placed = _place_columns(graph, settings)
    good_nodes: list[PositionedNode] = []
    skipped_nodes: list[Node] = []
    for p in placed:
        if p.is_finite():
            good_nodes.append(p)
        else:
            logger.warning("skipping node %s: non-finite geometry %r", p.key, p)
            skipped_nodes.append(p.node)
    positions = {p.key: p for p in good_nodes}

    outgoing: dict[NodeKey, list[Link]] = defaultdict(list)
    incoming: dict[NodeKey, list[Link]] = defaultdict(list)
    for link in graph.links:
        outgoing[link.source].append(link)
        incoming[link.target].append(link)
    src_bands = _bands(outgoing, positions, "target")
    dst_bands = _bands(incoming, positions, "source")

    good_links: list[PositionedLink] = []
    skipped_links: list[Link] = []
    for link in graph.links:
        src = positions.get(link.source)
        dst = positions.get(link.target)
        if src is None or dst is None or link.key not in src_bands or link.key not in dst_bands:
            logger.warning(
                "skipping link %s -> %s: endpoint not positioned", link.source, link.target
            )
            skipped_links.append(link)
            continue
        y0, w0 = src_bands[link.key]
        y1, w1 = dst_bands[link.key]
        plink = PositionedLink(
            link=link, source=src, target=dst, y0=y0, y1=y1, source_width=w0, target_width=w1
        )
        if not plink.is_finite():
            logger.warning("skipping link %s -> %s: non-finite geometry", link.source, link.target)
            skipped_links.append(link)
            continue
        good_links.append(plink)

    logger.debug(
        "layout: %d nodes, %d links placed (%d/%d skipped)",
        len(good_nodes),
        len(good_links),
        len(skipped_nodes),
        len(skipped_links),
    )
    return SankeyLayout(
        settings=settings,
        attributes=graph.attributes,
        nodes=tuple(good_nodes),
        links=tuple(good_links),
        skipped_nodes=tuple(skipped_nodes),
        skipped_links=tuple(skipped_links),
    )
