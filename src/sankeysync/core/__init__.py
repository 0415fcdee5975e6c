"""
Core of sankeysync: graph, layout, selection, highlight and sync.

## Contracts
- records: Record (frozen pydantic model), identity = ``index``.
- keys: NodeKey (structured (attribute, value) identity) and the natural value sort.
- graph: ``build_graph(records, attributes) -> FlowGraph``.
- layout: ``compute_layout(graph, LayoutSettings) -> SankeyLayout``.
- selection: SelectionState, pure toggle/prune/clear/recompute, SelectionEngine.
- highlight: node tiers and labels, link activity, overlay paths.
- sync: SankeyController command handlers and the SankeyView snapshot.

## Notes
- Zero-IO: stdlib + pydantic only; no rendering.
- Failures of the diagram itself (empty input, degenerate columns, non-finite
  geometry, stale selections) are handled locally and never raise.

## Examples
```python
from sankeysync.core import LayoutSettings, NodeKey, SankeyController, make_records
ctl = SankeyController(LayoutSettings(width=900, height=500))
ctl.on_data_changed(make_records([{"bedrooms": 2, "parking": 1}, {"bedrooms": 3, "parking": 0}]))
ctl.on_attributes_changed(["bedrooms", "parking"])
ctl.on_node_clicked(NodeKey.of("bedrooms", 2))
[r.index for r in ctl.filtered]  # [0]
```
"""

from __future__ import annotations

from .dimensions import DimensionSet
from .errors import InvalidAttributesError, SankeyError, UnknownNodeError
from .graph import FlowGraph, Link, Node, build_graph
from .highlight import LinkState, NodeState, NodeTier, OverlayPath
from .keys import NodeKey, value_sort_key
from .layout import LayoutSettings, PositionedLink, PositionedNode, SankeyLayout, compute_layout
from .records import Record, make_records
from .selection import SelectionEngine, SelectionState, recompute_filter
from .sync import SankeyController, SankeyView, SelectionSource

__all__ = [
    "SankeyError",
    "DimensionSet",
    "InvalidAttributesError",
    "UnknownNodeError",
    "Record",
    "make_records",
    "NodeKey",
    "value_sort_key",
    "Node",
    "Link",
    "FlowGraph",
    "build_graph",
    "LayoutSettings",
    "PositionedNode",
    "PositionedLink",
    "SankeyLayout",
    "compute_layout",
    "SelectionState",
    "SelectionEngine",
    "recompute_filter",
    "NodeTier",
    "NodeState",
    "LinkState",
    "OverlayPath",
    "SelectionSource",
    "SankeyView",
    "SankeyController",
]
