"""
SankeyController: command handlers that keep graph, layout and selection in step.

Handlers and their recomputation contract:
- ``on_data_changed(records)``: rebuild graph and layout, prune stale boxes,
  recompute the filter against the new records.
- ``on_attributes_changed(attributes)``: rebuild graph and layout, prune boxes
  whose attribute left the diagram.
- ``on_node_clicked(key)``: report the click to the host, then toggle the box
  and recompute the filter.
- ``on_external_selection(records, source)``: store the highlight set. When the
  selection came from anywhere but this diagram, the box selection is dropped.
- ``on_clear_requested()``: drop the box selection and report the empty filter.

Every handler runs to completion before returning; a later call simply
overwrites derived state.

Authority
- Box selection and external selection are mutually exclusive owners of
  "what is filtered". An external selection clears the boxes without
  notifying the host, so the external records stay the current selection.
- The host tags the source of every highlight set it forwards. Echoes of this
  controller's own filter come back tagged ``SelectionSource.SANKEY`` and only
  restyle the diagram.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from .graph import FlowGraph, build_graph
from .highlight import LinkState, NodeState, OverlayPath, link_states, node_states, overlay_paths
from .keys import NodeKey
from .layout import LayoutSettings, SankeyLayout, compute_layout
from .records import Record
from .selection import SelectionEngine
from .typing import FilterCallback, NodeClickCallback

__all__ = [
    "SelectionSource",
    "SankeyView",
    "SankeyController",
]

logger = logging.getLogger(__name__)


class SelectionSource(str, Enum):
    SANKEY = "sankey"
    SCATTERPLOT = "scatterplot"
    EXTERNAL = "external"


@dataclass(frozen=True)
class SankeyView:
    """Snapshot handed to renderers."""

    layout: SankeyLayout
    nodes: dict[NodeKey, NodeState]
    links: list[LinkState]
    overlays: list[OverlayPath]
    selected_boxes: frozenset[NodeKey]
    filtered: tuple[Record, ...]
    highlight_set: tuple[Record, ...]


class SankeyController:
    """Single owner of the diagram's derived state for one host view.

    Args:
        layout_settings (LayoutSettings): Drawing area and node geometry.
        max_overlay_paths (int): Cap on overlay paths per highlight set.
        on_filter_changed (FilterCallback | None): Receives the cascading filter result.
        on_node_clicked (NodeClickCallback | None): Receives clicked node keys.
    """

    def __init__(
        self,
        layout_settings: LayoutSettings,
        *,
        max_overlay_paths: int = 50,
        on_filter_changed: FilterCallback | None = None,
        on_node_clicked: NodeClickCallback | None = None,
    ) -> None:
        self.layout_settings = layout_settings
        self.max_overlay_paths = max_overlay_paths
        self._on_node_clicked = on_node_clicked
        self.selection = SelectionEngine(on_filter_changed=on_filter_changed)
        self._records: tuple[Record, ...] = ()
        self._attributes: tuple[str, ...] = ()
        self._highlight: tuple[Record, ...] = ()
        self._highlight_source: SelectionSource | None = None
        self._graph = FlowGraph()
        self._layout = compute_layout(self._graph, layout_settings)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def records(self) -> tuple[Record, ...]:
        return self._records

    @property
    def attributes(self) -> tuple[str, ...]:
        return self._attributes

    @property
    def graph(self) -> FlowGraph:
        return self._graph

    @property
    def layout(self) -> SankeyLayout:
        return self._layout

    @property
    def highlight_set(self) -> tuple[Record, ...]:
        return self._highlight

    @property
    def highlight_source(self) -> SelectionSource | None:
        return self._highlight_source

    @property
    def selected_boxes(self) -> frozenset[NodeKey]:
        return self.selection.selected_boxes

    @property
    def filtered(self) -> tuple[Record, ...]:
        return self.selection.filtered

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _rebuild(self) -> frozenset[NodeKey]:
        self._graph = build_graph(self._records, self._attributes)
        self._layout = compute_layout(self._graph, self.layout_settings)
        return self.selection.prune_invalid(self._graph.node_keys(), self._graph)

    def on_data_changed(self, records: Sequence[Record]) -> None:
        self._records = tuple(records)
        dropped = self._rebuild()
        # Surviving keys may now hold different records.
        if not dropped and self.selected_boxes:
            self.selection.recompute(self._graph)
        logger.debug("data changed: %d records", len(self._records))

    def on_attributes_changed(self, attributes: Sequence[str]) -> None:
        self._attributes = tuple(attributes)
        dropped = self._rebuild()
        if dropped:
            logger.info("attribute change dropped %d selected box(es)", len(dropped))

    def on_node_clicked(self, key: NodeKey) -> None:
        if not self._graph.has_node(key):
            logger.debug("ignoring click on unknown node %s", key)
            return
        if self._on_node_clicked is not None:
            self._on_node_clicked(key)
        self.selection.toggle_box(key, self._graph)

    def on_external_selection(self, records: Sequence[Record], source: SelectionSource) -> None:
        self._highlight = tuple(records)
        self._highlight_source = source
        if source is not SelectionSource.SANKEY:
            self.selection.clear(notify=False)

    def on_clear_requested(self) -> None:
        self.selection.clear()

    def update_layout_settings(self, layout_settings: LayoutSettings) -> None:
        """Re-run the layout for a new drawing area; topology and selection are kept."""
        self.layout_settings = layout_settings
        self._layout = compute_layout(self._graph, layout_settings)

    # ------------------------------------------------------------------
    # Output contract
    # ------------------------------------------------------------------

    def view(self) -> SankeyView:
        return SankeyView(
            layout=self._layout,
            nodes=node_states(self._graph.nodes, self.selected_boxes, self._highlight),
            links=link_states(self._graph.links, self._highlight),
            overlays=overlay_paths(self._layout, self._highlight, self.max_overlay_paths),
            selected_boxes=self.selected_boxes,
            filtered=self.filtered,
            highlight_set=self._highlight,
        )
