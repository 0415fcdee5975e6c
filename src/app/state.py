"""
Per-session host state: the glue between the two views and the controller.

SyncHost plays the role of the parent component that owns the shared record
selection. It keeps no Streamlit imports so the full selection round trip can
be exercised in tests.

Flow
- Sankey click: ``click_node(node_id)`` -> controller toggles the box -> the
  filter callback stores the result as the shared selection tagged ``sankey``
  and echoes it back to the controller for restyling.
- Scatterplot brush: ``brush(bounds)`` stores the brushed records tagged
  ``scatterplot`` and forwards them; the controller drops its box selection.
- ``clear()``: drop boxes and the shared selection.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sankeysync.core.dimensions import DimensionSet
from sankeysync.core.records import Record
from sankeysync.core.sync import SankeyController, SankeyView, SelectionSource
from sankeysync.io.config import SankeySettings
from sankeysync.viz.sankey import node_key_for_id
from sankeysync.viz.scatter import records_in_brush

__all__ = ["SyncHost"]

logger = logging.getLogger(__name__)


class SyncHost:
    """Owns the shared selection, the dimension controls and one controller.

    Args:
        settings (SankeySettings): Canvas and layout settings.
        x (str): Scatterplot x field.
        y (str): Scatterplot y field.
    """

    def __init__(self, settings: SankeySettings, *, x: str = "area", y: str = "price") -> None:
        self.settings = settings
        self.x = x
        self.y = y
        self.selected_items: tuple[Record, ...] = ()
        self.selection_source: SelectionSource | None = None
        self.dimensions = DimensionSet()
        self.click_nonce = 0
        self.controller = SankeyController(
            settings.layout_settings(),
            max_overlay_paths=settings.max_overlay_paths,
            on_filter_changed=self._on_filter_changed,
        )

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def _on_filter_changed(self, records: Sequence[Record]) -> None:
        self._share(records, SelectionSource.SANKEY)

    def _share(self, records: Sequence[Record], source: SelectionSource) -> None:
        self.selected_items = tuple(records)
        self.selection_source = source
        self.controller.on_external_selection(self.selected_items, source)
        logger.debug("selection from %s: %d record(s)", source.value, len(self.selected_items))

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @property
    def records(self) -> tuple[Record, ...]:
        return self.controller.records

    def set_data(self, records: Sequence[Record], columns: Sequence[str]) -> None:
        """Load a new record set and restrict the dimension controls to ``columns``."""
        self.dimensions = DimensionSet.from_columns(
            list(columns), active=tuple(self.settings.default_attributes)
        )
        self.controller.on_data_changed(records)
        self.controller.on_attributes_changed(self.dimensions.active)
        # Records from the previous data set are no longer meaningful.
        self._share((), SelectionSource.EXTERNAL)

    def set_attributes(self, attributes: Sequence[str]) -> bool:
        """Apply a new active attribute list; returns False when it was refused."""
        updated = self.dimensions.with_active(list(attributes))
        if updated is self.dimensions:
            return False
        if updated.active == self.dimensions.active:
            return True
        self.dimensions = updated
        self.controller.on_attributes_changed(updated.active)
        return True

    def click_node(self, node_id: int) -> bool:
        """Handle a click on the node at ``node_id``; returns True if it was applied."""
        key = node_key_for_id(self.controller.view(), node_id)
        if key is None:
            logger.debug("click on unknown node id %s", node_id)
            return False
        self.controller.on_node_clicked(key)
        # Re-keying the chart widget resets its selection so repeat clicks register.
        self.click_nonce += 1
        return True

    def brush(self, bounds: dict[str, Sequence[float]] | None) -> None:
        """Share the records inside the scatterplot brush (empty bounds clear it)."""
        chosen = records_in_brush(self.records, self.x, self.y, bounds)
        self._share(chosen, SelectionSource.SCATTERPLOT)

    def clear(self) -> None:
        # Emits an empty filter, which resets the shared selection.
        self.controller.on_clear_requested()
        self.click_nonce += 1

    def resize(self, settings: SankeySettings) -> None:
        self.settings = settings
        self.controller.update_layout_settings(settings.layout_settings())

    def view(self) -> SankeyView:
        return self.controller.view()
