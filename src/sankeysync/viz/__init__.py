"""
sankeysync.viz: Altair renderers over core outputs.

## Responsibilities
- Turn a SankeyView (positioned nodes/links, tiers, overlays) into a layered chart.
- Provide the companion scatterplot with a brush selection.
- Never mutate core state; read-only by contract.

## Public API
- sankey: ``sankey_chart`` and the value builders behind it.
- scatter: ``scatter_chart`` and ``records_in_brush``.
- theme: colors per node tier and link state.

## Import DAG discipline
- Depends on: sankeysync.core, sankeysync.io.config, altair (and stdlib).
"""

from __future__ import annotations

from .sankey import NODE_SELECTION, node_key_for_id, sankey_chart
from .scatter import BRUSH_SELECTION, records_in_brush, scatter_chart

__all__ = [
    "NODE_SELECTION",
    "BRUSH_SELECTION",
    "sankey_chart",
    "node_key_for_id",
    "scatter_chart",
    "records_in_brush",
]
