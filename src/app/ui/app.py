"""
Streamlit application orchestrator for sankeysync.

This module composes the global header, the dimension controls and the two
linked views while delegating supporting concerns to focused modules under
app.ui.* (header, helpers) and to the session's SyncHost.

Responsibilities:
    - Configure Streamlit page.
    - Render global header (data file, cache prefs).
    - Load records via app.data with configurable caching.
    - Apply pending chart selections to the SyncHost before drawing.
    - Mount the scatterplot, the Sankey diagram and a table of the selection.

Notes:
    - Chart selections are read from session state at the top of a rerun so
      both charts are drawn from the updated state. Both charts are keyed with
      the host's click nonce; bumping it resets their selections.
"""

from __future__ import annotations

from typing import Any, cast

import streamlit as st

from app.data import load_records
from app.state import SyncHost
from sankeysync.io.config import SankeySettings
from sankeysync.io.errors import IoError
from sankeysync.io.read import records_to_frame
from sankeysync.viz.sankey import NODE_SELECTION, sankey_chart
from sankeysync.viz.scatter import BRUSH_SELECTION, scatter_chart

from .header import render_dimension_controls, render_header
from .helpers import brush_bounds, clicked_node_id, pluralize


def _host(settings: SankeySettings) -> SyncHost:
    host = st.session_state.get("sync_host")
    if not isinstance(host, SyncHost):
        host = SyncHost(settings)
        st.session_state["sync_host"] = host
    elif host.settings != settings:
        host.resize(settings)
    return host


def _apply_pending_selections(host: SyncHost) -> None:
    """Feed the latest brush and click events (if new) to the host."""
    nonce = host.click_nonce
    bounds = brush_bounds(st.session_state.get(f"scatter_{nonce}"), BRUSH_SELECTION)
    last = st.session_state.get("last_brush")
    prev = last[1] if last and last[0] == nonce else None
    if bounds != prev:
        host.brush(bounds)
        st.session_state["last_brush"] = (nonce, bounds)

    node_id = clicked_node_id(st.session_state.get(f"sankey_{nonce}"), NODE_SELECTION)
    if node_id is not None:
        host.click_node(node_id)


def streamlit_app(settings: SankeySettings | None = None) -> None:
    """Render the sankeysync Streamlit application.

    Args:
        settings (SankeySettings | None): Resolved settings; loaded from the
            environment and TOML files when omitted.

    Returns:
        None
    """
    settings = settings or SankeySettings.load()

    st.set_page_config(page_title="Housing flows", layout="wide")

    data_path, cache_cfg = render_header(default_data=settings.data_path)
    host = _host(settings)

    if st.session_state.get("loaded_data_path") != data_path:
        try:
            with st.spinner("Loading records ..."):
                records, columns = load_records(data_path, cfg=cache_cfg)
        except IoError as e:
            st.error(str(e))
            return
        host.set_data(records, columns)
        st.session_state["loaded_data_path"] = data_path

    render_dimension_controls(host)
    _apply_pending_selections(host)

    c1, c2 = st.columns([0.8, 0.2])
    with c1:
        source = host.selection_source.value if host.selection_source else "none"
        st.markdown(
            f"**Selected:** {pluralize(len(host.selected_items), 'house')} (source: {source})"
        )
    with c2:
        if st.button("Clear Selection", disabled=not host.selected_items):
            host.clear()
            st.rerun()

    nonce = host.click_nonce
    tab_views, tab_data = st.tabs(["Views", "Selection"])

    with tab_views:
        st.subheader(f"{host.y.title()} vs {host.x.title()}")
        scatter = scatter_chart(
            host.records, x=host.x, y=host.y, highlight_set=host.selected_items
        )
        st.altair_chart(
            cast(Any, scatter), theme=None, on_select="rerun", key=f"scatter_{nonce}"
        )

        st.subheader("Flows")
        st.caption(
            "Click boxes to filter; boxes in one column combine with OR, across columns with AND."
        )
        try:
            chart = sankey_chart(host.view(), settings)
            st.altair_chart(
                cast(Any, chart), theme=None, on_select="rerun", key=f"sankey_{nonce}"
            )
        except Exception as e:  # pragma: no cover
            st.error(f"Failed to render flow diagram: {e}")

    with tab_data:
        if host.selected_items:
            st.dataframe(records_to_frame(host.selected_items), use_container_width=True)
        else:
            st.caption("Nothing selected. Brush the scatterplot or click a box in the diagram.")
