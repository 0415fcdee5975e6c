"""
Header (global controls) for the sankeysync Streamlit application.

This module renders the top-of-page controls, including:
- Data file selection, with demo-data creation when the file is missing.
- Cache preferences panel and construction of the CacheConfig used by loaders.

It also hosts the dimension controls rendered in the sidebar, which edit the
session's DimensionSet (at least two attributes stay active).

Notes:
    - Avoids performing heavy IO directly; loading goes through app.data.
"""

from __future__ import annotations

from pathlib import Path

import streamlit as st

from app.data import CacheConfig, ensure_demo_data
from app.state import SyncHost
from sankeysync.core.labels import format_attribute

from .helpers import enable_vegafusion_optional


def render_header(*, default_data: str) -> tuple[str, CacheConfig]:
    """Render the global header and return the data path and cache config.

    Args:
        default_data (str): Initial CSV path.

    Returns:
        tuple[str, CacheConfig]: (data_path, cache_config)

    Notes:
        - When the default data file is missing, a synthetic housing CSV is
          written there so the app always has something to show.
    """
    st.markdown("### Housing flows")
    accel_msg = enable_vegafusion_optional()
    if accel_msg:
        st.caption(accel_msg)

    if "data_path" not in st.session_state:
        st.session_state["data_path"] = default_data
    if "cache_ttl" not in st.session_state:
        st.session_state["cache_ttl"] = 600
    if "cache_persist" not in st.session_state:
        st.session_state["cache_persist"] = False

    c1, c2 = st.columns([0.75, 0.25])
    with c1:
        data_path = st.text_input(
            "Data file (CSV)",
            value=st.session_state["data_path"],
            key="data_path_header",
        )
        path = Path(data_path)
        if not path.exists() and data_path == default_data:
            try:
                ensure_demo_data(path)
                st.success(f"No data found. Created demo data at {path}")
            except OSError as e:  # pragma: no cover
                st.error(f"Failed to create demo data: {e}")
    with c2:
        with st.expander("Cache", expanded=False):
            ttl = st.number_input(
                "Cache TTL (seconds)",
                min_value=0,
                value=int(st.session_state["cache_ttl"]),
                step=60,
                help="0 disables TTL",
                key="cache_ttl_header",
            )
            persist = st.checkbox(
                "Persist to disk",
                value=bool(st.session_state["cache_persist"]),
                key="cache_persist_header",
            )
            st.session_state["cache_ttl"] = int(ttl)
            st.session_state["cache_persist"] = bool(persist)

    st.session_state["data_path"] = data_path

    cache_cfg = CacheConfig(
        ttl=int(st.session_state["cache_ttl"]) if int(st.session_state["cache_ttl"]) > 0 else None,
        persist=bool(st.session_state["cache_persist"]),
    )
    return data_path, cache_cfg


def render_dimension_controls(host: SyncHost) -> None:
    """Sidebar multiselect over the active attributes (order = column order).

    Args:
        host (SyncHost): Session host whose DimensionSet is edited.
    """
    dims = host.dimensions
    with st.sidebar.expander("Dimensions", expanded=True):
        chosen = st.multiselect(
            "Active attributes",
            options=[*dims.active, *dims.available],
            default=list(dims.active),
            format_func=format_attribute,
            help=f"Columns of the diagram, left to right (at least {dims.min_active}).",
            key="dimensions_select",
        )
        if not host.set_attributes(chosen):
            st.warning(f"At least {dims.min_active} attributes must stay active.")
