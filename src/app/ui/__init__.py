"""
sankeysync App UI package.

This package contains the Streamlit UI for the linked housing views. It exposes
high-level orchestration and focused modules for separate concerns.

Modules:
    - app: Streamlit application orchestrator (streamlit_app).
    - header: Global header (data file, cache preferences) and dimension controls.
    - helpers: Small cross-cutting helpers (accelerators, selection events, text).

Usage:
    from app.ui import streamlit_app
    streamlit_app()
"""

from __future__ import annotations

from .app import streamlit_app
from .header import render_dimension_controls, render_header

__all__ = [
    "streamlit_app",
    "render_header",
    "render_dimension_controls",
]
