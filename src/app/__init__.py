"""
Top-level Streamlit app package.

This package hosts the interactive linked-views app (Streamlit) decoupled from
the sankeysync.* library modules. Charts live under sankeysync.viz.*; the
Streamlit UI shell, session host and app-specific loaders live here.

CLI entrypoint (configured in pyproject.toml):
    sankeysync-app = app.main:main
"""

from __future__ import annotations
