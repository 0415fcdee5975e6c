"""
sankeysync: Sankey flow diagrams over categorical records, kept in sync with
an external selection.

## Packages
- core: graph construction, layout, cascading selection, highlight and sync.
- io: settings (env/TOML) and CSV loading into Records.
- viz: Altair renderers for the Sankey layout and the companion scatterplot.

## Import DAG discipline
- core depends on stdlib and pydantic only; no file IO, no rendering.
- io depends on core and polars.
- viz depends on core and altair; it never mutates core state.
- The Streamlit host lives in the separate ``app`` package.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
