"""
sankeysync.io: settings and record loading.

## Public API
- SankeySettings: canvas, layout and data-source configuration (env > TOML > defaults).
- read_records_csv / records_from_frame / records_to_frame: Polars-based record IO.

## Import DAG discipline
- Depends on stdlib, polars and sankeysync.core.
- MUST NOT import sankeysync.viz or the app package.
"""

from __future__ import annotations

from .config import SankeySettings
from .read import (
    categorical_columns,
    read_frame,
    read_records_csv,
    records_from_frame,
    records_to_frame,
)

__all__ = [
    "SankeySettings",
    "read_frame",
    "read_records_csv",
    "records_from_frame",
    "records_to_frame",
    "categorical_columns",
]
