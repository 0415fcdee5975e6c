"""
Read utilities: CSV and Polars frames to Records, and back.

Overview
- read_frame(): Load a CSV into a Polars DataFrame, optionally requiring columns.
- records_from_frame(): One Record per row; ``index`` is the row position.
- read_records_csv(): read_frame() followed by records_from_frame().
- records_to_frame(): Records back to a DataFrame (with an ``index`` column),
  used by charts and table previews.

Notes
- Nulls become None, so missing cells land in the None node of their column.
- Polars-first; no pandas.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence

import polars as pl

from sankeysync.core.records import Record

from .errors import IoReadError, IoSchemaError

__all__ = [
    "read_frame",
    "records_from_frame",
    "read_records_csv",
    "records_to_frame",
    "categorical_columns",
]

logger = logging.getLogger(__name__)

INDEX_COLUMN = "index"


def read_frame(path: str | os.PathLike[str], *, required: Iterable[str] = ()) -> pl.DataFrame:
    """Load ``path`` as CSV.

    Raises:
        IoReadError: If the file is missing or not parsable.
        IoSchemaError: If a required column is absent.
    """
    if not os.path.exists(path):
        raise IoReadError(f"data file not found: {path}")
    try:
        df = pl.read_csv(path)
    except (pl.exceptions.PolarsError, OSError) as exc:
        raise IoReadError(f"failed to parse {path}: {exc}") from exc
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise IoSchemaError(f"missing required columns: {missing!r}")
    logger.debug("read %s: %d rows x %d columns", path, df.height, df.width)
    return df


def records_from_frame(df: pl.DataFrame) -> list[Record]:
    """Convert each row to a Record.

    An existing ``index`` column is used as identity; otherwise the row position is.
    """
    has_index = INDEX_COLUMN in df.columns
    out: list[Record] = []
    for pos, row in enumerate(df.iter_rows(named=True)):
        idx = row.pop(INDEX_COLUMN) if has_index else pos
        out.append(Record(index=int(idx), values=row))
    return out


def read_records_csv(
    path: str | os.PathLike[str], *, required: Iterable[str] = ()
) -> list[Record]:
    return records_from_frame(read_frame(path, required=required))


def records_to_frame(
    records: Sequence[Record], columns: Sequence[str] | None = None
) -> pl.DataFrame:
    """Records to a DataFrame with an ``index`` column first.

    Args:
        records (Sequence[Record]): Records to convert.
        columns (Sequence[str] | None): Value columns to keep (all when None).
    """
    if not records:
        cols = [INDEX_COLUMN, *(columns or [])]
        return pl.DataFrame(
            {c: pl.Series([], dtype=pl.Int64 if c == INDEX_COLUMN else pl.Null) for c in cols}
        )
    names = list(columns) if columns is not None else list(records[0].values)
    rows = [{INDEX_COLUMN: r.index, **{c: r.get(c) for c in names}} for r in records]
    return pl.DataFrame(rows)


def categorical_columns(df: pl.DataFrame, *, max_distinct: int = 12) -> list[str]:
    """Columns suitable as diagram attributes: strings, bools, or low-cardinality integers."""
    out: list[str] = []
    for name, dtype in df.schema.items():
        if name == INDEX_COLUMN:
            continue
        if dtype in (pl.Utf8, pl.Boolean):
            out.append(name)
        elif dtype.is_integer() and df.get_column(name).n_unique() <= max_distinct:
            out.append(name)
    return out
