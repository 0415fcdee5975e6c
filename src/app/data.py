from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import polars as pl
import streamlit as st

from sankeysync.core.records import Record
from sankeysync.io.read import categorical_columns, read_frame, records_from_frame

__all__ = [
    "CacheConfig",
    "HOUSING_COLUMNS",
    "load_records",
    "demo_housing_frame",
    "ensure_demo_data",
]

logger = logging.getLogger(__name__)

HOUSING_COLUMNS = (
    "price",
    "area",
    "bedrooms",
    "bathrooms",
    "stories",
    "mainroad",
    "guestroom",
    "basement",
    "hotwaterheating",
    "airconditioning",
    "parking",
    "prefarea",
    "furnishingstatus",
)

# ---------- Cache configuration (factory of cached callables) ----------


@dataclass(frozen=True)
class CacheConfig:
    """Hashable cache configuration for Streamlit @st.cache_data.

    Note: Streamlit's decorator parameters (ttl, persist) are fixed at decoration
    time, so decorated callables are memoized per (name, ttl, persist).
    """

    ttl: int | None = None
    persist: bool = False


_CACHE_REGISTRY: dict[tuple[str, CacheConfig], Callable[..., Any]] = {}


def _get_cached(loader_name: str, cfg: CacheConfig, fn: Callable[..., Any]) -> Callable[..., Any]:
    key = (loader_name, cfg)
    if key in _CACHE_REGISTRY:
        return _CACHE_REGISTRY[key]
    if cfg.persist:
        wrapped = st.cache_data(persist="disk", ttl=cfg.ttl)(fn)
    else:
        wrapped = st.cache_data(ttl=cfg.ttl)(fn)
    _CACHE_REGISTRY[key] = wrapped
    return wrapped


# ---------- Loaders ----------


def _load_records_impl(path: str) -> tuple[list[Record], list[str]]:
    df = read_frame(path)
    return records_from_frame(df), categorical_columns(df)


def load_records(
    path: str, *, cfg: CacheConfig = CacheConfig()
) -> tuple[list[Record], list[str]]:
    """Records and categorical column names of the CSV at ``path`` (cached per config)."""
    fn = _get_cached("load_records", cfg, _load_records_impl)
    return fn(path)  # type: ignore[no-any-return]


# ---------- Demo data ----------


def demo_housing_frame(n: int = 120, seed: int = 7) -> pl.DataFrame:
    """Synthetic housing table with the column layout of the Housing dataset.

    Deterministic for a fixed (n, seed).
    """
    rng = random.Random(seed)
    yes_no = ("yes", "no")
    rows: list[dict[str, Any]] = []
    for _ in range(n):
        bedrooms = rng.choice((1, 2, 2, 3, 3, 3, 4, 4, 5))
        bathrooms = rng.choice((1, 1, 1, 2, 2, 3)) if bedrooms > 1 else 1
        stories = rng.choice((1, 1, 2, 2, 3, 4))
        area = int(rng.gauss(3000 + 700 * bedrooms, 900))
        area = max(area, 1650)
        parking = rng.choice((0, 0, 1, 1, 2, 3))
        price = int(area * rng.uniform(900, 1400) + 250_000 * bathrooms + 90_000 * parking)
        rows.append(
            {
                "price": price,
                "area": area,
                "bedrooms": bedrooms,
                "bathrooms": bathrooms,
                "stories": stories,
                "mainroad": rng.choice(("yes", "yes", "yes", "no")),
                "guestroom": rng.choice(yes_no),
                "basement": rng.choice(yes_no),
                "hotwaterheating": rng.choice(("no", "no", "no", "yes")),
                "airconditioning": rng.choice(yes_no),
                "parking": parking,
                "prefarea": rng.choice(("no", "no", "yes")),
                "furnishingstatus": rng.choice(("furnished", "semi-furnished", "unfurnished")),
            }
        )
    return pl.DataFrame(rows).select(HOUSING_COLUMNS)


def ensure_demo_data(path: Path) -> bool:
    """Write a synthetic housing CSV to ``path`` unless a file already exists.

    Returns:
        bool: True if a file was created.
    """
    if path.exists():
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    demo_housing_frame().write_csv(path)
    logger.info("wrote demo housing data to %s", path)
    return True
