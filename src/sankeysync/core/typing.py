"""
Lightweight typing aliases used across the core.

Notes:
    - Scalar covers the cell types produced by CSV loading (Polars row dicts).
    - Kept small; no runtime logic.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .keys import NodeKey
    from .records import Record

__all__ = [
    "Scalar",
    "FilterCallback",
    "NodeClickCallback",
]

Scalar = int | float | str | bool | None

# Callback contracts towards the host.
FilterCallback = Callable[[Sequence["Record"]], Any]
NodeClickCallback = Callable[["NodeKey"], Any]
