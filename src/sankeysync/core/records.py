"""
Record model: one row of the record store (a house).

A Record carries a stable integer ``index`` (its identity) and a mapping from
attribute name to scalar value. Records are frozen by contract; graph nodes,
links and selections hold references to the same Record objects and compare
them by ``index``.

Examples:
    >>> from sankeysync.core.records import Record
    >>> r = Record(index=0, values={"bedrooms": 2, "parking": 1})
    >>> r.get("bedrooms"), r.get("area")
    (2, None)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .keys import is_missing
from .typing import Scalar

__all__ = [
    "Record",
    "make_records",
    "index_set",
]


class Record(BaseModel):
    """
    Immutable row with a stable identity.

    Attributes:
        index (int): Stable row identity (>= 0).
        values (dict[str, Scalar]): Attribute name to cell value.

    Raises:
        pydantic.ValidationError: If index is negative or a field name is not a str.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    index: int = Field(..., ge=0)
    values: dict[str, Any] = Field(default_factory=dict)

    @field_validator("values")
    @classmethod
    def _names_are_str(cls, v: dict[str, Any]) -> dict[str, Any]:
        for name in v:
            if not isinstance(name, str):
                raise ValueError(f"field names must be str, got {name!r}")
        return v

    def get(self, attribute: str) -> Scalar:
        """Return the value at ``attribute`` or None when the field is absent."""
        return self.values.get(attribute)

    def has(self, attribute: str) -> bool:
        """True when the field exists and is neither None nor NaN."""
        return not is_missing(self.values.get(attribute))

    def __hash__(self) -> int:
        return hash(self.index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.index == other.index


def make_records(rows: Iterable[Mapping[str, Any]], *, start: int = 0) -> list[Record]:
    """Build Records from plain mappings, numbering them from ``start``.

    A mapping that already holds an ``index`` key keeps it as identity.
    """
    out: list[Record] = []
    for i, row in enumerate(rows, start=start):
        data = dict(row)
        idx = data.pop("index", i)
        out.append(Record(index=int(idx), values=data))
    return out


def index_set(records: Sequence[Record] | Iterable[Record]) -> set[int]:
    """Identity set of a record sequence."""
    return {r.index for r in records}
