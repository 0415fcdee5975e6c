"""
Active/available attribute lists behind the dimension controls.

``DimensionSet`` is immutable; every operation returns a new set. At least
``MIN_ACTIVE_ATTRIBUTES`` attributes stay active: a removal that would go
below the minimum is refused and the set is returned unchanged.

Examples:
    >>> from sankeysync.core.dimensions import DimensionSet
    >>> d = DimensionSet(active=("bedrooms", "bathrooms"), available=("parking",))
    >>> d.add("parking").active
    ('bedrooms', 'bathrooms', 'parking')
    >>> d.remove("bedrooms") is d
    True
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import (
    DEFAULT_ACTIVE_ATTRIBUTES,
    DEFAULT_AVAILABLE_ATTRIBUTES,
    MIN_ACTIVE_ATTRIBUTES,
)
from .errors import InvalidAttributesError

__all__ = ["DimensionSet"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DimensionSet:
    """
    Ordered active attributes (diagram columns) and the remaining available ones.

    Raises:
        InvalidAttributesError: If an attribute is both active and available.
    """

    active: tuple[str, ...] = DEFAULT_ACTIVE_ATTRIBUTES
    available: tuple[str, ...] = DEFAULT_AVAILABLE_ATTRIBUTES
    min_active: int = MIN_ACTIVE_ATTRIBUTES

    def __post_init__(self) -> None:
        both = set(self.active) & set(self.available)
        if both:
            raise InvalidAttributesError(f"attributes both active and available: {sorted(both)!r}")

    @classmethod
    def from_columns(
        cls, columns: list[str], active: tuple[str, ...] = DEFAULT_ACTIVE_ATTRIBUTES
    ) -> DimensionSet:
        """Restrict the defaults to the columns present in the data.

        Known attributes come first in their default order; any other column
        follows in data order.
        """
        act = tuple(a for a in active if a in columns)
        avail = tuple(
            c for c in (*DEFAULT_ACTIVE_ATTRIBUTES, *DEFAULT_AVAILABLE_ATTRIBUTES)
            if c in columns and c not in act
        )
        avail += tuple(c for c in columns if c not in act and c not in avail)
        return cls(active=act, available=avail)

    def can_remove(self) -> bool:
        return len(self.active) > self.min_active

    def add(self, attribute: str, position: int | None = None) -> DimensionSet:
        """Move ``attribute`` from available to active at ``position`` (default: end)."""
        if attribute not in self.available:
            return self
        active = list(self.active)
        active.insert(len(active) if position is None else position, attribute)
        available = tuple(a for a in self.available if a != attribute)
        return DimensionSet(active=tuple(active), available=available, min_active=self.min_active)

    def remove(self, attribute: str) -> DimensionSet:
        """Move ``attribute`` back to available; refused below the active minimum."""
        if attribute not in self.active:
            return self
        if not self.can_remove():
            logger.info(
                "refusing to remove %r: at least %d attributes must stay active",
                attribute,
                self.min_active,
            )
            return self
        active = tuple(a for a in self.active if a != attribute)
        return DimensionSet(
            active=active, available=(*self.available, attribute), min_active=self.min_active
        )

    def move(self, attribute: str, position: int) -> DimensionSet:
        """Reorder an active attribute to ``position``."""
        if attribute not in self.active:
            return self
        active = [a for a in self.active if a != attribute]
        position = max(0, min(position, len(active)))
        active.insert(position, attribute)
        if tuple(active) == self.active:
            return self
        return DimensionSet(
            active=tuple(active), available=self.available, min_active=self.min_active
        )

    def with_active(self, attributes: list[str] | tuple[str, ...]) -> DimensionSet:
        """Replace the active list wholesale (e.g. from a multiselect widget).

        Unknown names are ignored; a list shorter than the minimum is refused.
        """
        pool = set(self.active) | set(self.available)
        wanted = tuple(dict.fromkeys(a for a in attributes if a in pool))
        if len(wanted) < self.min_active:
            return self
        rest = tuple(a for a in (*self.active, *self.available) if a not in wanted)
        return DimensionSet(active=wanted, available=rest, min_active=self.min_active)
