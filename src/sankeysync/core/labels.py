"""
Display formatting for attribute names and node values.

Examples:
    >>> from sankeysync.core.labels import format_attribute, format_value
    >>> format_attribute("hotwaterheating")
    'Hot Water'
    >>> format_value(3, "bedrooms")
    '3 bed'
    >>> format_value("yes", "mainroad")
    'yes'
"""

from __future__ import annotations

from .constants import ATTRIBUTE_LABELS, VALUE_SUFFIXES
from .typing import Scalar

__all__ = [
    "format_attribute",
    "format_value",
]


def format_attribute(attribute: str) -> str:
    """Human label for a column; unknown names pass through unchanged."""
    return ATTRIBUTE_LABELS.get(attribute, attribute)


def format_value(value: Scalar, attribute: str) -> str:
    """Human label for a node value, with a unit suffix for count-like attributes."""
    if value is None:
        return "n/a"
    suffix = VALUE_SUFFIXES.get(attribute)
    if suffix is not None:
        return f"{value} {suffix}"
    return str(value)
