"""
Core exception types raised by graph construction and the selection engine.

The degenerate cases of the diagram (empty input, zero-count columns,
non-finite geometry, stale selections) are handled locally and never raise.
These exceptions cover programming errors at the core boundary:

- InvalidAttributesError for attribute lists that are not sequences of names.
- UnknownNodeError for lookups of a node key absent from the current graph.

Examples:
    >>> from sankeysync.core.errors import InvalidAttributesError
    >>> try:
    ...     raise InvalidAttributesError("attribute names must be str")
    ... except ValueError as e:
    ...     msg = str(e)
    >>> "str" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "SankeyError",
    "InvalidAttributesError",
    "UnknownNodeError",
]


class SankeyError(Exception):
    """Base class for core failures."""


class InvalidAttributesError(SankeyError, ValueError):
    """Attribute list contains non-string or duplicate names."""


class UnknownNodeError(SankeyError, KeyError):
    """Node key is not part of the current graph."""
