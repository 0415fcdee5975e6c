"""
Custom exceptions for the sankeysync.io module.

Purpose
- Provide IO-layer error types, distinct from the core exceptions in
  sankeysync.core.errors.
  - IoConfigError: invalid configuration values.
  - IoSchemaError: a loaded table lacks required columns.
  - IoReadError: the data file is missing or cannot be parsed.

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in sankeysync.io.
    """


class IoConfigError(IoError):
    """
    Raised when settings are invalid.

    Examples:
        - Non-positive canvas width or height
        - Negative node padding
    """


class IoSchemaError(IoError):
    """
    Raised when a loaded table is missing columns the caller requires.
    """


class IoReadError(IoError):
    """
    Raised when the data file does not exist or cannot be parsed as CSV.
    """
