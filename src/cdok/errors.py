"""Exceptions raised at the cdok user-facing boundary.

The parsing core never raises for malformed C: it returns None or an empty
list. These exceptions cover user input and persistence failures only.
"""

from __future__ import annotations


class CdokError(Exception):
    """Base exception for cdok operations."""


class DocumentationFormatError(CdokError, ValueError):
    """Raised when edited documentation cannot be stored (e.g., embedded newlines)."""


class ExportFormatError(CdokError, ValueError):
    """Raised when an unknown export format is requested."""


class StoreError(CdokError):
    """Raised when the documentation file cannot be written."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
