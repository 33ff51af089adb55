"""Root exception type."""

from __future__ import annotations


class UaHeadersError(Exception):
    """Base class for all uaheaders errors."""
