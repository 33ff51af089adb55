"""Condition expression exceptions."""

from __future__ import annotations

from uaheaders.exceptions.base import UaHeadersError


class ExprError(UaHeadersError):
    """Base class for expression errors."""


class ExprCompileError(ExprError, ValueError):
    """Raised when expression text cannot be compiled."""


class ExprEvalError(ExprError):
    """Raised when a compiled expression cannot be evaluated for a request."""
