"""Shared exception hierarchy for uaheaders."""

from __future__ import annotations

from .base import UaHeadersError
from .config import ConfigError, DirectiveError
from .expr import ExprCompileError, ExprError, ExprEvalError

__all__ = [
    "ConfigError",
    "DirectiveError",
    "ExprCompileError",
    "ExprError",
    "ExprEvalError",
    "UaHeadersError",
]
