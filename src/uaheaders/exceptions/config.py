"""Configuration-related exceptions."""

from __future__ import annotations

from uaheaders.exceptions.base import UaHeadersError


class ConfigError(UaHeadersError, ValueError):
    """Raised when header rule configuration is invalid."""


class DirectiveError(ConfigError):
    """Raised when a single rule directive cannot be parsed."""
