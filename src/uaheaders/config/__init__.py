"""Configuration loading, directive parsing, and validation.

This package facade re-exports all public names so callers can use
``from uaheaders.config import ...``.
"""

from __future__ import annotations

from uaheaders.config.directives import build_ruleset, parse_directive
from uaheaders.config.loader import build_config, load_config
from uaheaders.config.model import HeaderConfig
from uaheaders.config.validator import validate_config_file

__all__ = [
    "HeaderConfig",
    "build_config",
    "build_ruleset",
    "load_config",
    "parse_directive",
    "validate_config_file",
]
