"""Stable validation error codes for config validation."""

from __future__ import annotations

CFG001: str = "CFG001"  # config file not found (explicit --config)
CFG002: str = "CFG002"  # invalid YAML parse
CFG003: str = "CFG003"  # top-level value is not a mapping
CFG004: str = "CFG004"  # unknown top-level key
CFG005: str = "CFG005"  # invalid value type
CFG006: str = "CFG006"  # invalid directive
CFG007: str = "CFG007"  # invalid location prefix
CFG008: str = "CFG008"  # duplicate location prefix
CFG010: str = "CFG010"  # root directory not found
