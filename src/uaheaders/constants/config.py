"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "uaheaders.yaml"

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset({"rules", "locations"})

NOTES_ENVIRON_KEY: str = "uaheaders.notes"
