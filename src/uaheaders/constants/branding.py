"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "UAHEADERS"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ UAHEADERS",
    "     // user-agent driven request headers",
)
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} header rule engine"))
