"""Mutable per-request state handed to the phase hooks."""

from __future__ import annotations

from dataclasses import dataclass, field

from uaheaders.http.headers import HeaderTable


@dataclass
class Request:
    """One in-flight request.

    ``env`` is the request-scoped environment table consulted by ``env=``
    clauses. ``notes`` is the side store written by the ``note`` action; a
    note records ``None`` when the source header was absent.
    """

    headers: HeaderTable = field(default_factory=HeaderTable)
    env: dict[str, str] = field(default_factory=dict)
    notes: dict[str, str | None] = field(default_factory=dict)
    method: str = "GET"
    path: str = "/"
    query_string: str = ""
