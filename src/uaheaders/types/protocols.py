"""Structural interfaces for the pluggable collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from uaheaders.http import Request
    from uaheaders.model import Classification


class Classifier(Protocol):
    """Turns a raw User-Agent string into a Classification."""

    def classify(self, raw: str) -> Classification | None: ...


class Predicate(Protocol):
    """A compiled boolean condition evaluated against one request.

    ``evaluate`` raises ``ExprEvalError`` when the expression cannot be
    computed for this request.
    """

    source: str

    def evaluate(self, request: Request) -> bool: ...
