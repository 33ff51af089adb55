"""Shared pytest fixtures for the header rule engine tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from uaheaders.http import HeaderTable, Request
from uaheaders.model import Classification


class StubClassifier:
    """Deterministic classifier that records every string it is asked about."""

    def __init__(self, result: Classification | None) -> None:
        self.result = result
        self.calls: list[str] = []

    def classify(self, raw: str) -> Classification | None:
        self.calls.append(raw)
        return self.result


@pytest.fixture
def firefox() -> Classification:
    return Classification(
        name="Firefox",
        os="Windows 10",
        category="pc",
        os_version="NT 10.0",
        version="118.0",
        vendor="Mozilla",
    )


@pytest.fixture
def stub_classifier_factory() -> Callable[[Classification | None], StubClassifier]:
    """Return a constructor for classifiers answering with a fixed result."""
    return StubClassifier


@pytest.fixture
def stub_classifier(
    firefox: Classification, stub_classifier_factory: Callable[[Classification | None], StubClassifier]
) -> StubClassifier:
    return stub_classifier_factory(firefox)


@pytest.fixture
def make_request() -> Callable[..., Request]:
    """Return a factory building a Request from header pairs and env values."""

    def _make(
        headers: list[tuple[str, str]] | None = None,
        env: dict[str, str] | None = None,
        **kwargs: str,
    ) -> Request:
        return Request(headers=HeaderTable(headers or []), env=dict(env or {}), **kwargs)

    return _make
