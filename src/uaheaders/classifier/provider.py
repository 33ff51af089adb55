"""Classification provider backed by the ``woothee`` project."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import woothee

from uaheaders.model import Classification
from uaheaders.types.protocols import Classifier

logger = logging.getLogger(__name__)


class WootheeClassifier:
    """Classify User-Agent strings with ``woothee.parse``."""

    def classify(self, raw: str) -> Classification | None:
        try:
            result = woothee.parse(raw)
        except Exception as exc:  # noqa: BLE001
            logger.debug("woothee could not parse %r: %s", raw, exc)
            return None
        if not isinstance(result, Mapping):
            return None
        return Classification.from_mapping(result)


def default_classifier() -> Classifier:
    """Return the classifier used when none is injected."""
    return WootheeClassifier()
