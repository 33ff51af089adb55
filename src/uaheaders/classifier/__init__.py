"""User-Agent classification providers."""

from .provider import WootheeClassifier, default_classifier

__all__ = ["WootheeClassifier", "default_classifier"]
