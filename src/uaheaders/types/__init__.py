"""Shared type aliases for uaheaders."""

from .common import ActionKind, HookResult, ItemSelector, Phase
from .protocols import Classifier, Predicate

__all__ = [
    "ActionKind",
    "Classifier",
    "HookResult",
    "ItemSelector",
    "Phase",
    "Predicate",
]
