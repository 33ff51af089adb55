"""Frozen entities shared by the config loader and the rule engine."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from uaheaders.constants.actions import ITEM_SELECTORS
from uaheaders.types.common import ActionKind, ItemSelector
from uaheaders.types.protocols import Predicate


@dataclass(frozen=True)
class Classification:
    """Parsed view of a User-Agent string."""

    name: str | None = None
    os: str | None = None
    category: str | None = None
    os_version: str | None = None
    version: str | None = None
    vendor: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Classification:
        """Build from a classifier result, ignoring unknown keys and non-string values."""
        values = {key: data.get(key) for key in ITEM_SELECTORS}
        return cls(**{key: value if isinstance(value, str) else None for key, value in values.items()})

    def item(self, selector: ItemSelector | str) -> str:
        """Resolve an item selector, yielding "" for unknown selectors or missing fields."""
        if selector not in ITEM_SELECTORS:
            return ""
        return getattr(self, selector) or ""


@dataclass(frozen=True)
class Always:
    """No condition: the rule runs in every phase."""


@dataclass(frozen=True)
class EarlyPhase:
    """The rule runs only right after the request headers are read."""


@dataclass(frozen=True)
class EnvCondition:
    """The rule runs when an environment variable is set (or unset when negated)."""

    name: str
    negated: bool = False


@dataclass(frozen=True)
class ExprCondition:
    """The rule runs when a compiled expression holds for the request."""

    predicate: Predicate = field(compare=False)
    source: str = ""


type Condition = Always | EarlyPhase | EnvCondition | ExprCondition


@dataclass(frozen=True)
class Rule:
    """One configured header mutation."""

    action: ActionKind
    header_name: str
    item: str
    condition: Condition = Always()

    def __post_init__(self) -> None:
        header_name = self.header_name.split(":", 1)[0]
        if not header_name:
            raise ValueError("header_name must be non-empty")
        object.__setattr__(self, "header_name", header_name)


@dataclass(frozen=True)
class RuleSet:
    """Ordered, immutable rules for one configuration scope."""

    rules: tuple[Rule, ...] = ()

    def merge(self, inner: RuleSet) -> RuleSet:
        """Return the effective set for a nested scope: this scope's rules first."""
        return RuleSet(self.rules + inner.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __bool__(self) -> bool:
        return bool(self.rules)
