"""Config data model: server rules plus path-prefix scoped rules."""

from __future__ import annotations

from dataclasses import dataclass, field

from uaheaders.model import RuleSet
from uaheaders.types.common import Phase


def normalize_prefix(prefix: str) -> str:
    """Strip trailing slashes; the root prefix stays ``/``."""
    stripped = prefix.rstrip("/")
    return stripped or "/"


def prefix_matches(prefix: str, path: str) -> bool:
    """Whether a location *prefix* covers *path* on a segment boundary."""
    if prefix == "/":
        return True
    return path == prefix or path.startswith(prefix + "/")


@dataclass(frozen=True)
class HeaderConfig:
    """Resolved header rule config.

    ``locations`` maps each normalized prefix to its own rules;
    ``ruleset_for`` returns the merged set for a request path and
    ``ruleset_for_phase`` narrows the early phase to server rules.
    """

    server: RuleSet = RuleSet()
    locations: tuple[tuple[str, RuleSet], ...] = ()
    _effective: dict[str, RuleSet] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.locations, key=lambda entry: (len(entry[0]), entry[0])))
        object.__setattr__(self, "locations", ordered)
        effective: dict[str, RuleSet] = {}
        for prefix, _ in ordered:
            merged = self.server
            for outer_prefix, rules in ordered:
                if prefix_matches(outer_prefix, prefix):
                    merged = merged.merge(rules)
            effective[prefix] = merged
        object.__setattr__(self, "_effective", effective)

    def ruleset_for(self, path: str) -> RuleSet:
        """Return server rules followed by every matching location, broadest first."""
        best: str | None = None
        for prefix, _ in self.locations:
            if prefix_matches(prefix, path):
                best = prefix
        if best is None:
            return self.server
        return self._effective[best]

    def ruleset_for_phase(self, phase: Phase, path: str) -> RuleSet:
        """Early rules come from the server scope only; locations are not resolved yet."""
        if phase is Phase.EARLY:
            return self.server
        return self.ruleset_for(path)

    @property
    def rule_count(self) -> int:
        return len(self.server) + sum(len(rules) for _, rules in self.locations)
