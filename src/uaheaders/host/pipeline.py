"""Ordered request hooks for the two header phases."""

from __future__ import annotations

from collections.abc import Callable

from uaheaders.constants.host import HOOK_MIDDLE, HOOK_POINTS
from uaheaders.http import Request
from uaheaders.types.common import HookResult

type Hook = Callable[[Request], HookResult]


class HookPipeline:
    """Runs registered hooks per extension point in (order, registration) order.

    A hook returns None to let processing continue, or an HTTP status to
    stop it.
    """

    def __init__(self) -> None:
        self._hooks: dict[str, list[tuple[int, int, Hook]]] = {point: [] for point in HOOK_POINTS}
        self._sequence = 0

    def register(self, point: str, hook: Hook, order: int = HOOK_MIDDLE) -> None:
        if point not in self._hooks:
            raise ValueError(f"Unknown hook point {point!r}; expected one of {list(HOOK_POINTS)}")
        self._hooks[point].append((order, self._sequence, hook))
        self._hooks[point].sort(key=lambda entry: (entry[0], entry[1]))
        self._sequence += 1

    def run(self, point: str, request: Request) -> HookResult:
        for _, _, hook in self._hooks[point]:
            result = hook(request)
            if result is not None:
                return result
        return None

    def process(self, request: Request) -> HookResult:
        """Run every extension point in request-lifecycle order."""
        for point in HOOK_POINTS:
            result = self.run(point, request)
            if result is not None:
                return result
        return None
