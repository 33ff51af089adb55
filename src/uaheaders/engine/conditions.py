"""Phase and condition gating for individual rules."""

from __future__ import annotations

import logging

from uaheaders.exceptions import ExprEvalError
from uaheaders.http import Request
from uaheaders.model import Always, Condition, EarlyPhase, EnvCondition, ExprCondition
from uaheaders.types.common import Phase

logger = logging.getLogger(__name__)


def applies(condition: Condition, phase: Phase, request: Request) -> bool:
    """Decide whether a rule with *condition* runs in *phase* for *request*.

    Phase gating is resolved first: environment and expression conditions
    only exist in the late phase, and early rules only in the early one.
    Expression failures are logged and the rule still applies.
    """
    if isinstance(condition, Always):
        return True
    if isinstance(condition, EarlyPhase):
        return phase is Phase.EARLY
    if phase is Phase.EARLY:
        return False

    if isinstance(condition, EnvCondition):
        present = condition.name in request.env
        return present != condition.negated

    if isinstance(condition, ExprCondition):
        try:
            return bool(condition.predicate.evaluate(request))
        except ExprEvalError as exc:
            logger.error("Failed to evaluate expression (%s) - ignoring", exc)
            return True

    raise TypeError(f"Unsupported rule condition: {condition!r}")
