"""Runs a RuleSet against one request for one phase."""

from __future__ import annotations

import logging

from uaheaders.constants.actions import USER_AGENT_HEADER
from uaheaders.engine.actions import dispatch
from uaheaders.engine.conditions import applies
from uaheaders.http import HeaderTable, Request
from uaheaders.model import Classification, RuleSet
from uaheaders.types.common import Phase
from uaheaders.types.protocols import Classifier

logger = logging.getLogger(__name__)


class _ItemResolver:
    """Classifies the User-Agent at most once, on first use."""

    def __init__(self, raw_user_agent: str | None, classifier: Classifier) -> None:
        self._raw = raw_user_agent
        self._classifier = classifier
        self._resolved = False
        self._classification: Classification | None = None

    def resolve(self, selector: str) -> str:
        if not self._resolved:
            self._resolved = True
            if self._raw is not None:
                self._classification = self._classifier.classify(self._raw)
                if self._classification is None:
                    logger.debug("User-Agent could not be classified: %r", self._raw)
        if self._classification is None:
            return ""
        return self._classification.item(selector)


def run_phase(
    ruleset: RuleSet,
    phase: Phase,
    request: Request,
    classifier: Classifier,
    headers: HeaderTable | None = None,
) -> bool:
    """Apply every rule of *ruleset* that is active in *phase*, in order.

    *headers* defaults to the request headers. The User-Agent is read once
    before any rule runs. Returns False only if an action reports failure,
    which the current action set never does.
    """
    if not ruleset:
        return True

    target = request.headers if headers is None else headers
    resolver = _ItemResolver(target.get(USER_AGENT_HEADER), classifier)

    for rule in ruleset:
        if not applies(rule.condition, phase, request):
            logger.debug("Skipping %s %s in the %s phase", rule.action.value, rule.header_name, phase.value)
            continue
        value = resolver.resolve(rule.item)
        if not dispatch(rule, request, target, value):
            return False
    return True


class PhaseRunner:
    """Binds a classifier so callers only supply ruleset, phase, and request."""

    def __init__(self, classifier: Classifier) -> None:
        self._classifier = classifier

    def run(self, ruleset: RuleSet, phase: Phase, request: Request) -> bool:
        return run_phase(ruleset, phase, request, self._classifier)
