"""Registers the early and fixup header phases with a hook pipeline."""

from __future__ import annotations

import logging

from uaheaders.classifier import default_classifier
from uaheaders.config import HeaderConfig
from uaheaders.constants.host import FIXUPS, HOOK_FIRST, HOOK_LAST, HTTP_INTERNAL_SERVER_ERROR, POST_READ_REQUEST
from uaheaders.engine import PhaseRunner
from uaheaders.host.pipeline import HookPipeline
from uaheaders.http import Request
from uaheaders.types.common import HookResult, Phase
from uaheaders.types.protocols import Classifier

logger = logging.getLogger(__name__)


class HeaderModule:
    """Applies configured header rules to incoming request headers.

    Rules tagged ``early`` run first thing after the request is read; all
    others run last among the fixups, right before content handling.
    """

    def __init__(self, config: HeaderConfig, classifier: Classifier | None = None) -> None:
        self._config = config
        self._runner = PhaseRunner(classifier if classifier is not None else default_classifier())

    def register_hooks(self, pipeline: HookPipeline) -> None:
        pipeline.register(POST_READ_REQUEST, self.early, HOOK_FIRST)
        pipeline.register(FIXUPS, self.fixup, HOOK_LAST)

    def early(self, request: Request) -> HookResult:
        ruleset = self._config.ruleset_for_phase(Phase.EARLY, request.path)
        if not self._runner.run(ruleset, Phase.EARLY, request):
            logger.critical("Header rule processing failed in the early phase for %s", request.path)
            return HTTP_INTERNAL_SERVER_ERROR
        return None

    def fixup(self, request: Request) -> HookResult:
        self._runner.run(self._config.ruleset_for_phase(Phase.LATE, request.path), Phase.LATE, request)
        return None
