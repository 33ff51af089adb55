"""Rule engine: condition gating, action dispatch, and phase execution."""

from .actions import ACTION_HANDLERS, dispatch
from .conditions import applies
from .runner import PhaseRunner, run_phase
from .tokens import token_present

__all__ = [
    "ACTION_HANDLERS",
    "PhaseRunner",
    "applies",
    "dispatch",
    "run_phase",
    "token_present",
]
