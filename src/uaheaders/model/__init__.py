"""Core data models for uaheaders."""

from .entities import (
    Always,
    Classification,
    Condition,
    EarlyPhase,
    EnvCondition,
    ExprCondition,
    Rule,
    RuleSet,
)

__all__ = [
    "Always",
    "Classification",
    "Condition",
    "EarlyPhase",
    "EnvCondition",
    "ExprCondition",
    "Rule",
    "RuleSet",
]
