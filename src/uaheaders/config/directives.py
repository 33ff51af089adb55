"""Parsing of ``RequestHeaderForWoothee`` directive arguments into Rules."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable, Iterable

from uaheaders.constants.actions import (
    ACTION_KEYWORDS,
    DIRECTIVE_NAME,
    EARLY_CLAUSE,
    ENV_CLAUSE_PREFIX,
    ENV_NEGATION,
    EXPR_CLAUSE_PREFIX,
    MSG_BAD_ACTION,
    MSG_BAD_EXPR,
    MSG_MISSING_ENV_NAME,
    MSG_TOO_FEW_ARGS,
    MSG_TOO_MANY_ARGS,
    MSG_UNKNOWN_PARAM,
)
from uaheaders.exceptions import DirectiveError, ExprCompileError
from uaheaders.expr import compile_expression
from uaheaders.model import Always, Condition, EarlyPhase, EnvCondition, ExprCondition, Rule, RuleSet
from uaheaders.types.protocols import Predicate

logger = logging.getLogger(__name__)

type ExprCompiler = Callable[[str], Predicate]

_MAX_WORDS = 4


def parse_directive(args: str, compile_expr: ExprCompiler = compile_expression) -> Rule:
    """Parse ``<action> <header> <item> [clause]`` into a Rule.

    A leading directive name is tolerated so full config lines can be
    pasted. Raises DirectiveError with an operator-facing message.
    """
    try:
        words = shlex.split(args)
    except ValueError as exc:
        raise DirectiveError(f"{DIRECTIVE_NAME}: {exc}") from exc

    if words and words[0].lower() == DIRECTIVE_NAME.lower():
        words = words[1:]
    if len(words) > _MAX_WORDS + 1:
        raise DirectiveError(f"{DIRECTIVE_NAME} has too many arguments")

    action_word = words[0] if words else ""
    action = ACTION_KEYWORDS.get(action_word.lower())
    if action is None:
        raise DirectiveError(MSG_BAD_ACTION)
    if len(words) > _MAX_WORDS:
        raise DirectiveError(MSG_TOO_MANY_ARGS)
    if len(words) < 3:
        raise DirectiveError(MSG_TOO_FEW_ARGS)

    header, item = words[1], words[2]
    clause = words[3] if len(words) == _MAX_WORDS else None
    condition = _parse_clause(clause, compile_expr)

    header = header.split(":", 1)[0]
    if not header:
        raise DirectiveError("header name must not be empty")

    return Rule(action=action, header_name=header, item=item, condition=condition)


def _parse_clause(clause: str | None, compile_expr: ExprCompiler) -> Condition:
    if clause is None:
        return Always()

    lowered = clause.lower()
    if lowered == EARLY_CLAUSE:
        return EarlyPhase()

    if lowered.startswith(ENV_CLAUSE_PREFIX):
        name = clause[len(ENV_CLAUSE_PREFIX) :]
        negated = name.startswith(ENV_NEGATION)
        if negated:
            name = name[len(ENV_NEGATION) :]
        if not name:
            raise DirectiveError(MSG_MISSING_ENV_NAME)
        return EnvCondition(name=name, negated=negated)

    if lowered.startswith(EXPR_CLAUSE_PREFIX):
        source = clause[len(EXPR_CLAUSE_PREFIX) :]
        try:
            predicate = compile_expr(source)
        except ExprCompileError as exc:
            raise DirectiveError(f"{MSG_BAD_EXPR}{exc}") from exc
        return ExprCondition(predicate=predicate, source=source)

    raise DirectiveError(f"{MSG_UNKNOWN_PARAM}{clause}")


def build_ruleset(directives: Iterable[str], compile_expr: ExprCompiler = compile_expression) -> RuleSet:
    """Parse directives in order into a RuleSet. Fail-fast on any error."""
    rules: list[Rule] = []
    for directive in directives:
        rule = parse_directive(directive, compile_expr)
        logger.debug("Loaded rule: %s %s %s", rule.action.value, rule.header_name, rule.item)
        rules.append(rule)
    return RuleSet(tuple(rules))
