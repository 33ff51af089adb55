"""Directive keywords: actions, item selectors, and condition clauses."""

from __future__ import annotations

from uaheaders.types.common import ActionKind, ItemSelector

DIRECTIVE_NAME: str = "RequestHeaderForWoothee"

ACTION_KEYWORDS: dict[str, ActionKind] = {
    "set": ActionKind.SET,
    "setifempty": ActionKind.SETIFEMPTY,
    "add": ActionKind.ADD,
    "append": ActionKind.APPEND,
    "merge": ActionKind.MERGE,
    "note": ActionKind.NOTE,
}

ITEM_SELECTORS: tuple[ItemSelector, ...] = ("name", "os", "category", "os_version", "version", "vendor")

EARLY_CLAUSE: str = "early"
ENV_CLAUSE_PREFIX: str = "env="
EXPR_CLAUSE_PREFIX: str = "expr="
ENV_NEGATION: str = "!"

USER_AGENT_HEADER: str = "User-Agent"

MSG_BAD_ACTION: str = "first argument must be 'add', 'set', 'setifempty', 'append', 'merge', 'note'."
MSG_TOO_FEW_ARGS: str = "Header requires three arguments"
MSG_TOO_MANY_ARGS: str = "Too many arguments to directive"
MSG_MISSING_ENV_NAME: str = (
    "error: missing environment variable name. envclause should be in the form env=envar "
)
MSG_BAD_EXPR: str = "Can't parse envclause/expression: "
MSG_UNKNOWN_PARAM: str = "Unknown parameter: "
