"""Header mutation actions keyed by ActionKind."""

from __future__ import annotations

from collections.abc import Callable

from uaheaders.engine.tokens import token_present
from uaheaders.http import HeaderTable, Request
from uaheaders.model import Rule
from uaheaders.types.common import ActionKind

type ActionHandler = Callable[[Rule, Request, HeaderTable, str], bool]


def _add(rule: Rule, request: Request, headers: HeaderTable, value: str) -> bool:
    headers.add(rule.header_name, value)
    return True


def _set(rule: Rule, request: Request, headers: HeaderTable, value: str) -> bool:
    headers.set(rule.header_name, value)
    return True


def _set_if_empty(rule: Rule, request: Request, headers: HeaderTable, value: str) -> bool:
    if rule.header_name not in headers:
        headers.set(rule.header_name, value)
    return True


def _append(rule: Rule, request: Request, headers: HeaderTable, value: str) -> bool:
    headers.merge(rule.header_name, value)
    return True


def _merge(rule: Rule, request: Request, headers: HeaderTable, value: str) -> bool:
    existing = headers.get(rule.header_name)
    if existing is None:
        headers.add(rule.header_name, value)
    elif not token_present(existing, value):
        headers.merge(rule.header_name, value)
    return True


def _note(rule: Rule, request: Request, headers: HeaderTable, value: str) -> bool:
    # Keyed by the resolved item, valued by the header.
    request.notes[value] = headers.get(rule.header_name)
    return True


ACTION_HANDLERS: dict[ActionKind, ActionHandler] = {
    ActionKind.ADD: _add,
    ActionKind.SET: _set,
    ActionKind.SETIFEMPTY: _set_if_empty,
    ActionKind.APPEND: _append,
    ActionKind.MERGE: _merge,
    ActionKind.NOTE: _note,
}


def dispatch(rule: Rule, request: Request, headers: HeaderTable, value: str) -> bool:
    """Apply *rule*'s action with the resolved item *value*.

    Returns False when the mutation failed. None of the current actions
    can fail, so this is always True today.
    """
    return ACTION_HANDLERS[rule.action](rule, request, headers, value)
