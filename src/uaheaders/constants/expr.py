"""Token patterns and operator tables for the condition expression language."""

from __future__ import annotations

import re

TOKEN_PATTERN: re.Pattern[str] = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<var>%\{(?P<varname>[A-Za-z_][A-Za-z0-9_:]*)\})
    |(?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
    |(?P<regex>/(?P<pattern>(?:[^/\\]|\\.)*)/(?P<flags>i?))
    |(?P<op>&&|\|\||==|!=|=~|!~|<=|>=|[()!{},<>])
    |(?P<dashop>-(?:eq|ne|lt|le|gt|ge|in|n|z)\b)
    |(?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    """,
    re.VERBOSE,
)

STRING_OPS: frozenset[str] = frozenset({"==", "!=", "<", "<=", ">", ">="})
REGEX_OPS: frozenset[str] = frozenset({"=~", "!~"})
INT_OPS: frozenset[str] = frozenset({"-eq", "-ne", "-lt", "-le", "-gt", "-ge"})
UNARY_OPS: frozenset[str] = frozenset({"-n", "-z"})
LIST_OP: str = "-in"

FUNCTIONS: frozenset[str] = frozenset({"req", "http", "env", "note", "tolower", "toupper"})

HEADER_VARIABLE_PREFIX: str = "HTTP_"

MAX_NESTING_DEPTH: int = 64
