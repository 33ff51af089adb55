"""Tokenizer for condition expressions."""

from __future__ import annotations

from dataclasses import dataclass

from uaheaders.constants.expr import TOKEN_PATTERN
from uaheaders.exceptions import ExprCompileError


@dataclass(frozen=True)
class Token:
    """A lexical token; ``value`` holds the decoded payload."""

    kind: str
    value: str
    pos: int
    flags: str = ""


def _unquote(literal: str) -> str:
    body = literal[1:-1]
    out: list[str] = []
    escaped = False
    for char in body:
        if escaped:
            out.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        else:
            out.append(char)
    return "".join(out)


def tokenize(text: str) -> list[Token]:
    """Split *text* into tokens, ending with an ``end`` token."""
    tokens: list[Token] = []
    pos = 0
    while pos < len(text):
        match = TOKEN_PATTERN.match(text, pos)
        if match is None:
            raise ExprCompileError(f"unexpected character {text[pos]!r} at offset {pos}")
        kind = match.lastgroup
        if kind == "var":
            tokens.append(Token("var", match.group("varname"), pos))
        elif kind == "string":
            tokens.append(Token("string", _unquote(match.group("string")), pos))
        elif kind == "regex":
            tokens.append(Token("regex", match.group("pattern"), pos, match.group("flags")))
        elif kind in ("op", "dashop", "ident"):
            tokens.append(Token(kind, match.group(kind), pos))
        pos = match.end()
    tokens.append(Token("end", "", len(text)))
    return tokens
