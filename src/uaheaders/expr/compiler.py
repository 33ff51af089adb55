"""Recursive-descent compiler from expression text to a request predicate.

Grammar::

    expr       := and_expr ("||" and_expr)*
    and_expr   := unary ("&&" unary)*
    unary      := "!" unary | primary
    primary    := "(" expr ")" | "true" | "false"
                | ("-n" | "-z") word
                | word comparison
    comparison := ("==" | "!=" | "<" | "<=" | ">" | ">=") word
                | ("=~" | "!~") REGEX
                | ("-eq" | "-ne" | "-lt" | "-le" | "-gt" | "-ge") word
                | "-in" "{" word ("," word)* "}"
    word       := STRING | VAR | FUNCTION "(" word ")"
"""

from __future__ import annotations

import operator
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from uaheaders.constants.expr import (
    FUNCTIONS,
    HEADER_VARIABLE_PREFIX,
    INT_OPS,
    LIST_OP,
    MAX_NESTING_DEPTH,
    REGEX_OPS,
    STRING_OPS,
    UNARY_OPS,
)
from uaheaders.exceptions import ExprCompileError, ExprEvalError
from uaheaders.expr.lexer import Token, tokenize
from uaheaders.http import Request

type WordFn = Callable[[Request], str]
type CondFn = Callable[[Request], bool]

_COMPARATORS: dict[str, Callable[[object, object], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
    "-eq": operator.eq,
    "-ne": operator.ne,
    "-lt": operator.lt,
    "-le": operator.le,
    "-gt": operator.gt,
    "-ge": operator.ge,
}


@dataclass(frozen=True)
class CompiledExpr:
    """A compiled condition; ``evaluate`` may raise ExprEvalError."""

    source: str
    _root: CondFn = field(repr=False, compare=False)

    def evaluate(self, request: Request) -> bool:
        return self._root(request)


def compile_expression(text: str) -> CompiledExpr:
    """Compile *text*, raising ExprCompileError on any syntax problem."""
    if not text.strip():
        raise ExprCompileError("empty expression")
    parser = _Parser(tokenize(text))
    root = parser.parse_expr()
    parser.expect("end")
    return CompiledExpr(source=text, _root=root)


def _variable(name: str) -> WordFn:
    if name == "REQUEST_METHOD":
        return lambda request: request.method
    if name == "REQUEST_URI":
        return lambda request: request.path
    if name == "QUERY_STRING":
        return lambda request: request.query_string
    if name.startswith(HEADER_VARIABLE_PREFIX):
        header = name[len(HEADER_VARIABLE_PREFIX) :].replace("_", "-")
        return lambda request: request.headers.get(header) or ""
    return lambda request: request.env.get(name, "")


def _function(name: str, arg: WordFn) -> WordFn:
    if name in ("req", "http"):
        return lambda request: request.headers.get(arg(request)) or ""
    if name == "env":
        return lambda request: request.env.get(arg(request), "")
    if name == "note":
        return lambda request: request.notes.get(arg(request)) or ""
    if name == "tolower":
        return lambda request: arg(request).lower()
    return lambda request: arg(request).upper()


def _to_int(value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ExprEvalError(f"integer expected, got {value!r}") from exc


class _Parser:
    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0
        self._depth = 0

    @property
    def _current(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        self._pos += 1
        return token

    def _at(self, kind: str, value: str | None = None) -> bool:
        token = self._current
        return token.kind == kind and (value is None or token.value == value)

    def _descend(self) -> None:
        self._depth += 1
        if self._depth > MAX_NESTING_DEPTH:
            raise ExprCompileError(
                f"expression nested too deeply at offset {self._current.pos} (limit {MAX_NESTING_DEPTH})"
            )

    def expect(self, kind: str, value: str | None = None) -> Token:
        if not self._at(kind, value):
            token = self._current
            wanted = value if value is not None else kind
            found = token.value if token.kind != "end" else "end of expression"
            raise ExprCompileError(f"expected {wanted!r} at offset {token.pos}, found {found!r}")
        return self._advance()

    def parse_expr(self) -> CondFn:
        operands = [self._parse_and()]
        while self._at("op", "||"):
            self._advance()
            operands.append(self._parse_and())
        return operands[0] if len(operands) == 1 else _any(tuple(operands))

    def _parse_and(self) -> CondFn:
        operands = [self._parse_unary()]
        while self._at("op", "&&"):
            self._advance()
            operands.append(self._parse_unary())
        return operands[0] if len(operands) == 1 else _all(tuple(operands))

    def _parse_unary(self) -> CondFn:
        if self._at("op", "!"):
            self._advance()
            self._descend()
            inner = self._parse_unary()
            self._depth -= 1
            return lambda request: not inner(request)
        return self._parse_primary()

    def _parse_primary(self) -> CondFn:
        token = self._current
        if self._at("op", "("):
            self._advance()
            self._descend()
            inner = self.parse_expr()
            self.expect("op", ")")
            self._depth -= 1
            return inner
        if self._at("ident", "true"):
            self._advance()
            return lambda request: True
        if self._at("ident", "false"):
            self._advance()
            return lambda request: False
        if token.kind == "dashop" and token.value in UNARY_OPS:
            self._advance()
            word = self._parse_word()
            if token.value == "-n":
                return lambda request: word(request) != ""
            return lambda request: word(request) == ""

        left = self._parse_word()
        return self._parse_comparison(left)

    def _parse_comparison(self, left: WordFn) -> CondFn:
        token = self._advance()
        if token.kind == "op" and token.value in STRING_OPS:
            compare = _COMPARATORS[token.value]
            right = self._parse_word()
            return lambda request: compare(left(request), right(request))
        if token.kind == "op" and token.value in REGEX_OPS:
            pattern = self._parse_regex()
            negate = token.value == "!~"
            return lambda request: (pattern.search(left(request)) is None) == negate
        if token.kind == "dashop" and token.value in INT_OPS:
            compare = _COMPARATORS[token.value]
            right = self._parse_word()
            return lambda request: compare(_to_int(left(request)), _to_int(right(request)))
        if token.kind == "dashop" and token.value == LIST_OP:
            choices = self._parse_list()
            return lambda request: left(request) in {choice(request) for choice in choices}
        found = token.value if token.kind != "end" else "end of expression"
        raise ExprCompileError(f"expected comparison operator at offset {token.pos}, found {found!r}")

    def _parse_regex(self) -> re.Pattern[str]:
        token = self.expect("regex")
        flags = re.IGNORECASE if "i" in token.flags else 0
        try:
            return re.compile(token.value, flags)
        except re.error as exc:
            raise ExprCompileError(f"invalid regular expression /{token.value}/: {exc}") from exc

    def _parse_list(self) -> tuple[WordFn, ...]:
        self.expect("op", "{")
        items = [self._parse_word()]
        while self._at("op", ","):
            self._advance()
            items.append(self._parse_word())
        self.expect("op", "}")
        return tuple(items)

    def _parse_word(self) -> WordFn:
        token = self._advance()
        if token.kind == "string":
            literal = token.value
            return lambda request: literal
        if token.kind == "var":
            return _variable(token.value)
        if token.kind == "ident":
            if token.value not in FUNCTIONS:
                raise ExprCompileError(f"unknown function {token.value!r} at offset {token.pos}")
            self.expect("op", "(")
            self._descend()
            arg = self._parse_word()
            self.expect("op", ")")
            self._depth -= 1
            return _function(token.value, arg)
        found = token.value if token.kind != "end" else "end of expression"
        raise ExprCompileError(f"expected a string, variable or function at offset {token.pos}, found {found!r}")


def _any(operands: tuple[CondFn, ...]) -> CondFn:
    return lambda request: any(operand(request) for operand in operands)


def _all(operands: tuple[CondFn, ...]) -> CondFn:
    return lambda request: all(operand(request) for operand in operands)
