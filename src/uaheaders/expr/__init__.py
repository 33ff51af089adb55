"""Condition expression language used by ``expr=`` clauses."""

from .compiler import CompiledExpr, compile_expression
from .lexer import Token, tokenize

__all__ = ["CompiledExpr", "Token", "compile_expression", "tokenize"]
