"""Quote-aware scanning of comma-separated header values."""

from __future__ import annotations

# ASCII whitespace only, as for HTTP field values.
_WHITESPACE: frozenset[str] = frozenset(" \t\n\v\f\r")


def token_present(value: str, candidate: str) -> bool:
    """Return True if *candidate* is one of the list tokens in *value*.

    Tokens are separated by top-level commas. Leading whitespace is skipped,
    but nothing else is normalized: a double quote opens a span that runs to
    the next double quote (or the end of the value), quoted commas do not
    split, and quote characters stay part of the token. Comparison is exact.
    """
    pos = 0
    end = len(value)
    while pos < end:
        while pos < end and value[pos] in _WHITESPACE:
            pos += 1
        start = pos

        while pos < end and value[pos] != ",":
            char = value[pos]
            pos += 1
            if char == '"':
                while pos < end:
                    char = value[pos]
                    pos += 1
                    if char == '"':
                        break

        if value[start:pos] == candidate:
            return True

        if pos < end:
            pos += 1
    return False
