"""
  SharpLisp lexer

- Streaming, lazy: tokens are yielded as they are found
- Tokens are plain strings:

    - "#("           -> lambda opener
    - "(" and ")"    -> list brackets
    - "123"          -> integer literal (ASCII digits only)
    - "add", ":x"    -> identifiers; a leading ':' marks a symbol literal
    - "%0"           -> positional argument names inside a lambda
"""

from __future__ import annotations

from typing import Iterator

from sharplisp.errors import SharpLexError

LAMBDA_OPEN = "#("
LIST_OPEN = "("
CLOSE = ")"

OPENERS = (LIST_OPEN, LAMBDA_OPEN)

_DIGITS = frozenset("0123456789")
_IDENT_MARKS = frozenset(":%")


def _is_digit(ch: str) -> bool:
    return ch in _DIGITS


def _starts_identifier(ch: str) -> bool:
    return ch.isalpha() or ch in _IDENT_MARKS


def _continues_identifier(ch: str) -> bool:
    return ch.isalpha() or ch in _DIGITS or ch in _IDENT_MARKS


def tokenize_with_positions(source: str) -> Iterator[tuple[str, int]]:
    """Token generator: yields (token, offset) pairs in source order."""
    pos = 0
    n = len(source)

    while pos < n:
        current_char = source[pos]

        if source.startswith(LAMBDA_OPEN, pos):
            yield LAMBDA_OPEN, pos
            pos += 2
        elif current_char in (LIST_OPEN, CLOSE):
            yield current_char, pos
            pos += 1
        elif _is_digit(current_char):
            start = pos
            while pos < n and _is_digit(source[pos]):
                pos += 1
            yield source[start:pos], start
        elif _starts_identifier(current_char):
            start = pos
            while pos < n and _continues_identifier(source[pos]):
                pos += 1
            yield source[start:pos], start
        elif current_char.isspace():
            pos += 1
        else:
            raise SharpLexError(current_char, pos)


def tokenize(source: str) -> Iterator[str]:
    """Token generator: yields token strings only."""
    for token, _ in tokenize_with_positions(source):
        yield token


def is_integer_token(token: str) -> bool:
    return bool(token) and all(_is_digit(ch) for ch in token)
