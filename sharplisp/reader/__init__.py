"""Reader: source text to tokens to AST nodes."""

from sharplisp.reader.lexer import tokenize, tokenize_with_positions, LAMBDA_OPEN, LIST_OPEN, CLOSE
from sharplisp.reader.parser import parse

__all__ = [
    "tokenize",
    "tokenize_with_positions",
    "parse",
    "LAMBDA_OPEN",
    "LIST_OPEN",
    "CLOSE",
]
