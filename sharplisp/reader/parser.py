"""
  SharpLisp parser

Turns a finite token sequence into a list of sibling nodes. Nested forms are
delimited by bracket-depth counting and parsed recursively on their own
extracted sub-sequence:

    - "(" ... ")"   -> ListNode
    - "#(" ... ")"  -> LambdaNode
    - "42"          -> IntegerNode
    - ":name"       -> SymbolNode("name")
    - "name"        -> IdentifierNode("name")
"""

from __future__ import annotations

import logging
from typing import Iterable

from sharplisp.errors import SharpUnbalancedParenError, SharpIntegerRangeError
from sharplisp.reader.lexer import LAMBDA_OPEN, CLOSE, OPENERS, is_integer_token
from sharplisp.runtime_context import recursion_guard
from sharplisp.types.nodes import (
    Node,
    ListNode,
    LambdaNode,
    IdentifierNode,
    IntegerNode,
    SymbolNode,
)
from sharplisp.types.values import INT_MAX

logger = logging.getLogger(__name__)


def find_matching_close(tokens: list[str], open_index: int) -> int:
    """Return the index of the ')' closing the opener at `open_index`.

    Depth is 1 just after the opener, goes up on every opener and down on every
    ')'; the match is where it returns to 0.
    """
    depth = 1
    ptr = open_index + 1
    while True:
        if ptr >= len(tokens):
            raise SharpUnbalancedParenError(
                "Tokens exhausted during parse - do you have unclosed parentheses?"
            )
        token = tokens[ptr]
        if token in OPENERS:
            depth += 1
        elif token == CLOSE:
            depth -= 1
            if depth == 0:
                return ptr
        ptr += 1


def _parse_atom(token: str) -> Node:
    if is_integer_token(token):
        value = int(token)
        if value > INT_MAX:
            raise SharpIntegerRangeError(f"Integer literal {token} does not fit in 32 bits")
        return IntegerNode(value)
    if token.startswith(":"):
        return SymbolNode(token[1:])
    return IdentifierNode(token)


def _parse_tokens(tokens: list[str]) -> list[Node]:
    nodes: list[Node] = []
    ptr = 0
    while ptr < len(tokens):
        token = tokens[ptr]
        if token in OPENERS:
            close = find_matching_close(tokens, ptr)
            children = tuple(_parse_tokens(tokens[ptr + 1:close]))
            if token == LAMBDA_OPEN:
                nodes.append(LambdaNode(children))
            else:
                nodes.append(ListNode(children))
            ptr = close + 1
        elif token == CLOSE:
            raise SharpUnbalancedParenError("Unexpected ')' without a matching opener")
        else:
            nodes.append(_parse_atom(token))
            ptr += 1
    return nodes


def parse(tokens: Iterable[str]) -> list[Node]:
    """Parse a finite token sequence into a forest of top-level nodes."""
    token_list = list(tokens)
    with recursion_guard("parsing"):
        forest = _parse_tokens(token_list)
    logger.debug("Parsed %d tokens into %d top-level forms", len(token_list), len(forest))
    return forest
