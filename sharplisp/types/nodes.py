"""AST node variants produced by the parser.

Nodes are immutable once built. ``ListNode`` and ``LambdaNode`` share the
same shape; the tag alone decides whether the evaluator calls the form or
turns it into a closure.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class ListNode:
    children: tuple[Node, ...] = ()

    def __str__(self) -> str:
        return "(" + " ".join(str(c) for c in self.children) + ")"


@dataclass(frozen=True)
class LambdaNode:
    children: tuple[Node, ...] = ()

    def __str__(self) -> str:
        return "#(" + " ".join(str(c) for c in self.children) + ")"


@dataclass(frozen=True)
class IdentifierNode:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IntegerNode:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SymbolNode:
    name: str

    def __str__(self) -> str:
        return ":" + self.name


Node = Union[ListNode, LambdaNode, IdentifierNode, IntegerNode, SymbolNode]


def unparse(nodes) -> str:
    """Render a node, or a forest of nodes, back to source text."""
    if isinstance(nodes, (ListNode, LambdaNode, IdentifierNode, IntegerNode, SymbolNode)):
        return str(nodes)
    return " ".join(str(n) for n in nodes)
