"""Core tree-walking evaluator for SharpLisp.

Evaluation is eager: a call form evaluates its head and every argument before
applying. A lambda form evaluates to a closure without running its body, which
is what lets `if`/`when` defer a branch written as #(...).
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from sharplisp.builtin.env_builtin import standard_library
from sharplisp.errors import SharpNotCallableError
from sharplisp.evaluation.apply import apply
from sharplisp.runtime_context import recursion_guard
from sharplisp.types.nodes import (
    Node,
    ListNode,
    LambdaNode,
    IdentifierNode,
    IntegerNode,
    SymbolNode,
)
from sharplisp.types.scope import Scope
from sharplisp.types.values import Value, IntegerValue, SymbolValue, FunctionValue

logger = logging.getLogger(__name__)


def make_closure(node: LambdaNode, captured: Scope) -> FunctionValue:
    """Build the closure for a lambda form defined in `captured`.

    Each invocation runs in a fresh child of the captured scope (not the
    caller's) with the i-th argument bound to %i, and evaluates the lambda's
    children as a call form.
    """
    body = ListNode(node.children)

    def closure(args: list[Value], _: Scope) -> Value:
        local = captured.child()
        for i, arg in enumerate(args):
            local.define(f"%{i}", arg)
        return evaluate(body, local)

    return FunctionValue("lambda", closure, source=node)


def evaluate_call(node: ListNode, scope: Scope) -> Value:
    if not node.children:
        raise SharpNotCallableError(f"Cannot evaluate empty form {node}")
    head = evaluate(node.children[0], scope)
    # the head is checked before any argument runs
    if not isinstance(head, FunctionValue):
        raise SharpNotCallableError(f"Cannot apply non-function {head} in {node}")
    args = [evaluate(child, scope) for child in node.children[1:]]
    return apply(head, args, scope)


def evaluate(node: Node, scope: Scope) -> Value:
    """Evaluate a single node against `scope`."""
    match node:
        case IntegerNode(value=value):
            return IntegerValue(value)
        case SymbolNode(name=name):
            return SymbolValue(name)
        case IdentifierNode(name=name):
            return scope.resolve(name)
        case LambdaNode():
            return make_closure(node, scope)
        case ListNode():
            return evaluate_call(node, scope)
    raise TypeError(f"Attempt to evaluate unrecognised node type {type(node).__name__}")


def evaluate_root(forest: Iterable[Node], root: Optional[Scope] = None) -> list[Value]:
    """Evaluate top-level nodes in order, sharing one fresh child of the root scope.

    `def` at top level is visible to later forms of the same run; separate runs
    do not see each other's bindings.
    """
    scope = (root if root is not None else standard_library()).child()
    return evaluate_forest(forest, scope)


def evaluate_forest(forest: Iterable[Node], scope: Scope) -> list[Value]:
    """Evaluate top-level nodes in order directly in `scope`."""
    results: list[Value] = []
    with recursion_guard("evaluation"):
        for node in forest:
            results.append(evaluate(node, scope))
    logger.debug("Evaluated %d top-level forms", len(results))
    return results
