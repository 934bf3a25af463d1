"""Application engine for SharpLisp.

Centralizes the two ways a function value is run:
- `apply`: a call form invokes its head with evaluated arguments and the
  current scope.
- `force`: `if`/`when` invoke a selected branch thunk with no arguments in a
  fresh child scope. Non-function branches are returned unchanged.
"""

from __future__ import annotations

from sharplisp.errors import SharpNotCallableError
from sharplisp.types.scope import Scope
from sharplisp.types.values import FunctionValue, Value


def apply(head: Value, args: list[Value], scope: Scope) -> Value:
    """Invoke `head` with already-evaluated `args`; raise if it is not a function."""
    if not isinstance(head, FunctionValue):
        raise SharpNotCallableError(f"Cannot apply non-function {head}")
    return head.fn(args, scope)


def force(value: Value, scope: Scope) -> Value:
    """Run a thunk with zero arguments in a child of `scope`, or pass a plain value through."""
    if isinstance(value, FunctionValue):
        return value.fn([], scope.child())
    return value
