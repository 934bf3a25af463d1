"""Built-in functions for the SharpLisp root scope.

Every built-in receives already-evaluated arguments plus the caller's scope.
`if` and `when` get their laziness from the caller wrapping branches in
`#(...)`: the branch arrives as a closure and is forced only when selected.
"""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable

from sharplisp.errors import SharpTypeError, SharpArityError, SharpEmptyListError
from sharplisp.evaluation.apply import force
from sharplisp.types.scope import Scope
from sharplisp.types.values import (
    Value,
    IntegerValue,
    SymbolValue,
    ListValue,
    FunctionValue,
    NIL,
    FALSE,
    boolean,
    is_true,
    wrap_int,
)

logger = logging.getLogger(__name__)

Builtin = Callable[[list[Value], Scope], Value]


def _expect_arity(name: str, args: list[Value], count: int) -> None:
    if len(args) != count:
        raise SharpArityError(f"{name} requires exactly {count} argument(s), got {len(args)}")


def _expect_integers(name: str, args: list[Value]) -> list[int]:
    for a in args:
        if not isinstance(a, IntegerValue):
            raise SharpTypeError(f"All arguments to {name} must be integers, got {a}")
    return [a.value for a in args]


def _expect_list(name: str, value: Value) -> ListValue:
    if not isinstance(value, ListValue):
        raise SharpTypeError(f"{name} requires a list, got {value}")
    return value


# -------------------------------
# Arithmetic
# -------------------------------
def add(args: list[Value], scope: Scope) -> Value:
    """(add a b) => a + b, wrapped to 32 bits."""
    _expect_arity("add", args, 2)
    a, b = _expect_integers("add", args)
    return IntegerValue(wrap_int(a + b))


def sub(args: list[Value], scope: Scope) -> Value:
    """(sub a b) => a - b, wrapped to 32 bits."""
    _expect_arity("sub", args, 2)
    a, b = _expect_integers("sub", args)
    return IntegerValue(wrap_int(a - b))


# -------------------------------
# Binding and sequencing
# -------------------------------
def define(args: list[Value], scope: Scope) -> Value:
    """(def :name value) binds name in the caller's scope and returns value."""
    _expect_arity("def", args, 2)
    name, value = args
    if not isinstance(name, SymbolValue):
        raise SharpTypeError(f"def requires a symbol name, got {name}")
    scope.define(name.name, value)
    logger.debug("def %s = %s", name.name, value)
    return value


def do(args: list[Value], scope: Scope) -> Value:
    # Arguments were already evaluated, in order, by the call form
    return NIL


def to_text(value: Value) -> str:
    """Printable form of a value: lists as (a b c), scalars as their text."""
    if isinstance(value, ListValue):
        return "(" + " ".join(to_text(e) for e in value.elements) + ")"
    return str(value)


def print_builtin(args: list[Value], scope: Scope) -> Value:
    """Print the single argument followed by a newline; returns nil."""
    _expect_arity("print", args, 1)
    print(to_text(args[0]))
    return NIL


# -------------------------------
# Lists
# -------------------------------
def list_builtin(args: list[Value], scope: Scope) -> Value:
    return ListValue(tuple(args))


def car(args: list[Value], scope: Scope) -> Value:
    """Return the first element of a list; errors on an empty list."""
    _expect_arity("car", args, 1)
    xs = _expect_list("car", args[0])
    if not xs.elements:
        raise SharpEmptyListError("car of an empty list")
    return xs.elements[0]


def cdr(args: list[Value], scope: Scope) -> Value:
    """Return a new list of all but the first element; errors on an empty list."""
    _expect_arity("cdr", args, 1)
    xs = _expect_list("cdr", args[0])
    if not xs.elements:
        raise SharpEmptyListError("cdr of an empty list")
    return ListValue(xs.elements[1:])


# -------------------------------
# Comparison and identity
# -------------------------------
def eq(args: list[Value], scope: Scope) -> Value:
    """(eq a b) => true if a and b carry the same tag and payload."""
    _expect_arity("eq", args, 2)
    a, b = args
    return boolean(a == b)


def identity(args: list[Value], scope: Scope) -> Value:
    _expect_arity("id", args, 1)
    return args[0]


# -------------------------------
# Control flow
# -------------------------------
def when(args: list[Value], scope: Scope) -> Value:
    """(when cond branch) forces branch if cond is true, else returns false."""
    _expect_arity("when", args, 2)
    condition, branch = args
    if is_true(condition):
        return force(branch, scope)
    return FALSE


def if_builtin(args: list[Value], scope: Scope) -> Value:
    """(if cond then else) forces the branch selected by cond.

    Both branches have already been evaluated by the call form; only a branch
    written as #(...) defers its work until it is forced here.
    """
    _expect_arity("if", args, 3)
    condition, then_branch, else_branch = args
    return force(then_branch if is_true(condition) else else_branch, scope)


BUILTINS: dict[str, Builtin] = {
    "add": add,
    "sub": sub,
    "def": define,
    "do": do,
    "print": print_builtin,
    "list": list_builtin,
    "car": car,
    "cdr": cdr,
    "eq": eq,
    "id": identity,
    "when": when,
    "if": if_builtin,
}


def register(scope: Scope) -> None:
    """Bind every built-in into `scope`."""
    scope.update({name: FunctionValue(name, fn) for name, fn in BUILTINS.items()})


@lru_cache(maxsize=None)
def standard_library() -> Scope:
    """The process-wide root scope: all built-ins, read-only once built."""
    root = Scope()
    register(root)
    return root.freeze()
