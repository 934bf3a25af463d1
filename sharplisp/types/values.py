"""Runtime values produced by evaluation.

Values are immutable tagged variants. Parsing never produces them directly.
The symbols ``true``, ``false`` and ``nil`` double as the boolean and unit
sentinels used by the control-flow built-ins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional, Union

if TYPE_CHECKING:
    from sharplisp.types.nodes import LambdaNode
    from sharplisp.types.scope import Scope

INT_BITS = 32
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1


def wrap_int(n: int) -> int:
    """Reduce `n` to a signed 32-bit integer (two's complement wrap-around)."""
    return ((n - INT_MIN) % (1 << INT_BITS)) + INT_MIN


@dataclass(frozen=True)
class IntegerValue:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SymbolValue:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ListValue:
    elements: tuple[Value, ...] = ()

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self):
        return iter(self.elements)

    def __str__(self) -> str:
        return "(" + " ".join(str(e) for e in self.elements) + ")"


@dataclass(frozen=True, eq=False)
class FunctionValue:
    """An opaque callable: (evaluated args, invocation scope) -> value.

    Equality is identity. `source` is set for closures built from a lambda form
    and is only used for display.
    """

    name: str
    fn: Callable[[list[Value], Scope], Value]
    source: Optional[LambdaNode] = None

    def __call__(self, args: list[Value], scope: Scope) -> Value:
        return self.fn(list(args), scope)

    def __str__(self) -> str:
        if self.source is not None:
            return f"#<lambda {self.source}>"
        return f"#<function {self.name}>"


Value = Union[IntegerValue, SymbolValue, ListValue, FunctionValue]

NIL = SymbolValue("nil")
TRUE = SymbolValue("true")
FALSE = SymbolValue("false")


def boolean(flag: bool) -> SymbolValue:
    return TRUE if flag else FALSE


def is_true(value: Value) -> bool:
    # Only the `true` symbol selects the first branch; everything else is false
    return isinstance(value, SymbolValue) and value.name == TRUE.name
