"""Lexical scope chain for SharpLisp.

A Scope maps names to evaluated values and links to an optional parent.
Lookups walk outward until the root. Children hold a plain reference to
their parent, so a parent stays alive for as long as any child scope or
captured closure can still resolve through it.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from sharplisp.errors import SharpImmutableScopeError, SharpUnboundNameError
from sharplisp.types.values import Value


class Scope:
    """One link of the environment chain."""

    __slots__ = ("names", "parent", "read_only")

    def __init__(self, parent: Optional[Scope] = None, read_only: bool = False):
        self.names: dict[str, Value] = {}
        self.parent: Scope | None = parent
        self.read_only: bool = read_only

    def child(self) -> Scope:
        """Return a fresh, empty scope whose parent is this one."""
        return Scope(parent=self)

    def define(self, name: str, value: Value) -> None:
        """Bind `name` to `value` in this scope, overwriting any existing binding.

        Raises SharpImmutableScopeError if the scope is read-only.
        """
        if self.read_only:
            raise SharpImmutableScopeError(f"Cannot define {name} in a read-only scope")
        self.names[name] = value

    def update(self, mapping: dict[str, Value]) -> None:
        for k, v in mapping.items():
            self.define(k, v)

    def freeze(self) -> Scope:
        self.read_only = True
        return self

    def find(self, name: str) -> Optional[Scope]:
        """Find the nearest scope in the chain that binds `name`."""
        scope: Optional[Scope] = self
        while scope is not None:
            if name in scope.names:
                return scope
            scope = scope.parent
        return None

    def resolve(self, name: str) -> Value:
        """Look up the value bound to `name`, walking outward to the root.

        Raises SharpUnboundNameError if no scope in the chain binds it.
        """
        scope = self.find(name)
        if scope is None:
            raise SharpUnboundNameError(name)
        return scope.names[name]

    def __contains__(self, name: str) -> bool:
        return self.find(name) is not None

    def chain(self) -> Iterator[Scope]:
        scope: Optional[Scope] = self
        while scope is not None:
            yield scope
            scope = scope.parent

    def _write_names(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.names.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_names(buffer)
            if self.parent is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Scope chain: ")
            frames = []
            for scope in self.chain():
                frame = StringIO()
                scope._write_names(frame)
                frames.append(frame.getvalue())
            buffer.write(" -> ".join(frames))
            buffer.write(">")
            return buffer.getvalue()
