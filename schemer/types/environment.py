"""Runtime environment for schemer.

The Environment stores bindings of Symbols to evaluated values and supports
nested scopes via an `outer` link. Frames are shared by reference: every
closure created in a frame, and every call running in it, sees the same
mutable mapping.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from schemer import SchemeValue
from schemer.errors import SchemeTypeError, UnboundVariableError
from schemer.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, SchemeValue] = {}
        self.outer: Environment | None = outer

    def bind(self, name: Symbol, value: SchemeValue) -> None:
        """Bind `name` in this frame, shadowing any outer binding.

        Raises SchemeTypeError if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise SchemeTypeError(f"Cannot bind {name}: not a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def set(self, name: Symbol, value: SchemeValue) -> None:
        """Update the nearest existing binding for `name`.

        When no frame binds `name`, a new binding is created in the global
        (root) frame.
        """
        if not isinstance(name, Symbol):
            raise SchemeTypeError(f"Cannot set {name}: not a symbol")
        env = self.find(name)
        if env is None:
            env = self.root()
        env.vars[name] = value

    def lookup(self, name: Symbol) -> SchemeValue:
        """Look up the value bound to `name`, innermost frame first.

        Raises UnboundVariableError if no frame binds it.
        """
        env = self.find(name)
        if env is None:
            raise UnboundVariableError(name)
        return env.vars[name]

    def update(self, mapping: dict[Symbol, SchemeValue]) -> None:
        """Bulk-bind a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.bind(k, v)

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Environment {len(self.vars)} bindings{' (global)' if self.outer is None else ''}>"
