from __future__ import annotations
import sys


class Symbol:
    """A name in source code: a variable reference, a special-form keyword or a
    pattern variable. Environment frames and syntax-rules bindings are keyed by it.
    """

    __slots__ = ("id",)

    def __init__(self, name: str):
        # Interned: equal names share one string
        self.id = sys.intern(name)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id


QUOTE = Symbol("quote")
ELLIPSIS = Symbol("...")
