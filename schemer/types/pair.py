"""Pairs and list helpers.

A proper list is a chain of Pairs whose final `rest` is Nil; an improper
list ends in any other expression. Pairs are only mutated while a chain is
being built (the reader splices the tail of a dotted list, `make_list`
links cells front to back).
"""

from __future__ import annotations

from io import StringIO
from typing import Iterable, Iterator

from schemer import Expression
from schemer.errors import SchemeSyntaxError
from schemer.types.nil import Nil
from schemer.types.symbol import QUOTE


class Pair:
    __slots__ = ("first", "rest")

    def __init__(self, first: Expression, rest: Expression = Nil):
        self.first = first
        self.rest = rest

    def is_proper(self) -> bool:
        cell: Expression = self
        while isinstance(cell, Pair):
            cell = cell.rest
        return cell is Nil

    def __eq__(self, other: object) -> bool:
        # Explicit stack: nesting depth is not bounded by the host stack
        stack: list[tuple[Expression, object]] = [(self, other)]
        while stack:
            a, b = stack.pop()
            if isinstance(a, Pair):
                if not isinstance(b, Pair):
                    return False
                stack.append((a.rest, b.rest))
                stack.append((a.first, b.first))
            elif isinstance(b, Pair):
                return False
            elif not (a is b or a == b):
                return False
        return True

    __hash__ = None  # mutable

    def __str__(self) -> str:
        # Pending output; plain str items are written as-is
        stack: list = [self]
        with StringIO() as buffer:
            while stack:
                item = stack.pop()
                if isinstance(item, str):
                    buffer.write(item)
                elif isinstance(item, Pair):
                    stack.extend(reversed(_parts(item)))
                else:
                    buffer.write(str(item))
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"Pair({self.first!r}, {self.rest!r})"


def _parts(pair: Pair) -> list:
    """One level of a pair's printed form: delimiters and the elements to print."""
    if pair.first == QUOTE and isinstance(pair.rest, Pair) and pair.rest.rest is Nil:
        return ["'", pair.rest.first]
    parts: list = ["(", pair.first]
    cell = pair.rest
    while isinstance(cell, Pair):
        parts += [" ", cell.first]
        cell = cell.rest
    if cell is not Nil:
        parts += [" . ", cell]
    parts.append(")")
    return parts


def make_list(items: Iterable[Expression], tail: Expression = Nil) -> Expression:
    """Build a list from `items`; `tail` ends the chain (Nil for a proper list)."""
    head: Expression = tail
    last: Pair | None = None
    for item in items:
        cell = Pair(item, tail)
        if last is None:
            head = cell
        else:
            last.rest = cell
        last = cell
    return head


def iter_list(expr: Expression) -> Iterator[Expression]:
    """Yield the elements of a proper list; raise on an improper one."""
    cell = expr
    while isinstance(cell, Pair):
        yield cell.first
        cell = cell.rest
    if cell is not Nil:
        raise SchemeSyntaxError(f"Expected a proper list, got {expr}")


def to_list(expr: Expression) -> list[Expression]:
    return list(iter_list(expr))


def list_length(expr: Expression) -> int:
    """Length of a proper list; the fixed prefix length of an improper one."""
    n = 0
    cell = expr
    while isinstance(cell, Pair):
        n += 1
        cell = cell.rest
    return n
