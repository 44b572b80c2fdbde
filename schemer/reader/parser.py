"""
  Scheme Reader

- `next_token` returns the next lexical unit of a text (or "" at end):
  a string literal, a quoted form, a whole balanced list, or an atom.
- `Reader` walks a text top-level form by top-level form, turning each
  token into expression nodes:

    - numbers, strings (double-quoted or backtick), #t/#f -> Literal
    - anything else atomic -> Symbol
    - lists -> Pair chains ending in Nil
    - dotted lists (a b . c) -> Pair chain ending in c
    - 'x -> (quote x)

A syntax error (unterminated string, unbalanced parentheses) aborts the
current top-level form only; `Reader.read_next` can be called again to
continue after it.
"""

from __future__ import annotations

from typing import Iterator, Optional

from schemer import Expression
from schemer.errors import SchemeSyntaxError
from schemer.types.literal import ESCAPE, NO_ESCAPE_QUOTE, STRING_QUOTE, Literal
from schemer.types.pair import make_list
from schemer.types.symbol import QUOTE, Symbol

QUOTE_CHAR = "'"
LIST_START = "("
LIST_END = ")"
COMMENT = ";"
PAIR_SEPARATOR = "."

_DELIMITERS = frozenset((LIST_START, LIST_END, COMMENT))


def _skip_atmosphere(text: str, pos: int, stop: Optional[int] = None) -> int:
    """Skip whitespace and line comments; return the next significant index."""
    n = len(text) if stop is None else stop
    while pos < n:
        ch = text[pos]
        if ch.isspace():
            pos += 1
        elif ch == COMMENT:
            newline = text.find("\n", pos, n)
            pos = n if newline < 0 else newline + 1
        else:
            break
    return pos


def _string_end(text: str, pos: int) -> int:
    """Index just past the string literal starting at `pos`."""
    n = len(text)
    if text[pos] == NO_ESCAPE_QUOTE:
        close = text.find(NO_ESCAPE_QUOTE, pos + 1)
        if close < 0:
            raise SchemeSyntaxError(f"Unterminated string: missing {NO_ESCAPE_QUOTE}")
        return close + 1
    i = pos + 1
    while i < n:
        ch = text[i]
        if ch == ESCAPE:
            i += 2
            continue
        if ch == STRING_QUOTE:
            return i + 1
        i += 1
    raise SchemeSyntaxError(f"Unterminated string: missing {STRING_QUOTE}")


def _list_end(text: str, pos: int) -> int:
    """Index just past the `)` balancing the `(` at `pos`."""
    n = len(text)
    depth = 0
    i = pos
    while i < n:
        ch = text[i]
        if ch == LIST_START:
            depth += 1
        elif ch == LIST_END:
            depth -= 1
            if depth == 0:
                return i + 1
        elif ch in (STRING_QUOTE, NO_ESCAPE_QUOTE):
            i = _string_end(text, i)
            continue
        elif ch == COMMENT:
            newline = text.find("\n", i)
            if newline < 0:
                break
            i = newline
        i += 1
    raise SchemeSyntaxError("Unbalanced parentheses: missing ')'")


def _token_end(text: str, pos: int) -> int:
    """Index just past the token starting at the significant index `pos`."""
    ch = text[pos]
    if ch in (STRING_QUOTE, NO_ESCAPE_QUOTE):
        return _string_end(text, pos)
    if ch == QUOTE_CHAR:
        quoted = _skip_atmosphere(text, pos + 1)
        if quoted >= len(text):
            raise SchemeSyntaxError("Nothing to quote after '")
        return _token_end(text, quoted)
    if ch == LIST_START:
        return _list_end(text, pos)
    if ch == LIST_END:
        raise SchemeSyntaxError("Unbalanced parentheses: unexpected ')'")
    i = pos
    n = len(text)
    while i < n and not text[i].isspace() and text[i] not in _DELIMITERS:
        i += 1
    return i


def next_token(text: str) -> str:
    """Return the first token of `text`, or "" if it holds no token."""
    pos = _skip_atmosphere(text, 0)
    if pos >= len(text):
        return ""
    return text[pos:_token_end(text, pos)]


def remainder(text: str) -> str:
    """Return `text` with its first token removed."""
    pos = _skip_atmosphere(text, 0)
    if pos >= len(text):
        return ""
    return text[_token_end(text, pos):]


class Reader:
    """Reads top-level forms from a text one at a time."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def read_next(self) -> Optional[Expression]:
        """Return the next top-level expression, or None at end of input."""
        text = self.text
        start = _skip_atmosphere(text, self.pos)
        if start >= len(text):
            self.pos = start
            return None
        try:
            end = _token_end(text, start)
        except SchemeSyntaxError:
            # A stray ')' is its own form; anything else ran to end of input
            self.pos = start + 1 if text[start] == LIST_END else len(text)
            raise
        self.pos = end
        return self._parse(start, end)

    def read_all(self) -> Iterator[Expression]:
        while (expr := self.read_next()) is not None:
            yield expr

    # --- Token -> expression ---
    def _parse(self, start: int, end: int) -> Expression:
        text = self.text
        ch = text[start]
        if ch == QUOTE_CHAR:
            quoted = _skip_atmosphere(text, start + 1, end)
            return make_list([QUOTE, self._parse(quoted, end)])
        if ch == LIST_START:
            return self._parse_list(start + 1, end - 1)
        token = text[start:end]
        if token == PAIR_SEPARATOR:
            raise SchemeSyntaxError("Unexpected '.' outside of a list")
        literal = Literal.from_token(token)
        return literal if literal is not None else Symbol(token)

    def _parse_list(self, pos: int, stop: int) -> Expression:
        text = self.text
        items: list[Expression] = []
        while True:
            pos = _skip_atmosphere(text, pos, stop)
            if pos >= stop:
                return make_list(items)
            end = _token_end(text, pos)
            if text[pos:end] == PAIR_SEPARATOR:
                return self._parse_dotted_tail(items, end, stop)
            items.append(self._parse(pos, end))
            pos = end

    def _parse_dotted_tail(self, items: list[Expression], pos: int, stop: int) -> Expression:
        text = self.text
        if not items:
            raise SchemeSyntaxError("Improper list needs an element before '.'")
        pos = _skip_atmosphere(text, pos, stop)
        if pos >= stop:
            raise SchemeSyntaxError("Improper list needs an element after '.'")
        end = _token_end(text, pos)
        tail = self._parse(pos, end)
        if _skip_atmosphere(text, end, stop) < stop:
            raise SchemeSyntaxError("Improper list may have only one element after '.'")
        return make_list(items, tail)


def read(text: str) -> list[Expression]:
    """Read every top-level expression in `text`; the first syntax error propagates."""
    return list(Reader(text).read_all())


__all__ = ["next_token", "remainder", "Reader", "read"]
