"""Self-evaluating atoms: numbers, strings, the two booleans and host objects."""

from __future__ import annotations

import re
from typing import Any, Optional

NUMBER_RE = re.compile(r"[-+]?\d*\.?\d+")

TRUE_TOKEN = "#t"
FALSE_TOKEN = "#f"

STRING_QUOTE = '"'
NO_ESCAPE_QUOTE = "`"
ESCAPE = "\\"

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0"}


def unescape(body: str) -> str:
    """Resolve backslash escapes in the body of a double-quoted string."""
    out = []
    i = 0
    n = len(body)
    while i < n:
        ch = body[i]
        if ch == ESCAPE and i + 1 < n:
            nxt = body[i + 1]
            out.append(_ESCAPES.get(nxt, nxt))
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def escape(value: str) -> str:
    return (
        value.replace(ESCAPE, ESCAPE * 2)
        .replace(STRING_QUOTE, ESCAPE + STRING_QUOTE)
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )


class Literal:
    """An immutable self-evaluating atom.

    `kind` is one of "number", "string", "boolean" or "host"; `value` is the
    host representation and `text` the printed form. Equality is structural
    on (kind, value) so that `+1` and `1` read as the same literal.
    """

    __slots__ = ("kind", "value", "text")

    def __init__(self, kind: str, value: Any, text: str):
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "text", text)

    def __setattr__(self, key, value):
        raise AttributeError("Literal is immutable")

    # --- Constructors ---
    @classmethod
    def number(cls, value: int | float) -> Literal:
        return cls("number", value, repr(value))

    @classmethod
    def string(cls, value: str) -> Literal:
        return cls("string", value, STRING_QUOTE + escape(value) + STRING_QUOTE)

    @classmethod
    def boolean(cls, value: bool) -> Literal:
        return TRUE if value else FALSE

    @classmethod
    def host(cls, value: Any) -> Literal:
        return cls("host", value, str(value))

    @classmethod
    def from_token(cls, token: str) -> Optional[Literal]:
        """Classify an atom token; None means the token is a symbol."""
        if NUMBER_RE.fullmatch(token):
            value: int | float = float(token) if "." in token else int(token)
            return cls("number", value, token)
        if token == TRUE_TOKEN:
            return TRUE
        if token == FALSE_TOKEN:
            return FALSE
        if len(token) >= 2 and token[0] == STRING_QUOTE and token[-1] == STRING_QUOTE:
            return cls("string", unescape(token[1:-1]), token)
        if len(token) >= 2 and token[0] == NO_ESCAPE_QUOTE and token[-1] == NO_ESCAPE_QUOTE:
            return cls("string", token[1:-1], token)
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Literal):
            return False
        if self.kind != other.kind:
            return False
        if self.kind == "host":
            return self.value is other.value or self.value == other.value
        return self.value == other.value

    def __hash__(self) -> int:
        if self.kind == "host":
            return id(self.value)
        return hash((self.kind, self.value))

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"Literal({self.kind}, {self.text})"


TRUE = Literal("boolean", True, TRUE_TOKEN)
FALSE = Literal("boolean", False, FALSE_TOKEN)


def is_true(value: Any) -> bool:
    """Only the false literal is false; Nil, 0 and "" are all true."""
    return value != FALSE
