"""Marker values for special forms and foreign (host) functions."""

from __future__ import annotations

from typing import Any, Callable, Optional

from schemer.types.symbol import Symbol


class SpecialFormMarker:
    """What a special-form keyword evaluates to when looked up as a variable.

    Applying a marker hands the unevaluated argument list to its handler,
    so `(define my-if if)` gives a working alias for `if`.
    """

    __slots__ = ("name", "handler")

    def __init__(self, name: Symbol, handler: Callable[..., Any]):
        self.name = name
        self.handler = handler

    def __str__(self) -> str:
        return f"#<special-form {self.name}>"

    __repr__ = __str__


class ForeignFunction:
    """A callable host function, found by name or supplied directly.

    With `object_mode` the marker stands for a host object: applying it as
    `(obj 'method arg...)` calls `path.method(arg...)`.
    """

    __slots__ = ("path", "target", "object_mode")

    def __init__(
        self,
        path: str,
        target: Optional[Callable[..., Any]] = None,
        object_mode: bool = False,
    ):
        self.path = path
        self.target = target
        self.object_mode = object_mode

    def __str__(self) -> str:
        kind = "foreign-object" if self.object_mode else "foreign"
        return f"#<{kind} {self.path}>"

    __repr__ = __str__
