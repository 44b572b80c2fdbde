"""Built-in procedures for the schemer runtime environment.

Arithmetic and comparison are plain Python functions over native values.
`register` binds each one as a ForeignFunction with a direct target, so the
foreign bridge marshals their arguments and results like any host call.
"""
from __future__ import annotations

import operator
from numbers import Number
from typing import Any, Callable

from schemer.errors import ArityError, SchemeTypeError
from schemer.types.environment import Environment
from schemer.types.markers import ForeignFunction
from schemer.types.symbol import Symbol


def _numbers(name: str, args: tuple[Any, ...]) -> tuple[Any, ...]:
    for a in args:
        if isinstance(a, bool) or not isinstance(a, Number):
            raise SchemeTypeError(f"All arguments to {name} must be numbers, got {a!r}")
    return args


def add(*args: Any) -> Any:
    """Return the numeric sum of all arguments; 0 with no arguments."""
    return sum(_numbers("+", args))


def sub(*args: Any) -> Any:
    """(- x) negates; (- x y ...) subtracts the rest from x."""
    _numbers("-", args)
    if not args:
        raise ArityError("- requires at least one argument")
    if len(args) == 1:
        return -args[0]
    result = args[0]
    for a in args[1:]:
        result -= a
    return result


def mul(*args: Any) -> Any:
    result = 1
    for a in _numbers("*", args):
        result *= a
    return result


def _exact(value: Any) -> Any:
    # Keep integer results integral: (/ 6 3) is 2, not 2.0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def div(*args: Any) -> Any:
    """(/ x) is the reciprocal; (/ x y ...) divides x by the rest in turn."""
    _numbers("/", args)
    if not args:
        raise ArityError("/ requires at least one argument")
    values = (1, *args) if len(args) == 1 else args
    result = values[0]
    for a in values[1:]:
        if a == 0:
            raise SchemeTypeError("Division by zero")
        result = result / a
    if all(isinstance(v, int) for v in values):
        return _exact(result)
    return result


def mod(*args: Any) -> Any:
    _numbers("%", args)
    if len(args) != 2:
        raise ArityError(f"% requires exactly 2 arguments, got {len(args)}")
    if args[1] == 0:
        raise SchemeTypeError("Division by zero")
    return args[0] % args[1]


def _chain(name: str, op: Callable[[Any, Any], bool]) -> Callable[..., bool]:
    def compare(*args: Any) -> bool:
        _numbers(name, args)
        if len(args) < 2:
            raise ArityError(f"{name} requires at least 2 arguments")
        return all(op(a, b) for a, b in zip(args, args[1:]))

    compare.__name__ = f"compare_{op.__name__}"
    compare.__doc__ = f"Return True if every adjacent pair of arguments satisfies {name}."
    return compare


equals = _chain("=", operator.eq)
lt = _chain("<", operator.lt)
gt = _chain(">", operator.gt)
lte = _chain("<=", operator.le)
gte = _chain(">=", operator.ge)


BUILTINS: dict[str, Callable[..., Any]] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "%": mod,
    "=": equals,
    "<": lt,
    ">": gt,
    "<=": lte,
    ">=": gte,
}


def register(env: Environment) -> None:
    """Register all builtin procedures into the given environment."""
    env.update({Symbol(name): ForeignFunction(name, target=fn) for name, fn in BUILTINS.items()})
