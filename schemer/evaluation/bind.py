from __future__ import annotations

from typing import Optional

from schemer import Expression
from schemer.errors import ArityError, SchemeTypeError
from schemer.types.environment import Environment
from schemer.types.nil import Nil
from schemer.types.pair import Pair, list_length
from schemer.types.symbol import Symbol


def bind_arguments(
    params: Expression,
    supplied_args: Expression,
    closure_env: Environment,
    name: Optional[str] = None,
) -> Environment:
    """
    Single source of truth for parameter binding in schemer.

    Supports:
    - A proper parameter list: positional, exact arity
    - A single Symbol: captures the whole argument list
    - A dotted parameter list (a b . rest): positional prefix, at least that
      many arguments, `rest` bound to the remaining arguments as a list

    Returns a new Environment whose outer is the closure_env, populated with
    the bindings for evaluating the callee body.
    """
    local_env = Environment(outer=closure_env)

    if isinstance(params, Symbol):
        local_env.bind(params, supplied_args)
        return local_env

    names = params
    args = supplied_args
    while isinstance(names, Pair):
        if not isinstance(args, Pair):
            raise ArityError(
                f"Too few arguments to {name or 'procedure'}: expected "
                f"{_describe(params)}, got {list_length(supplied_args)}"
            )
        local_env.bind(names.first, args.first)
        names, args = names.rest, args.rest

    if names is Nil:
        if args is not Nil:
            raise ArityError(
                f"Too many arguments to {name or 'procedure'}: expected "
                f"{_describe(params)}, got {list_length(supplied_args)}"
            )
    elif isinstance(names, Symbol):
        # Dotted tail collects whatever is left (possibly Nil)
        local_env.bind(names, args)
    else:
        raise SchemeTypeError(f"Invalid parameter list: {params}")

    return local_env


def _describe(params: Expression) -> str:
    fixed = list_length(params)
    cell = params
    while isinstance(cell, Pair):
        cell = cell.rest
    return f"at least {fixed}" if isinstance(cell, Symbol) else str(fixed)


def validate_params(params: Expression) -> None:
    """Reject parameter lists that are not symbols, lists or dotted lists of symbols."""
    if isinstance(params, Symbol) or params is Nil:
        return
    cell = params
    seen: set[Symbol] = set()
    while isinstance(cell, Pair):
        if not isinstance(cell.first, Symbol):
            raise SchemeTypeError(f"Parameter must be a symbol, got {cell.first}")
        if cell.first in seen:
            raise SchemeTypeError(f"Duplicate parameter {cell.first}")
        seen.add(cell.first)
        cell = cell.rest
    if cell is not Nil and not isinstance(cell, Symbol):
        raise SchemeTypeError(f"Invalid parameter list: {params}")


