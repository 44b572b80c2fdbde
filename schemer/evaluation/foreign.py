"""Bridge between schemer values and host (Python) functions.

A foreign call resolves a dotted name such as `math.sqrt` or `str.upper`
in a trusted namespace (the interpreter's host namespace, then Python
builtins, then importable modules), converts the evaluated arguments to
native Python values, invokes the target and converts the result back.
No sandboxing or allow-listing is performed: the caller is trusted.
"""

from __future__ import annotations

import builtins
import importlib
import logging
from typing import TYPE_CHECKING, Any, Mapping

from schemer import Expression, SchemeValue
from schemer.errors import ArityError, ForeignCallError, SchemeError
from schemer.types.literal import Literal
from schemer.types.markers import ForeignFunction
from schemer.types.nil import Nil, NilType
from schemer.types.pair import Pair, make_list, to_list
from schemer.types.procedure import Procedure
from schemer.types.symbol import Symbol

if TYPE_CHECKING:
    from schemer.evaluation.evaluator import Evaluator

logger = logging.getLogger(__name__)


def resolve_host_object(path: str, namespace: Mapping[str, Any]) -> Any:
    """Resolve a dotted path to a Python object.

    The first component is looked up in `namespace`, then in builtins; if
    neither has it, the longest importable module prefix is imported. The
    remaining components are walked with getattr.
    """
    if not path:
        raise ForeignCallError("Host function name is empty")
    if path in namespace:
        return namespace[path]

    parts = path.split(".")
    first, rest = parts[0], parts[1:]
    if first in namespace:
        obj: Any = namespace[first]
    elif hasattr(builtins, first):
        obj = getattr(builtins, first)
    else:
        obj = None
        for i in range(len(parts), 0, -1):
            try:
                obj = importlib.import_module(".".join(parts[:i]))
            except ImportError:
                continue
            rest = parts[i:]
            break
        if obj is None:
            raise ForeignCallError(f"Cannot resolve host name {path}")

    # Walk remaining attributes/methods
    for attr in rest:
        try:
            obj = getattr(obj, attr)
        except AttributeError as exc:
            raise ForeignCallError(f"Cannot resolve host name {path}: no attribute {attr}") from exc
    return obj


def resolve_host_function(path: str, namespace: Mapping[str, Any]) -> Any:
    obj = resolve_host_object(path, namespace)
    if not callable(obj):
        raise ForeignCallError(f"Host name {path} is not callable")
    return obj


def host_name(value: SchemeValue) -> str:
    """The host name denoted by an evaluated name expression (string or symbol)."""
    match value:
        case Literal(kind="string"):
            return value.value
        case Symbol():
            return value.id
        case _:
            raise ForeignCallError(f"Host function name must be a string or symbol, got {value}")


def to_host(value: SchemeValue, evaluator: Evaluator) -> Any:
    """Convert an evaluated value to its native Python representation."""
    match value:
        case Literal():
            return value.value
        case Symbol():
            return value.id
        case NilType():
            return []
        case Pair() if value.is_proper():
            return [to_host(v, evaluator) for v in to_list(value)]
        case Pair():
            return (to_host(value.first, evaluator), to_host(value.rest, evaluator))
        case Procedure():
            return _host_callable(value, evaluator)
        case ForeignFunction(object_mode=False):
            if value.target is not None:
                return value.target
            return resolve_host_function(value.path, evaluator.host_namespace)
        case _:
            raise ForeignCallError(f"Cannot pass {value} to a host function")


def _host_callable(proc: Procedure, evaluator: Evaluator):
    def call(*args):
        result = evaluator.apply(proc, make_list(from_host(a) for a in args))
        return to_host(result, evaluator)

    call.__name__ = proc.name or "lambda"
    return call


def from_host(obj: Any) -> SchemeValue:
    """Convert a Python value returned by a host function to a schemer value."""
    match obj:
        case bool():
            return Literal.boolean(obj)
        case None:
            return Nil
        case int() | float():
            return Literal.number(obj)
        case str():
            return Literal.string(obj)
        case list() | tuple():
            return make_list(from_host(x) for x in obj)
        case Literal() | Symbol() | Pair() | NilType() | Procedure() | ForeignFunction():
            return obj
        case _:
            return Literal.host(obj)


def call_foreign(fn: ForeignFunction, args: Expression, evaluator: Evaluator) -> SchemeValue:
    """Invoke a foreign-call marker with already-evaluated arguments."""
    values = to_list(args)
    if fn.object_mode:
        if not values:
            raise ArityError(f"{fn} expects a method name")
        method, *values = values
        name = f"{fn.path}.{host_name(method)}"
        target = resolve_host_function(name, evaluator.host_namespace)
    else:
        name = fn.path
        target = fn.target if fn.target is not None else resolve_host_function(name, evaluator.host_namespace)

    native = [to_host(v, evaluator) for v in values]
    logger.debug("Calling host function %s with %r", name, native)
    try:
        result = target(*native)
    except (SchemeError, RecursionError):
        raise
    except Exception as exc:
        raise ForeignCallError(f"Host function {name} failed: {type(exc).__name__}: {exc}") from exc
    return from_host(result)
