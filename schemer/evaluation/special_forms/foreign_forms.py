"""Special forms: pyfunc and pyobj.

    (pyfunc "math.sqrt" 16)          ; => 4.0
    (define s (pyobj "str"))
    (s 'upper "abc")                 ; => "ABC"

The name expression is evaluated and must yield a string or a symbol. Name
resolution and argument marshalling live in schemer.evaluation.foreign.
"""

from __future__ import annotations

from schemer import EvaluatorCallbacks, Expression, SchemeValue
from schemer.errors import SchemeSyntaxError
from schemer.evaluation.foreign import host_name
from schemer.types.environment import Environment
from schemer.types.markers import ForeignFunction
from schemer.types.pair import Pair, make_list, to_list


def pyfunc_form(
    args: Expression,
    env: Environment,
    evaluator: EvaluatorCallbacks,
    _: bool,
) -> SchemeValue:
    """Call the named host function with the evaluated arguments."""
    if not isinstance(args, Pair):
        raise SchemeSyntaxError("pyfunc requires a function name")

    name = host_name(evaluator.evaluate(args.first, env))
    values = [evaluator.evaluate(a, env) for a in to_list(args.rest)]
    return evaluator.apply(ForeignFunction(name), make_list(values), env)


def pyobj_form(
    args: Expression,
    env: Environment,
    evaluator: EvaluatorCallbacks,
    _: bool,
) -> SchemeValue:
    """Return a marker whose application calls a method of the named host object."""
    operands = to_list(args)
    if len(operands) != 1:
        raise SchemeSyntaxError("pyobj expects exactly 1 argument: the object name")

    name = host_name(evaluator.evaluate(operands[0], env))
    return ForeignFunction(name, object_mode=True)
