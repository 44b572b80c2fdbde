"""Special forms over pairs: cons, car, cdr and null?.

Each evaluates its operands before acting on them.
"""

from schemer import EvaluatorCallbacks
from schemer import Expression, SchemeValue
from schemer.errors import SchemeSyntaxError, SchemeTypeError
from schemer.types.environment import Environment
from schemer.types.literal import Literal
from schemer.types.nil import Nil
from schemer.types.pair import Pair, to_list


def _evaluate_operands(name: str, count: int, args: Expression, env: Environment, evaluator: EvaluatorCallbacks):
    operands = to_list(args)
    if len(operands) != count:
        raise SchemeSyntaxError(f"{name} expects exactly {count} argument{'s' if count > 1 else ''}")
    return [evaluator.evaluate(e, env) for e in operands]


def cons_form(args: Expression, env: Environment, evaluator: EvaluatorCallbacks, _: bool) -> SchemeValue:
    first, rest = _evaluate_operands("cons", 2, args, env, evaluator)
    return Pair(first, rest)


def car_form(args: Expression, env: Environment, evaluator: EvaluatorCallbacks, _: bool) -> SchemeValue:
    (value,) = _evaluate_operands("car", 1, args, env, evaluator)
    if not isinstance(value, Pair):
        raise SchemeTypeError(f"car expects a pair, got {value}")
    return value.first


def cdr_form(args: Expression, env: Environment, evaluator: EvaluatorCallbacks, _: bool) -> SchemeValue:
    (value,) = _evaluate_operands("cdr", 1, args, env, evaluator)
    if not isinstance(value, Pair):
        raise SchemeTypeError(f"cdr expects a pair, got {value}")
    return value.rest


def null_form(args: Expression, env: Environment, evaluator: EvaluatorCallbacks, _: bool) -> SchemeValue:
    (value,) = _evaluate_operands("null?", 1, args, env, evaluator)
    return Literal.boolean(value is Nil)
