from schemer import EvaluatorCallbacks
from schemer import Expression, SchemeValue
from schemer.errors import SchemeSyntaxError
from schemer.types.environment import Environment
from schemer.types.literal import Literal
from schemer.types.pair import to_list


def _single_operand(name: str, args: Expression) -> Expression:
    operands = to_list(args)
    if len(operands) != 1:
        raise SchemeSyntaxError(f"{name} expects exactly 1 argument")
    return operands[0]


def quote_form(
    args: Expression, env: Environment, evaluator: EvaluatorCallbacks, _: bool
) -> SchemeValue:
    return _single_operand("quote", args)


def str_quote_form(
    args: Expression, env: Environment, evaluator: EvaluatorCallbacks, _: bool
) -> SchemeValue:
    """(str-quote expr): the printed form of expr's value as a string."""
    value = evaluator.evaluate(_single_operand("str-quote", args), env)
    if isinstance(value, Literal) and value.kind == "string":
        return value
    return Literal.string(str(value))
