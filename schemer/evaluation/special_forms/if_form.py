from schemer import EvaluatorCallbacks
from schemer import Expression, SchemeValue
from schemer.errors import SchemeSyntaxError
from schemer.types.environment import Environment
from schemer.types.literal import is_true
from schemer.types.nil import Nil
from schemer.types.pair import to_list


def if_form(
    args: Expression,
    env: Environment,
    evaluator: EvaluatorCallbacks,
    is_tail_call: bool = False,
) -> SchemeValue:
    operands = to_list(args)
    if len(operands) not in (2, 3):
        raise SchemeSyntaxError("if requires a condition, a then-expression and an optional else-expression")

    cond = evaluator.evaluate(operands[0], env)
    # Only #f is false
    if is_true(cond):
        return evaluator.evaluate(operands[1], env, is_tail_call)
    elif len(operands) > 2:
        return evaluator.evaluate(operands[2], env, is_tail_call)
    else:
        return Nil
