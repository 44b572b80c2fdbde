from schemer import EvaluatorCallbacks
from schemer import Expression, SchemeValue
from schemer.types.environment import Environment
from schemer.types.nil import Nil
from schemer.types.pair import to_list


def begin_form(
    args: Expression,
    env: Environment,
    evaluator: EvaluatorCallbacks,
    is_tail_call: bool = False,
) -> SchemeValue:
    body = to_list(args)
    result: SchemeValue = Nil
    for e in body[:-1]:
        evaluator.evaluate(e, env)
    if body:
        result = evaluator.evaluate(body[-1], env, is_tail_call)
    return result
