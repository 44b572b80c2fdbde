from schemer import EvaluatorCallbacks
from schemer import Expression, SchemeValue
from schemer.errors import SchemeSyntaxError
from schemer.evaluation.bind import validate_params
from schemer.types.environment import Environment
from schemer.types.pair import Pair, to_list
from schemer.types.procedure import Procedure


def lambda_form(
    args: Expression,
    env: Environment,
    evaluator: EvaluatorCallbacks,
    _: bool,
) -> SchemeValue:
    """
    (lambda params body...)
    params is a list of symbols, a dotted list, or a single symbol that
    receives every argument. The body needs at least one expression.
    """
    if not isinstance(args, Pair):
        raise SchemeSyntaxError("lambda requires a parameter list")

    params = args.first
    validate_params(params)
    body = to_list(args.rest)
    if not body:
        raise SchemeSyntaxError("lambda body cannot be empty")

    return Procedure(params, body, env)
