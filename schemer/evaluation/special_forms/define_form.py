from schemer import EvaluatorCallbacks
from schemer import Expression, SchemeValue
from schemer.errors import SchemeSyntaxError, SchemeTypeError
from schemer.types.environment import Environment
from schemer.types.pair import Pair, make_list, to_list
from schemer.types.procedure import Procedure
from schemer.types.symbol import Symbol

LAMBDA = Symbol("lambda")


def define_form(
    args: Expression,
    env: Environment,
    evaluator: EvaluatorCallbacks,
    is_tail_call: bool = False,
) -> SchemeValue:
    """
    (define name value)
    (define (name . params) body...) is rewritten to
    (define name (lambda params body...)).
    Binds in the current frame and returns the value.
    """
    if not isinstance(args, Pair):
        raise SchemeSyntaxError("define requires a name and a value")

    target = args.first
    if isinstance(target, Pair):
        name, params = target.first, target.rest
        lambda_expr = Pair(LAMBDA, Pair(params, args.rest))
        return define_form(make_list([name, lambda_expr]), env, evaluator, is_tail_call)

    operands = to_list(args)
    if len(operands) != 2:
        raise SchemeSyntaxError(f"define requires exactly 2 arguments, got {len(operands)}")
    name, val_expr = operands
    if not isinstance(name, Symbol):
        raise SchemeTypeError(f"define name must be a Symbol, got {name}")

    value = evaluator.evaluate(val_expr, env)
    if isinstance(value, Procedure) and value.name is None:
        value.name = name.id
    env.bind(name, value)
    return value
