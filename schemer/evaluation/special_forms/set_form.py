from schemer import EvaluatorCallbacks
from schemer import Expression, SchemeValue
from schemer.errors import SchemeSyntaxError, SchemeTypeError
from schemer.types.environment import Environment
from schemer.types.pair import to_list
from schemer.types.symbol import Symbol


def set_form(
    args: Expression,
    env: Environment,
    evaluator: EvaluatorCallbacks,
    _: bool,
) -> SchemeValue:
    """
    (set! name value)
    Mutates the nearest frame binding `name`; a name bound nowhere becomes
    a new global binding. Returns the value.
    """
    operands = to_list(args)
    if len(operands) != 2:
        raise SchemeSyntaxError("set! requires exactly 2 arguments: (set! var value)")
    var_sym, val_expr = operands
    if not isinstance(var_sym, Symbol):
        raise SchemeTypeError(f"set! first argument must be a Symbol, got {var_sym}")
    value = evaluator.evaluate(val_expr, env)
    env.set(var_sym, value)

    return value
