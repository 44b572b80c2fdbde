from schemer import EvaluatorCallbacks
from schemer import Expression, SchemeValue
from schemer.errors import SchemeSyntaxError, SchemeTypeError
from schemer.types.environment import Environment
from schemer.types.markers import SpecialFormMarker
from schemer.types.nil import Nil
from schemer.types.pair import Pair, make_list, to_list
from schemer.types.symbol import QUOTE


def apply_form(
    args: Expression,
    env: Environment,
    evaluator: EvaluatorCallbacks,
    is_tail_call: bool = False,
) -> SchemeValue:
    """
    (apply fn args)
    Evaluates both operands; `args` must evaluate to a proper list, which is
    passed to `fn` as its already-evaluated argument list.
    """
    operands = to_list(args)
    if len(operands) != 2:
        raise SchemeSyntaxError(
            "apply expects exactly two arguments: function and argument list"
        )

    fn_expr, args_expr = operands
    fn_val = evaluator.evaluate(fn_expr, env)
    args_val = evaluator.evaluate(args_expr, env)

    if args_val is not Nil and not (isinstance(args_val, Pair) and args_val.is_proper()):
        raise SchemeTypeError(f"apply arguments must evaluate to a list, got {args_val}")

    # Special forms evaluate their own operands: quote each value
    if isinstance(fn_val, SpecialFormMarker):
        args_val = make_list(make_list([QUOTE, v]) for v in to_list(args_val))

    return evaluator.apply(fn_val, args_val, env, is_tail_call)
