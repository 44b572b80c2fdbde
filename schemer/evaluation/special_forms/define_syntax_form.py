"""Special form: define-syntax.

    (define-syntax name
      (syntax-rules (literal...)
        ((_ pattern...) template)
        ...))

Compiles the rules into a Macro that captures the current environment and
binds it to `name` like any other value.
"""

from __future__ import annotations

from schemer import EvaluatorCallbacks, Expression, SchemeValue
from schemer.errors import SchemeSyntaxError, SchemeTypeError
from schemer.evaluation.syntax_rules import compile_syntax_rules
from schemer.types.environment import Environment
from schemer.types.pair import Pair, to_list
from schemer.types.symbol import Symbol

SYNTAX_RULES = Symbol("syntax-rules")


def define_syntax_form(
    args: Expression,
    env: Environment,
    evaluator: EvaluatorCallbacks,
    _: bool,
) -> SchemeValue:
    operands = to_list(args)
    if len(operands) != 2:
        raise SchemeSyntaxError("define-syntax requires a name and a syntax-rules form")

    macro_name, spec = operands
    if not isinstance(macro_name, Symbol):
        raise SchemeTypeError(f"Macro name must be a Symbol, got {macro_name}")
    if not isinstance(spec, Pair) or spec.first != SYNTAX_RULES:
        raise SchemeSyntaxError(f"define-syntax {macro_name} expects (syntax-rules ...), got {spec}")

    macro = compile_syntax_rules(spec.rest, env, macro_name)
    env.bind(macro_name, macro)
    return macro
