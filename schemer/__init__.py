# Core type aliases for schemer's data model.
# Code and data share one representation: the expression classes in
# schemer.types (Symbol, Literal, Pair, Nil, Procedure, Macro and the two
# marker kinds). The aliases below only document intent at call sites.
#
# Naming guidance:
# - Expression: Use in reader/macro code to denote syntactic forms (code-as-data).
# - SchemeValue: Use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to `Any`; every value is also a valid expression.

from typing import Any, Protocol

# Runtime value alias
SchemeValue = Any
# Forms alias (used interchangeably with SchemeValue)
Expression = SchemeValue


class EvaluatorCallbacks(Protocol):
    """The narrow interface special forms and the macro expander call back into."""

    def evaluate(self, expr: Expression, env: Any, is_tail_call: bool = False) -> SchemeValue:
        ...

    def apply(self, fn: SchemeValue, args: Expression, env: Any, is_tail_call: bool = False) -> SchemeValue:
        ...


__version__ = "0.3.0"
