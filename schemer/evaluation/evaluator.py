"""Core evaluator and trampoline for the schemer interpreter.

Implements special-form dispatch, procedure/macro/foreign application and
tail-call aware evaluation via a simple trampoline using TailCall objects.
Special-form handlers and the foreign bridge call back in through
`Evaluator.evaluate` and `Evaluator.apply` only.
"""

from __future__ import annotations

from typing import Callable, Mapping, Optional

from schemer import Expression, SchemeValue
from schemer.errors import NotApplicableError, SchemeSyntaxError
from schemer.evaluation.foreign import call_foreign
from schemer.types.environment import Environment
from schemer.types.macro import Macro
from schemer.types.markers import ForeignFunction, SpecialFormMarker
from schemer.types.nil import Nil
from schemer.types.pair import Pair, make_list
from schemer.types.procedure import Procedure
from schemer.types.symbol import Symbol
from schemer.types.tail_call import TailCall

SpecialFormHandler = Callable[..., SchemeValue]


class Evaluator:
    """
    Evaluates expressions against an explicit special-form table and global
    environment. Each special form is also bound in the global environment
    to a SpecialFormMarker so it can be passed around and aliased.
    """

    def __init__(
        self,
        special_forms: Mapping[Symbol, SpecialFormHandler],
        global_env: Environment,
        host_namespace: Optional[Mapping[str, object]] = None,
    ):
        self.special_forms: dict[Symbol, SpecialFormHandler] = dict(special_forms)
        self.global_env = global_env
        # Names the foreign bridge resolves before builtins and modules
        self.host_namespace: dict[str, object] = dict(host_namespace or {})
        for name, handler in self.special_forms.items():
            global_env.bind(name, SpecialFormMarker(name, handler))

    def evaluate(
        self, expr: Expression, env: Optional[Environment] = None, is_tail_call: bool = False
    ) -> SchemeValue:
        """
        Trampoline evaluator. In tail position the work is deferred to the
        caller's trampoline by returning a TailCall.
        """
        if env is None:
            env = self.global_env
        if is_tail_call:
            return TailCall(expr, env)

        result = self.evaluate0(expr, env)
        while isinstance(result, TailCall):
            result = self.evaluate0(result.expr, result.env)
        return result

    def evaluate0(self, expr: Expression, env: Environment) -> SchemeValue:
        """
        Single evaluation step. Sub-forms in tail position come back as
        TailCall objects for the trampoline in `evaluate`.
        """
        match expr:
            case Symbol():
                return env.lookup(expr)
            case Pair(first=head, rest=args):
                # --- Special forms handling ---
                if isinstance(head, Symbol) and head in self.special_forms:
                    return self.special_forms[head](args, env, self, True)
                fn = self.evaluate(head, env)
                # Macros and special forms receive their operands unevaluated
                if isinstance(fn, (Macro, SpecialFormMarker)):
                    return self.apply(fn, args, env, True)
                values = self.evaluate_operands(args, env)
                return self.apply(fn, values, env, True)

        # --- Everything else is self-evaluating ---
        return expr

    def evaluate_operands(self, args: Expression, env: Environment) -> Expression:
        """Evaluate each element of a proper list left to right."""
        values = []
        cell = args
        while isinstance(cell, Pair):
            values.append(self.evaluate(cell.first, env))
            cell = cell.rest
        if cell is not Nil:
            raise SchemeSyntaxError(f"Improper argument list: {args}")
        return make_list(values)

    def apply(
        self, fn: SchemeValue, args: Expression, env: Optional[Environment] = None, is_tail_call: bool = False
    ) -> SchemeValue:
        """Apply a callable to an argument list.

        - Procedure: bind the (evaluated) arguments in a child of the captured
          environment and run the body; the last expression is in tail position.
        - Macro: expand the (unevaluated) arguments and evaluate the result in
          the environment of the use site.
        - SpecialFormMarker: hand the unevaluated arguments to the handler.
        - ForeignFunction: call the host function with marshalled arguments.
        """
        if env is None:
            env = self.global_env
        match fn:
            case Procedure():
                if not fn.body:
                    raise SchemeSyntaxError(f"Procedure {fn.name or fn} has an empty body")
                frame = fn.extend_env(args)
                for expr in fn.body[:-1]:
                    self.evaluate(expr, frame)
                return self.evaluate(fn.body[-1], frame, is_tail_call)
            case Macro():
                expansion = fn.transform(args)
                return self.evaluate(expansion, env, is_tail_call)
            case SpecialFormMarker():
                return fn.handler(args, env, self, is_tail_call)
            case ForeignFunction():
                return call_foreign(fn, args, self)
            case _:
                raise NotApplicableError(f"Cannot apply {fn}: not a procedure")
