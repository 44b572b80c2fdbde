"""Procedure (closure) representation for schemer."""

from __future__ import annotations

from io import StringIO
from typing import Optional

from schemer import Expression
from schemer.types.environment import Environment


class Procedure:
    """A first-class closure with a parameter list, a body and a captured env.

    `params` is a Symbol (variadic), a proper list of Symbols, or a dotted
    list whose tail Symbol collects the remaining arguments. `env` is the
    frame active when the lambda was evaluated; it is shared, never copied.
    """

    __slots__ = ("params", "body", "env", "name")

    def __init__(
        self,
        params: Expression,
        body: list[Expression],
        env: Environment,
        name: Optional[str] = None,
    ):
        self.params: Expression = params
        self.body: list[Expression] = body
        self.env: Environment = env
        self.name = name

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(λ ")
            buffer.write(str(self.params))
            for expr in self.body:
                buffer.write(" ")
                buffer.write(str(expr))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"<Procedure {self.name or 'anonymous'} {self.params}>"

    # --- Evaluation helpers ---
    def extend_env(self, args: Expression) -> Environment:
        """
        Bind the given argument values to this procedure's parameters and
        return a new Environment (child of the captured one) for the body.

        Delegates to the shared binder in schemer.evaluation.bind to keep a
        single source of truth for parameter-list semantics.
        """
        from schemer.evaluation.bind import bind_arguments
        return bind_arguments(self.params, args, self.env, self.name)
