from schemer import Expression
from schemer.types.environment import Environment


class TailCall:
    """A deferred evaluation of `expr` in `env`, consumed by the trampoline."""

    __slots__ = ("expr", "env")

    def __init__(self, expr: Expression, env: Environment):
        self.expr = expr
        self.env = env
