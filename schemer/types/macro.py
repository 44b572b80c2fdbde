"""Macro values produced by `define-syntax`."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from schemer import Expression
from schemer.errors import MacroMatchError
from schemer.types.environment import Environment
from schemer.types.pair import Pair
from schemer.types.symbol import Symbol

if TYPE_CHECKING:
    from schemer.evaluation.syntax_rules import SyntaxRule

logger = logging.getLogger(__name__)


class Macro:
    """
    An ordered list of syntax rules plus the environment the macro was
    defined in. Expansion is non-hygienic: names the template introduces
    that the defining environment does not bind are resolved at the use site.
    """

    __slots__ = ("name", "literals", "rules", "env")

    def __init__(
        self,
        rules: list[SyntaxRule],
        literals: frozenset[Symbol],
        env: Environment,
        name: Optional[Symbol] = None,
    ):
        self.rules = rules
        self.literals = literals
        self.env = env
        self.name = name

    def transform(self, args: Expression) -> Expression:
        """Rewrite the (unevaluated) argument list with the first matching rule."""
        for index, rule in enumerate(self.rules):
            bindings = rule.match(args)
            if bindings is None:
                continue
            expansion = rule.expand(bindings, self.env)
            logger.debug("Expanded %s with rule %d: %s", self.name, index, expansion)
            return expansion
        use = Pair(self.name or Symbol("_"), args)
        raise MacroMatchError(f"No rule matched {use} for macro {self.name}")

    def __str__(self) -> str:
        return f"#<macro {self.name}>" if self.name is not None else "#<macro>"

    __repr__ = __str__
