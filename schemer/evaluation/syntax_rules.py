"""syntax-rules: pattern compilation, matching and template expansion.

Each rule pattern is compiled into a small tree of Pattern objects:

- PatternVariable captures any single sub-expression
- PatternLiteral matches only an equal atom (literal identifiers and
  self-evaluating atoms such as numbers)
- PatternList matches a list element by element, optionally ending in a
  vararg (`p ...`, zero or more trailing elements) or a dotted tail

A failed match is not an error; the macro simply tries its next rule.
Variables captured under an ellipsis are bound to an EllipsisMatch holding
one capture per matched element, so templates can splice them back with
the same ellipsis.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from schemer import Expression
from schemer.errors import MacroMatchError, SchemeSyntaxError
from schemer.types.environment import Environment
from schemer.types.macro import Macro
from schemer.types.nil import Nil
from schemer.types.pair import Pair, iter_list, make_list
from schemer.types.symbol import ELLIPSIS, Symbol

logger = logging.getLogger(__name__)

WILDCARD = Symbol("_")

Bindings = dict[Symbol, Expression]


class EllipsisMatch(list):
    """The captures of one pattern variable under an ellipsis."""


class Pattern:
    def match(self, expr: Expression, bindings: Bindings) -> bool:
        raise NotImplementedError

    def variables(self) -> list[Symbol]:
        return []


class PatternVariable(Pattern):
    __slots__ = ("name",)

    def __init__(self, name: Symbol):
        self.name = name

    def match(self, expr: Expression, bindings: Bindings) -> bool:
        bindings[self.name] = expr
        return True

    def variables(self) -> list[Symbol]:
        return [self.name]

    def __repr__(self):
        return f"PatternVariable({self.name})"


class PatternWildcard(Pattern):
    def match(self, expr: Expression, bindings: Bindings) -> bool:
        return True

    def __repr__(self):
        return "PatternWildcard()"


class PatternLiteral(Pattern):
    __slots__ = ("value",)

    def __init__(self, value: Expression):
        self.value = value

    def match(self, expr: Expression, bindings: Bindings) -> bool:
        return expr == self.value

    def __repr__(self):
        return f"PatternLiteral({self.value})"


class PatternList(Pattern):
    __slots__ = ("items", "vararg", "tail")

    def __init__(
        self,
        items: list[Pattern],
        vararg: Optional[Pattern] = None,
        tail: Optional[Pattern] = None,
    ):
        self.items = items
        self.vararg = vararg
        self.tail = tail

    def match(self, expr: Expression, bindings: Bindings) -> bool:
        cell = expr
        for item in self.items:
            if not isinstance(cell, Pair):
                return False
            if not item.match(cell.first, bindings):
                return False
            cell = cell.rest

        if self.vararg is not None:
            captures: list[Bindings] = []
            while isinstance(cell, Pair):
                sub: Bindings = {}
                if not self.vararg.match(cell.first, sub):
                    return False
                captures.append(sub)
                cell = cell.rest
            if cell is not Nil:
                return False
            for name in self.vararg.variables():
                bindings[name] = EllipsisMatch(c[name] for c in captures)
            return True

        if self.tail is not None:
            return self.tail.match(cell, bindings)
        return cell is Nil

    def variables(self) -> list[Symbol]:
        names: list[Symbol] = []
        for item in self.items:
            names.extend(item.variables())
        if self.vararg is not None:
            names.extend(self.vararg.variables())
        if self.tail is not None:
            names.extend(self.tail.variables())
        return names

    def __repr__(self):
        return f"PatternList({self.items!r}, vararg={self.vararg!r}, tail={self.tail!r})"


def compile_pattern(expr: Expression, literals: frozenset[Symbol]) -> Pattern:
    """Classify every position of a (keyword-stripped) pattern."""
    match expr:
        case Symbol() if expr in literals:
            return PatternLiteral(expr)
        case Symbol() if expr == WILDCARD:
            return PatternWildcard()
        case Symbol() if expr == ELLIPSIS:
            raise SchemeSyntaxError("Ellipsis must follow a sub-pattern")
        case Symbol():
            return PatternVariable(expr)
        case Pair():
            return _compile_list(expr, literals)
        case _:
            # Nil, literals: must match exactly
            return PatternList([]) if expr is Nil else PatternLiteral(expr)


def _compile_list(expr: Pair, literals: frozenset[Symbol]) -> PatternList:
    items: list[Pattern] = []
    cell: Expression = expr
    while isinstance(cell, Pair):
        element = cell.first
        following = cell.rest
        if isinstance(following, Pair) and following.first == ELLIPSIS:
            if following.rest is not Nil:
                raise SchemeSyntaxError(
                    f"Ellipsis must end its pattern list: {expr}"
                )
            return PatternList(items, vararg=compile_pattern(element, literals))
        items.append(compile_pattern(element, literals))
        cell = following
    if cell is Nil:
        return PatternList(items)
    return PatternList(items, tail=compile_pattern(cell, literals))


class SyntaxRule:
    """One (pattern, template) pair with the rule's own keyword stripped."""

    __slots__ = ("pattern", "template")

    def __init__(self, pattern: Pattern, template: Expression):
        self.pattern = pattern
        self.template = template
        names = pattern.variables()
        duplicates = {n for n in names if names.count(n) > 1}
        if duplicates:
            raise SchemeSyntaxError(
                f"Duplicate pattern variables: {' '.join(sorted(map(str, duplicates)))}"
            )

    def match(self, args: Expression) -> Optional[Bindings]:
        bindings: Bindings = {}
        if self.pattern.match(args, bindings):
            return bindings
        return None

    def expand(self, bindings: Bindings, env: Environment) -> Expression:
        # Layer the captures over the defining environment
        frame = Environment(outer=env)
        for name, value in bindings.items():
            frame.bind(name, _flatten(value))
        return _expand(self.template, bindings, frame)

    def __str__(self) -> str:
        return f"{self.pattern!r} -> {self.template}"


def _flatten(value: Expression) -> Expression:
    """Turn (nested) ellipsis captures into ordinary lists."""
    if isinstance(value, EllipsisMatch):
        return make_list(_flatten(v) for v in value)
    return value


def _expand(template: Expression, bindings: Bindings, frame: Environment) -> Expression:
    match template:
        case Symbol() if template in bindings:
            return _flatten(bindings[template])
        case Symbol():
            # Names bound where the macro was defined are replaced by their value
            env = frame.find(template)
            return env.vars[template] if env is not None else template
        case Pair():
            return _expand_list(template, bindings, frame)
        case _:
            return template


def _expand_list(template: Pair, bindings: Bindings, frame: Environment) -> Expression:
    items: list[Expression] = []
    cell: Expression = template
    while isinstance(cell, Pair):
        element = cell.first
        following = cell.rest
        if isinstance(following, Pair) and following.first == ELLIPSIS:
            items.extend(_expand_ellipsis(element, bindings, frame))
            cell = following.rest
            continue
        items.append(_expand(element, bindings, frame))
        cell = following
    tail = Nil if cell is Nil else _expand(cell, bindings, frame)
    return make_list(items, tail)


def _expand_ellipsis(element: Expression, bindings: Bindings, frame: Environment) -> list[Expression]:
    names = {s for s in _symbols(element) if isinstance(bindings.get(s), EllipsisMatch)}
    if not names:
        raise MacroMatchError(f"Template {element} ... uses no ellipsis variable")
    counts = {len(bindings[s]) for s in names}
    if len(counts) != 1:
        raise MacroMatchError(
            f"Ellipsis variables in {element} captured different counts: {sorted(counts)}"
        )
    (count,) = counts
    expansions = []
    for i in range(count):
        local = dict(bindings)
        for name in names:
            local[name] = bindings[name][i]
        expansions.append(_expand(element, local, frame))
    return expansions


def _symbols(template: Expression) -> Iterator[Symbol]:
    if isinstance(template, Symbol):
        yield template
    while isinstance(template, Pair):
        yield from _symbols(template.first)
        template = template.rest
        if isinstance(template, Symbol):
            yield template


def compile_syntax_rules(spec: Expression, env: Environment, name: Optional[Symbol] = None) -> Macro:
    """Build a Macro from the operands of `(syntax-rules (literal...) rule...)`."""
    if not isinstance(spec, Pair):
        raise SchemeSyntaxError("syntax-rules requires a literal list")
    literals: list[Symbol] = []
    for lit in iter_list(spec.first):
        if not isinstance(lit, Symbol):
            raise SchemeSyntaxError(f"syntax-rules literal must be a symbol, got {lit}")
        literals.append(lit)
    literal_set = frozenset(literals)

    rules: list[SyntaxRule] = []
    for rule_expr in iter_list(spec.rest):
        parts = list(iter_list(rule_expr)) if isinstance(rule_expr, Pair) else []
        if len(parts) != 2 or not isinstance(parts[0], Pair):
            raise SchemeSyntaxError(f"Invalid syntax rule {rule_expr}: expected (pattern template)")
        pattern_expr, template = parts
        # The rule's own keyword is never matched
        rule = SyntaxRule(compile_pattern(pattern_expr.rest, literal_set), template)
        logger.debug("Creating rule for %s: %s", name, rule)
        rules.append(rule)

    return Macro(rules, literal_set, env, name)
