import pytest

from schemer.errors import SchemeTypeError, UnboundVariableError
from schemer.types.environment import Environment
from schemer.types.literal import Literal
from schemer.types.symbol import Symbol

X = Symbol("x")
ONE = Literal.number(1)
TWO = Literal.number(2)


@pytest.fixture
def chain():
    root = Environment()
    child = Environment(outer=root)
    return root, child


def test_bind_and_lookup():
    env = Environment()
    env.bind(X, ONE)
    assert env.lookup(X) == ONE


def test_lookup_walks_outward(chain):
    root, child = chain
    root.bind(X, ONE)
    assert child.lookup(X) == ONE
    assert child.find(X) is root


def test_bind_shadows_without_altering_outer(chain):
    root, child = chain
    root.bind(X, ONE)
    child.bind(X, TWO)
    assert child.lookup(X) == TWO
    assert root.lookup(X) == ONE


def test_set_mutates_nearest_defining_frame(chain):
    root, child = chain
    root.bind(X, ONE)
    grandchild = Environment(outer=child)
    grandchild.set(X, TWO)
    assert root.lookup(X) == TWO
    assert X not in child.vars
    assert X not in grandchild.vars


def test_set_of_unbound_name_creates_global_binding(chain):
    root, child = chain
    child.set(X, ONE)
    assert root.vars[X] == ONE
    assert X not in child.vars


def test_unbound_lookup_raises_with_name():
    with pytest.raises(UnboundVariableError, match="foo") as info:
        Environment().lookup(Symbol("foo"))
    assert info.value.name == Symbol("foo")


def test_bind_requires_symbol():
    with pytest.raises(SchemeTypeError):
        Environment().bind("x", ONE)


def test_lookup_does_not_mutate(chain):
    root, child = chain
    root.bind(X, ONE)
    child.lookup(X)
    assert child.vars == {}


def test_update_binds_in_current_frame(chain):
    root, child = chain
    child.update({X: ONE, Symbol("y"): TWO})
    assert set(child.vars) == {X, Symbol("y")}
    assert root.vars == {}
