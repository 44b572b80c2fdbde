import pytest

from schemer.builtin.env_builtin import add, div, equals, lt, mod, mul, sub
from schemer.errors import ArityError, SchemeTypeError


@pytest.mark.parametrize(
    "fn, args, expected",
    [
        (add, (), 0),
        (add, (1, 2.5), 3.5),
        (sub, (4,), -4),
        (sub, (10, 1, 2), 7),
        (mul, (), 1),
        (mul, (2, 3), 6),
        (div, (2,), 0.5),
        (div, (8, 2, 2), 2),
        (div, (7, 2), 3.5),
        (div, (6.0, 3), 2.0),
        (mod, (7, 3), 1),
        (equals, (1, 1, 1), True),
        (equals, (1, 1.0), True),
        (equals, (1, 2), False),
        (lt, (1, 2, 2), False),
    ],
)
def test_builtins(fn, args, expected):
    result = fn(*args)
    assert result == expected
    assert type(result) is type(expected)


@pytest.mark.parametrize(
    "fn, args, error",
    [
        (add, (1, "2"), SchemeTypeError),
        (add, (True,), SchemeTypeError),
        (lt, (1, "a"), SchemeTypeError),
        (equals, (1, True), SchemeTypeError),
        (equals, (0, False), SchemeTypeError),
        (equals, ("a", "a"), SchemeTypeError),
        (div, (1, 0), SchemeTypeError),
        (mod, (1, 0), SchemeTypeError),
        (sub, (), ArityError),
        (div, (), ArityError),
        (mod, (1,), ArityError),
        (lt, (1,), ArityError),
    ],
)
def test_builtin_errors(fn, args, error):
    with pytest.raises(error):
        fn(*args)


def test_type_errors_surface_through_evaluator(interp):
    with pytest.raises(SchemeTypeError):
        interp.eval('(+ 1 "two")')


@pytest.mark.parametrize("code", ["(= 1 #t)", "(= 0 #f)", "(= \"a\" 'a)", "(= 'a 'a)"])
def test_equals_rejects_non_numbers(interp, code):
    with pytest.raises(SchemeTypeError):
        interp.eval(code)


def test_builtins_print_as_foreign(run):
    assert run("+") == "#<foreign +>"
