import pytest

from schemer.interpreter import Interpreter


@pytest.fixture
def interp():
    """Interpreter with the standard prelude loaded."""
    return Interpreter()


@pytest.fixture
def bare_interp():
    """Interpreter with builtins and special forms only."""
    return Interpreter(prelude=None)


@pytest.fixture
def run(interp):
    """Evaluate code and return the printed form of the last value."""

    def _run(code: str) -> str:
        return str(interp.eval(code))

    return _run
