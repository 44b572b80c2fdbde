import pytest

from schemer import config
from schemer.errors import (
    ArityError,
    ForeignCallError,
    MacroMatchError,
    NotApplicableError,
    SchemeError,
    SchemeSyntaxError,
    SchemeTypeError,
    UnboundVariableError,
)


def test_default_prelude_is_packaged(monkeypatch):
    monkeypatch.delenv("SCHEMER_PRELUDE_PATH", raising=False)
    path = config.get_prelude_path()
    assert path.name == "prelude.scm"
    assert path.is_file()


def test_prelude_path_file(tmp_path, monkeypatch):
    target = tmp_path / "custom.scm"
    monkeypatch.setenv("SCHEMER_PRELUDE_PATH", str(target))
    assert config.get_prelude_path() == target


@pytest.mark.parametrize("raw, expected", [(None, "WARNING"), ("debug", "DEBUG"), (" info ", "INFO")])
def test_log_level(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("SCHEMER_LOG_LEVEL", raising=False)
    else:
        monkeypatch.setenv("SCHEMER_LOG_LEVEL", raw)
    assert config.get_log_level() == expected


@pytest.mark.parametrize("raw, expected", [(None, None), ("5000", 5000), ("lots", None)])
def test_recursion_limit(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("SCHEMER_RECURSION_LIMIT", raising=False)
    else:
        monkeypatch.setenv("SCHEMER_RECURSION_LIMIT", raw)
    assert config.get_recursion_limit() == expected


@pytest.mark.parametrize(
    "error",
    [SchemeSyntaxError, ArityError, NotApplicableError, MacroMatchError, ForeignCallError, SchemeTypeError],
)
def test_errors_share_base(error):
    assert issubclass(error, SchemeError)


def test_unbound_variable_error_names_symbol():
    err = UnboundVariableError("foo")
    assert isinstance(err, SchemeError)
    assert str(err) == "Unbound variable: foo"
