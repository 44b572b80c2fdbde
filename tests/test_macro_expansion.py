import pytest

from schemer.errors import MacroMatchError, SchemeSyntaxError
from schemer.evaluation.syntax_rules import compile_syntax_rules
from schemer.reader.parser import read
from schemer.types.environment import Environment
from schemer.types.macro import Macro
from schemer.types.symbol import Symbol


def _macro(source: str, env=None) -> Macro:
    """Compile the operands of a `(syntax-rules ...)` form."""
    (spec,) = read(source)
    return compile_syntax_rules(spec.rest, env or Environment(), Symbol("m"))


def _expand(macro: Macro, use: str) -> str:
    (expr,) = read(use)
    return str(macro.transform(expr.rest))


# -------------------------
# Expander
# -------------------------

def test_ellipsis_capture_and_splice():
    macro = _macro("(syntax-rules () ((_ a b ...) (list a (quote (b ...)) b ...)))")
    assert _expand(macro, "(m 1 2 3 4)") == "(list 1 '(2 3 4) 2 3 4)"


def test_ellipsis_matches_zero_elements():
    macro = _macro("(syntax-rules () ((_ a b ...) (f a b ...)))")
    assert _expand(macro, "(m 1)") == "(f 1)"


def test_first_matching_rule_wins():
    macro = _macro(
        "(syntax-rules () ((_) zero) ((_ x) one) ((_ x y) two) ((_ x ...) many))"
    )
    assert _expand(macro, "(m)") == "zero"
    assert _expand(macro, "(m 1)") == "one"
    assert _expand(macro, "(m 1 2)") == "two"
    assert _expand(macro, "(m 1 2 3)") == "many"


def test_no_rule_matched():
    macro = _macro("(syntax-rules () ((_ x) x))")
    with pytest.raises(MacroMatchError, match="No rule matched"):
        _expand(macro, "(m 1 2)")


def test_nested_list_patterns():
    macro = _macro("(syntax-rules () ((_ (a b) c) (c b a)))")
    assert _expand(macro, "(m (1 2) 3)") == "(3 2 1)"
    with pytest.raises(MacroMatchError):
        _expand(macro, "(m 1 3)")


def test_nested_ellipsis():
    macro = _macro("(syntax-rules () ((_ (k v ...) ...) (quote ((k . (v ...)) ...))))")
    assert _expand(macro, "(m (a 1 2) (b) (c 3))") == "'((a 1 2) (b) (c 3))"


def test_ellipsis_under_sub_pattern():
    macro = _macro("(syntax-rules () ((_ (name value) ...) ((lambda (name ...) 0) value ...)))")
    assert _expand(macro, "(m (x 1) (y 2))") == "((lambda (x y) 0) 1 2)"


def test_dotted_pattern_tail():
    macro = _macro("(syntax-rules () ((_ a . rest) (quote rest)))")
    assert _expand(macro, "(m 1 2 3)") == "'(2 3)"


def test_literals_require_exact_match():
    macro = _macro("(syntax-rules (=>) ((_ a => b) (b a)) ((_ a b c) (c b a)))")
    assert _expand(macro, "(m 1 => f)") == "(f 1)"
    assert _expand(macro, "(m 1 + f)") == "(f + 1)"


def test_literal_atoms_in_patterns():
    macro = _macro("(syntax-rules () ((_ 0) zero) ((_ n) other))")
    assert _expand(macro, "(m 0)") == "zero"
    assert _expand(macro, "(m 5)") == "other"


def test_wildcard_does_not_bind():
    macro = _macro("(syntax-rules () ((_ _ x) x))")
    assert _expand(macro, "(m 1 2)") == "2"


def test_unbound_template_symbols_stay_symbols():
    macro = _macro("(syntax-rules () ((_ x) (g x y)))")
    assert _expand(macro, "(m 1)") == "(g 1 y)"


@pytest.mark.parametrize(
    "source",
    [
        "(syntax-rules () ((_ a ... b) a))",
        "(syntax-rules () ((_ x x) x))",
        "(syntax-rules () (_ x))",
        "(syntax-rules () ((_ x)))",
        "(syntax-rules (1) ((_ x) x))",
    ],
)
def test_invalid_rules(source):
    with pytest.raises(SchemeSyntaxError):
        _macro(source)


def test_ellipsis_count_mismatch_in_template():
    macro = _macro("(syntax-rules () ((_ (a ...) (b ...)) (quote ((a b) ...))))")
    assert _expand(macro, "(m (1 2) (3 4))") == "'((1 3) (2 4))"
    with pytest.raises(MacroMatchError):
        _expand(macro, "(m (1 2) (3))")


# -------------------------
# Through the evaluator
# -------------------------

def test_define_syntax_binds_macro(interp):
    value = interp.eval("(define-syntax swap! (syntax-rules () ((_ a b) (begin (define tmp a) (set! a b) (set! b tmp)))))")
    assert isinstance(value, Macro)
    assert str(value) == "#<macro swap!>"
    assert isinstance(interp.eval("swap!"), Macro)


def test_macro_operands_are_not_evaluated(run):
    code = """
    (define-syntax my-quote (syntax-rules () ((_ x) (quote x))))
    (my-quote (undefined-fn 1 2))
    """
    assert run(code) == "(undefined-fn 1 2)"


def test_macro_expansion_with_ellipsis_evaluates(run):
    code = """
    (define-syntax my-list (syntax-rules () ((_ a b ...) (cons a (list b ...)))))
    (my-list 1 2 3 4)
    """
    assert run(code) == "(1 2 3 4)"


def test_expansion_evaluated_at_use_site(run):
    code = """
    (define-syntax get-x (syntax-rules () ((_) x)))
    (define (f x) (get-x))
    (f 7)
    """
    assert run(code) == "7"


def test_capture_is_possible(run):
    # The template's `tmp` shadows the caller's `tmp`, so the swap is lost
    code = """
    (define-syntax swap!
      (syntax-rules ()
        ((_ a b) ((lambda (tmp) (set! a b) (set! b tmp)) a))))
    (define (swap-tmp tmp other) (swap! tmp other) (cons tmp other))
    (define (swap-xy x y) (swap! x y) (cons x y))
    (cons (swap-tmp 1 2) (swap-xy 1 2))
    """
    assert run(code) == "((1 . 2) 2 . 1)"


def test_data_names_come_from_definition_env(run):
    code = """
    (define y 1)
    (define-syntax get-y (syntax-rules () ((_) y)))
    (define (h y) (get-y))
    (h 2)
    """
    assert run(code) == "1"


def test_template_names_resolve_at_expansion_time(run):
    code = """
    (define-syntax get-z (syntax-rules () ((_) z)))
    (define (f z) (get-z))
    (define first (f 5))
    (define z 10)
    (cons first (f 5))
    """
    assert run(code) == "(5 . 10)"


def test_template_uses_definition_env_procedures(run):
    code = """
    (define (helper x) (* x 10))
    (define-syntax scaled (syntax-rules () ((_ e) (helper e))))
    (define (g helper) (scaled 4))
    (g 'not-a-procedure)
    """
    assert run(code) == "40"


def test_recursive_macro(run):
    code = """
    (define-syntax my-or
      (syntax-rules ()
        ((_) #f)
        ((_ e rest ...) (if e e (my-or rest ...)))))
    (my-or #f #f 3)
    """
    assert run(code) == "3"


def test_define_syntax_requires_syntax_rules(interp):
    with pytest.raises(SchemeSyntaxError):
        interp.eval("(define-syntax m (lambda (x) x))")
