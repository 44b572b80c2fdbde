import sys

import pytest

from schemer.interpreter import Interpreter


def test_large_tail_recursive_loop_runs_without_exception():
    """Tail calls run in constant host stack: the loop is far deeper than the recursion limit."""
    interp = Interpreter()
    depth = sys.getrecursionlimit() * 5

    program = f"""
    (define (count-down n acc)
      (if (= n 0)
          acc
          (count-down (- n 1) (+ acc 1))))
    (count-down {depth} 0)
    """

    assert str(interp.eval(program)) == str(depth)


def test_mutual_tail_recursion():
    interp = Interpreter()
    program = """
    (define (even? n) (if (= n 0) #t (odd? (- n 1))))
    (define (odd? n) (if (= n 0) #f (even? (- n 1))))
    (even? 10001)
    """
    assert str(interp.eval(program)) == "#f"


def test_tail_calls_through_begin_and_macros():
    interp = Interpreter()
    program = """
    (define (loop n)
      (cond ((= n 0) 'done)
            (else (begin (loop (- n 1))))))
    (loop 20000)
    """
    assert str(interp.eval(program)) == "done"


def test_deep_non_tail_recursion_is_reported_by_repl():
    interp = Interpreter()
    interp.eval("(define (sum n) (if (= n 0) 0 (+ n (sum (- n 1)))))")
    (record,) = interp.repl("(sum 1000000)")
    assert record.is_error
    assert "recursion" in record.text.lower()
    (after,) = interp.repl("(sum 10)")
    assert after.text == "55"


def test_deep_non_tail_recursion_propagates_from_load():
    interp = Interpreter()
    with pytest.raises(RecursionError):
        interp.load("(define (sum n) (if (= n 0) 0 (+ n (sum (- n 1))))) (sum 1000000)")
