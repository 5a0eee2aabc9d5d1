import logging

import pytest

from lispi import errors
from lispi.interpreter import Interpreter
from lispi.modules.loader import FileSourceLoader, MemorySourceLoader
from lispi.modules.registry import ModuleRegistry
from lispi.types.values import ListValue, Nil, Number, String


def test_eval_returns_last_value():
    interp = Interpreter(MemorySourceLoader({}))
    assert interp.eval("(define x 2) (* x 21)") == Number(42.0)
    assert interp.eval("") is Nil


def test_state_persists_between_calls():
    interp = Interpreter(MemorySourceLoader({}))
    interp.eval("(define xs (list 1 2))")
    assert interp.eval("(cons 0 xs)") == ListValue((Number(0.0), Number(1.0), Number(2.0)))


def test_prelude_runs_first():
    interp = Interpreter(
        MemorySourceLoader({}),
        prelude='(define greet (lambda (n) (list "hi" n)))',
    )
    assert interp.eval('(greet "bob")') == ListValue((String("hi"), String("bob")))


def test_default_loader_reads_files():
    assert isinstance(Interpreter().context.loader, FileSourceLoader)


def test_interpreters_do_not_share_modules():
    a = Interpreter(MemorySourceLoader({}))
    b = Interpreter(MemorySourceLoader({}))
    a.eval("(module m (export x) (define x 1))")
    with pytest.raises(errors.LispiModuleNotFound):
        b.eval("(import m)")


def test_shared_registry_is_opt_in():
    registry = ModuleRegistry()
    a = Interpreter(MemorySourceLoader({}), registry=registry)
    b = Interpreter(MemorySourceLoader({}), registry=registry)
    a.eval("(module m (export x) (define x 1))")
    b.eval("(import m)")
    assert b.eval("x") == Number(1.0)


def test_errors_leave_interpreter_usable():
    interp = Interpreter(MemorySourceLoader({}))
    with pytest.raises(errors.LispiParseError):
        interp.eval("(+ 1")
    with pytest.raises(errors.LispiEvalError):
        interp.eval("(first (list))")
    assert interp.eval("(+ 1 1)") == Number(2.0)


def test_require_logs_at_debug(caplog):
    interp = Interpreter(MemorySourceLoader({
        "m.lisp": "(module m (export a) (define a 1))",
    }))
    with caplog.at_level(logging.DEBUG, logger="lispi"):
        interp.eval('(require "m.lisp")')
        interp.eval('(require "m.lisp")')
    messages = [r.getMessage() for r in caplog.records]
    assert "Registered module m exporting a" in messages
    assert "Require m.lisp: already loaded" in messages
