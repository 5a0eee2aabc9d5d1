import pytest

from lispi import errors
from lispi.evaluation.evaluator import evaluate
from lispi.evaluation.special_forms.quote_forms import to_datum
from lispi.reader import read
from lispi.types.expr import Expr
from lispi.types.lambda_fn import Lambda
from lispi.types.values import (
    FALSE,
    TRUE,
    BigNumber,
    Keyword,
    ListValue,
    Nil,
    Number,
    String,
    SymbolValue,
)


# ------------------ Atoms ------------------

@pytest.mark.parametrize(
    "source, expected",
    [
        ("42", Number(42.0)),
        ('"hi"', String("hi")),
        ("true", TRUE),
        ("false", FALSE),
        (":key", Keyword("key")),
        ("()", ListValue(())),
        ("12345678901234567890", BigNumber(12345678901234567890)),
        ("[1 (+ 1 1) \"x\"]", ListValue((Number(1.0), Number(2.0), String("x")))),
    ]
)
def test_self_evaluating(run, source, expected):
    assert run(source) == expected


def test_big_number_prints_exact_digits(run):
    assert str(run("98765432109876543210")) == "98765432109876543210"


def test_unbound_symbol(run):
    with pytest.raises(errors.LispiUnboundSymbol, match="nope"):
        run("nope")


# ------------------ define / lambda ------------------

def test_define_and_lookup(run):
    assert run("(define x 5)") is Nil
    assert run("x") == Number(5.0)


def test_define_overwrites_in_current_scope(run):
    assert run("(define x 1) (define x 2) x") == Number(2.0)


def test_lambda_application(run):
    assert run("(define sq (lambda (x) (* x x))) (sq 4)") == Number(16.0)
    assert run("((lambda [a b] (- a b)) 10 3)") == Number(7.0)


def test_lambda_body_runs_in_order(run):
    assert run("((lambda (x) (define y (* x 2)) (+ y 1)) 5)") == Number(11.0)
    assert run("((lambda ()))") is Nil


def test_closure_captures_defining_scope(run):
    source = """
    (define make-adder (lambda (n) (lambda (x) (+ x n))))
    (define add5 (make-adder 5))
    (define add10 (make-adder 10))
    (list (add5 1) (add10 1))
    """
    assert run(source) == ListValue((Number(6.0), Number(11.0)))


def test_call_scope_does_not_leak(run):
    run("(define f (lambda (x) (define inner x) inner)) (f 3)")
    with pytest.raises(errors.LispiUnboundSymbol):
        run("inner")


def test_recursion(run):
    source = """
    (define fact (lambda (n) (if (<= n 1) 1 (* n (fact (- n 1))))))
    (fact 10)
    """
    assert run(source) == Number(3628800.0)


def test_arguments_evaluate_left_to_right(run):
    # the first failing argument decides the error
    with pytest.raises(errors.LispiEmptyListError):
        run("(list (first (list)) undefined-name)")
    with pytest.raises(errors.LispiUnboundSymbol):
        run("(list undefined-name (first (list)))")


def test_lambda_value(run):
    fn = run("(lambda (a b) a)")
    assert isinstance(fn, Lambda)
    assert fn.formals == ("a", "b")


@pytest.mark.parametrize(
    "source, error",
    [
        ("((lambda (x) x))", errors.LispiArityError),
        ("((lambda (x) x) 1 2)", errors.LispiArityError),
        ("(lambda)", errors.LispiArityError),
        ("(lambda x x)", errors.LispiTypeError),
        ("(lambda (1) 1)", errors.LispiTypeError),
        ("(lambda (a a) a)", errors.LispiTypeError),
        ("(define 1 2)", errors.LispiInvalidSymbol),
        ("(define x)", errors.LispiArityError),
        ("(1 2)", errors.LispiTypeError),
        ('("f")', errors.LispiTypeError),
        ("(quote)", errors.LispiArityError),
        ("(quote a b)", errors.LispiArityError),
    ]
)
def test_form_errors(run, source, error):
    with pytest.raises(error):
        run(source)


# ------------------ if / let / do ------------------

@pytest.mark.parametrize(
    "source, expected",
    [
        ("(if true 1 2)", Number(1.0)),
        ("(if false 1 2)", Number(2.0)),
        ("(if 0 1 2)", Number(1.0)),
        ("(if (list) 1 2)", Number(1.0)),
        ("(if (if false 1) 1 2)", Number(2.0)),
        ("(if (< 1 2) \"yes\" \"no\")", String("yes")),
    ]
)
def test_if(run, source, expected):
    assert run(source) == expected


def test_if_without_else_yields_nil(run):
    assert run("(if false 1)") is Nil


def test_if_evaluates_only_the_taken_branch(run):
    assert run("(if true 1 undefined-name)") == Number(1.0)


@pytest.mark.parametrize("source", ["(if)", "(if true)", "(if true 1 2 3)"])
def test_if_arity(run, source):
    with pytest.raises(errors.LispiArityError):
        run(source)


def test_let(run):
    assert run("(let ((x 1) (y 2)) (+ x y))") == Number(3.0)
    assert run("(let ([x 1]) x)") == Number(1.0)
    assert run("(let () 5)") == Number(5.0)


def test_let_inits_see_outer_scope(run):
    assert run("(define x 10) (let ((x 1) (y x)) y)") == Number(10.0)
    assert run("x") == Number(10.0)


@pytest.mark.parametrize(
    "source, error",
    [
        ("(let)", errors.LispiArityError),
        ("(let x 1)", errors.LispiTypeError),
        ("(let ((x)) x)", errors.LispiTypeError),
        ("(let ((1 2)) 1)", errors.LispiTypeError),
    ]
)
def test_let_errors(run, source, error):
    with pytest.raises(error):
        run(source)


def test_do_and_begin(run):
    assert run("(do 1 2 3)") == Number(3.0)
    assert run("(begin (define z 4) (* z z))") == Number(16.0)
    assert run("(do)") is Nil


# ------------------ and / or ------------------

@pytest.mark.parametrize(
    "source, expected",
    [
        ("(and)", TRUE),
        ("(and 1 2)", Number(2.0)),
        ("(and 1 false 2)", FALSE),
        ("(or)", FALSE),
        ("(or false 3)", Number(3.0)),
        ("(or false false)", FALSE),
        ("(and false undefined-name)", FALSE),
        ("(or 1 undefined-name)", Number(1.0)),
    ]
)
def test_logic_forms(run, source, expected):
    assert run(source) == expected


# ------------------ quote ------------------

@pytest.mark.parametrize(
    "source, expected",
    [
        ("'x", SymbolValue("x")),
        ("'42", Number(42.0)),
        ("'(1 a \"s\")", ListValue((Number(1.0), SymbolValue("a"), String("s")))),
        ("'[a :k]", ListValue((SymbolValue("a"), Keyword("k")))),
        ("''a", ListValue((SymbolValue("quote"), SymbolValue("a")))),
        ("'(import m)", ListValue((SymbolValue("import"), SymbolValue("m")))),
        ("'(require \"f\" :as m)",
         ListValue((SymbolValue("require"), String("f"), Keyword("as"), SymbolValue("m")))),
        ("'(module m (export a) 1)",
         ListValue((SymbolValue("module"), SymbolValue("m"),
                    ListValue((SymbolValue("export"), SymbolValue("a"))), Number(1.0)))),
    ]
)
def test_quote(run, source, expected):
    assert run(source) == expected


def test_quoted_list_is_data(run):
    assert run("(first '(a b))") == SymbolValue("a")
    assert run("(length '(undefined-a undefined-b))") == Number(2.0)


# ------------------ trees are reusable ------------------

def test_same_tree_evaluates_repeatedly(env, context):
    expr = read("(cons 1 (list 2 3))")
    first = evaluate(expr, env, context)
    second = evaluate(expr, env, context)
    assert first == second
    assert first is not second


def test_quote_rejects_unknown_nodes():
    with pytest.raises(errors.LispiTypeError, match="Cannot quote"):
        to_datum(Expr())


# ------------------ set ------------------

def test_set_updates_enclosing_binding(run):
    source = """
    (define counter 0)
    (define bump (lambda () (set counter (+ counter 1))))
    (bump)
    (bump)
    """
    assert run(source) == Number(2.0)
    assert run("counter") == Number(2.0)


def test_set_through_closure_scope(run):
    source = """
    (define make-counter
      (lambda ()
        (let ((n 0))
          (lambda () (set n (+ n 1))))))
    (define c (make-counter))
    (c)
    (c)
    """
    assert run(source) == Number(2.0)


@pytest.mark.parametrize(
    "source, error",
    [
        ("(set never-defined 1)", errors.LispiUnboundSymbol),
        ("(set x)", errors.LispiArityError),
        ("(set 1 2)", errors.LispiInvalidSymbol),
    ]
)
def test_set_errors(run, source, error):
    with pytest.raises(error):
        run(source)
