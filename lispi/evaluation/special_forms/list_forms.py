"""Built-in list primitives: list, empty?, length, first, rest, cons.

Each form evaluates its own argument expressions, checks the argument count
and the kind of each value, and builds a fresh tuple for any list it returns.
"""

from lispi import EvaluatorFn, LispValue, SExpression
from lispi.errors import LispiArityError, LispiEmptyListError, LispiTypeError
from lispi.types.environment import Environment
from lispi.types.values import FALSE, TRUE, ListValue, Number


def _expect_args(form: str, tail: list[SExpression], count: int) -> None:
    if len(tail) != count:
        noun = "argument" if count == 1 else "arguments"
        raise LispiArityError(f"{form} requires exactly {count} {noun}, got {len(tail)}")


def _expect_list(form: str, value: LispValue, position: str = "argument") -> ListValue:
    if not isinstance(value, ListValue):
        raise LispiTypeError(f"{form} {position} must be a list, got {value.type_name}")
    return value


def list_form(
    tail: list[SExpression], env: Environment, context, evaluate_fn: EvaluatorFn
) -> LispValue:
    """(list a b ...) -> a new list of the evaluated arguments, in order."""
    return ListValue(tuple(evaluate_fn(e, env, context) for e in tail))


def empty_form(
    tail: list[SExpression], env: Environment, context, evaluate_fn: EvaluatorFn
) -> LispValue:
    _expect_args("empty?", tail, 1)
    lst = _expect_list("empty?", evaluate_fn(tail[0], env, context))
    return TRUE if not lst.elements else FALSE


def length_form(
    tail: list[SExpression], env: Environment, context, evaluate_fn: EvaluatorFn
) -> LispValue:
    _expect_args("length", tail, 1)
    lst = _expect_list("length", evaluate_fn(tail[0], env, context))
    return Number(float(len(lst.elements)))


def first_form(
    tail: list[SExpression], env: Environment, context, evaluate_fn: EvaluatorFn
) -> LispValue:
    _expect_args("first", tail, 1)
    lst = _expect_list("first", evaluate_fn(tail[0], env, context))
    if not lst.elements:
        raise LispiEmptyListError("first of empty list")
    return lst.elements[0]


def rest_form(
    tail: list[SExpression], env: Environment, context, evaluate_fn: EvaluatorFn
) -> LispValue:
    _expect_args("rest", tail, 1)
    lst = _expect_list("rest", evaluate_fn(tail[0], env, context))
    if not lst.elements:
        raise LispiEmptyListError("rest of empty list")
    return ListValue(lst.elements[1:])


def cons_form(
    tail: list[SExpression], env: Environment, context, evaluate_fn: EvaluatorFn
) -> LispValue:
    """(cons x lst) -> a new list with x in front of the elements of lst."""
    _expect_args("cons", tail, 2)
    head = evaluate_fn(tail[0], env, context)
    lst = _expect_list("cons", evaluate_fn(tail[1], env, context), "second argument")
    return ListValue((head,) + lst.elements)
