"""Built-in functions for the lispi runtime environment.

Arithmetic, comparison, equality and type predicates exposed to Lisp code as
Builtin values. Each takes (env, args) with already-evaluated arguments.

Arithmetic stays exact (BigNumber) when a BigNumber is involved and every
operand is integral; otherwise it is carried out in floating point.
"""
from __future__ import annotations

from typing import Callable

from lispi import LispValue
from lispi.errors import LispiArityError, LispiEvalError, LispiTypeError
from lispi.types.environment import Environment
from lispi.types.values import (
    FALSE,
    TRUE,
    BigNumber,
    Boolean,
    Builtin,
    ListValue,
    Number,
    String,
    SymbolValue,
    is_truthy,
)


def _numeric(name: str, value: LispValue) -> int | float:
    if isinstance(value, Number):
        return value.value
    if isinstance(value, BigNumber):
        return value.value
    raise LispiTypeError(f"All arguments to {name} must be numbers, got {value.type_name}")


def _exact(args: list[LispValue]) -> bool:
    """True when integer arithmetic keeps every digit of the result."""
    if not any(isinstance(a, BigNumber) for a in args):
        return False
    return all(isinstance(a, BigNumber) or float(a.value).is_integer() for a in args)


def _result(value: int | float, exact: bool) -> LispValue:
    if exact:
        return BigNumber(int(value))
    return Number(float(value))


def _inexact(name: str, n: int | float) -> float:
    """Convert an operand for floating point arithmetic."""
    try:
        return float(n)
    except OverflowError as err:
        raise LispiEvalError(f"{name}: operand is out of float range") from err


def _operands(name: str, args: list[LispValue]) -> tuple[list[int | float], bool]:
    nums = [_numeric(name, a) for a in args]
    if _exact(args):
        return [int(n) for n in nums], True
    return [_inexact(name, n) for n in nums], False


def _at_least(name: str, args: list[LispValue], count: int) -> None:
    if len(args) < count:
        raise LispiArityError(f"{name} requires at least {count} argument(s)")


def _exactly(name: str, args: list[LispValue], count: int) -> None:
    if len(args) != count:
        raise LispiArityError(f"{name} requires exactly {count} argument(s), got {len(args)}")


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[LispValue]) -> LispValue:
    nums, exact = _operands("+", args)
    return _result(sum(nums), exact)


def sub(env: Environment, args: list[LispValue]) -> LispValue:
    _at_least("-", args, 1)
    nums, exact = _operands("-", args)
    if len(nums) == 1:
        return _result(-nums[0], exact)
    result = nums[0]
    for x in nums[1:]:
        result -= x
    return _result(result, exact)


def mul(env: Environment, args: list[LispValue]) -> LispValue:
    nums, exact = _operands("*", args)
    result: int | float = 1
    for x in nums:
        result *= x
    return _result(result, exact)


def div(env: Environment, args: list[LispValue]) -> LispValue:
    _at_least("/", args, 1)
    nums, exact = _operands("/", args)
    if len(nums) == 1:
        nums = [1] + nums
    result = nums[0]
    for x in nums[1:]:
        if x == 0:
            raise LispiEvalError("Division by zero")
        if exact and result % x == 0:
            result //= x
            continue
        if exact:
            # A remainder leaves integer arithmetic for the rest of the chain
            exact = False
            result = _inexact("/", result)
        result /= _inexact("/", x)
    return _result(result, exact)


def mod(env: Environment, args: list[LispValue]) -> LispValue:
    _exactly("%", args, 2)
    (a, b), exact = _operands("%", args)
    if b == 0:
        raise LispiEvalError("Division by zero")
    return _result(a % b, exact)


# -------------------------------
# Equality and comparison
# -------------------------------
def is_equal(a: LispValue, b: LispValue) -> bool:
    """Deep equality; numbers compare by value across Number and BigNumber."""
    if a is b:
        return True
    if isinstance(a, (Number, BigNumber)) and isinstance(b, (Number, BigNumber)):
        return a.value == b.value
    if isinstance(a, ListValue) and isinstance(b, ListValue):
        if len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a, b))
    return a == b


def equals(env: Environment, args: list[LispValue]) -> Boolean:
    _at_least("=", args, 1)
    first = args[0]
    return TRUE if all(is_equal(first, other) for other in args[1:]) else FALSE


def not_equals(env: Environment, args: list[LispValue]) -> Boolean:
    _exactly("!=", args, 2)
    return FALSE if is_equal(args[0], args[1]) else TRUE


def _comparison(name: str, op: Callable[[int | float, int | float], bool]):
    def compare(env: Environment, args: list[LispValue]) -> Boolean:
        _at_least(name, args, 2)
        nums = [_numeric(name, a) for a in args]
        return TRUE if all(op(a, b) for a, b in zip(nums, nums[1:])) else FALSE
    return compare


lt = _comparison("<", lambda a, b: a < b)
lte = _comparison("<=", lambda a, b: a <= b)
gt = _comparison(">", lambda a, b: a > b)
gte = _comparison(">=", lambda a, b: a >= b)


# -------------------------------
# Boolean logic and predicates
# -------------------------------
def logical_not(env: Environment, args: list[LispValue]) -> Boolean:
    _exactly("not", args, 1)
    return FALSE if is_truthy(args[0]) else TRUE


def _predicate(name: str, *kinds: type):
    def check(env: Environment, args: list[LispValue]) -> Boolean:
        _exactly(name, args, 1)
        return TRUE if isinstance(args[0], kinds) else FALSE
    return check


# -------------------------------
# Registration
# -------------------------------
BUILTINS: dict[str, Callable[[Environment, list[LispValue]], LispValue]] = {
    '+': add,
    '-': sub,
    '*': mul,
    '/': div,
    '%': mod,
    '=': equals,
    '!=': not_equals,
    '<': lt,
    '<=': lte,
    '>': gt,
    '>=': gte,
    'not': logical_not,
    'number?': _predicate('number?', Number, BigNumber),
    'string?': _predicate('string?', String),
    'list?': _predicate('list?', ListValue),
    'symbol?': _predicate('symbol?', SymbolValue),
}


def register(env: Environment) -> None:
    env.update({name: Builtin(name, fn) for name, fn in BUILTINS.items()})
