from lispi import EvaluatorFn
from lispi import SExpression, LispValue
from lispi.errors import LispiArityError, LispiInvalidSymbol
from lispi.types.environment import Environment
from lispi.types.expr import SymbolExpr
from lispi.types.values import Nil


def define_form(
    tail: list[SExpression],
    env: Environment,
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (define name value)
    Binds in the current scope only; returns nil.
    """
    if len(tail) != 2:
        raise LispiArityError("define requires exactly 2 arguments")

    name, val_expr = tail
    if not isinstance(name, SymbolExpr):
        raise LispiInvalidSymbol(f"define name must be a symbol, got {name!r}")
    value = evaluate_fn(val_expr, env, context)
    env.define(name.name, value)
    return Nil
