from lispi import EvaluatorFn
from lispi import SExpression, LispValue
from lispi.errors import LispiArityError, LispiInvalidSymbol
from lispi.types.environment import Environment
from lispi.types.expr import SymbolExpr


def set_form(
    tail: list[SExpression],
    env: Environment,
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) != 2:
        raise LispiArityError("set requires exactly 2 arguments: (set var value)")
    var_sym, val_expr = tail
    if not isinstance(var_sym, SymbolExpr):
        raise LispiInvalidSymbol(f"set first argument must be a symbol, got {var_sym!r}")
    value = evaluate_fn(val_expr, env, context)
    env.set(var_sym.name, value)

    return value
