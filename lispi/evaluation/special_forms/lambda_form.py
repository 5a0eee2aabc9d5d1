from lispi.errors import LispiArityError, LispiTypeError
from lispi.types.lambda_fn import Lambda

from lispi import EvaluatorFn
from lispi import SExpression, LispValue
from lispi.types.environment import Environment
from lispi.types.expr import BracketExpr, ListExpr, SymbolExpr


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    # (lambda (params) body...) allows zero or more body forms, run in order.
    # With no body forms, calling the function returns nil.
    if not tail:
        raise LispiArityError("lambda requires at least a parameter list")

    params = tail[0]
    if not isinstance(params, (ListExpr, BracketExpr)):
        raise LispiTypeError("lambda parameters must be a list of symbols")
    formals = []
    for p in params.elements:
        if not isinstance(p, SymbolExpr):
            raise LispiTypeError(f"lambda parameter must be a symbol, got {p!r}")
        if p.name in formals:
            raise LispiTypeError(f"lambda parameter '{p.name}' appears more than once")
        formals.append(p.name)

    return Lambda(tuple(formals), tuple(tail[1:]), env)
