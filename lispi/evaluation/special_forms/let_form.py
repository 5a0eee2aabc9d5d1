from lispi import EvaluatorFn
from lispi import SExpression, LispValue
from lispi.errors import LispiArityError, LispiTypeError
from lispi.types.environment import Environment
from lispi.types.expr import BracketExpr, ListExpr, SymbolExpr
from lispi.types.values import Nil


def let_form(
    tail: list[SExpression],
    env: Environment,
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """
    (let ((name expr) ...) body...)

    Every init expression is evaluated in the enclosing scope before any name
    is bound; the body runs in a new child scope.
    """
    if not tail:
        raise LispiArityError("let requires a binding list")

    bindings = tail[0]
    if not isinstance(bindings, (ListExpr, BracketExpr)):
        raise LispiTypeError("let bindings must be a list")

    values: list[tuple[str, LispValue]] = []
    for binding in bindings.elements:
        if not isinstance(binding, (ListExpr, BracketExpr)) or len(binding.elements) != 2:
            raise LispiTypeError(f"let binding must be a (name value) pair, got {binding!r}")
        name, init = binding.elements
        if not isinstance(name, SymbolExpr):
            raise LispiTypeError(f"let binding name must be a symbol, got {name!r}")
        values.append((name.name, evaluate_fn(init, env, context)))

    scope = env.child()
    for name, value in values:
        scope.define(name, value)

    result: LispValue = Nil
    for form in tail[1:]:
        result = evaluate_fn(form, scope, context)
    return result
