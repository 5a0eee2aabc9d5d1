from lispi import EvaluatorFn
from lispi import SExpression, LispValue
from lispi.errors import LispiArityError
from lispi.types.environment import Environment
from lispi.types.values import Nil, is_truthy


def if_form(
    tail: list[SExpression],
    env: Environment,
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    if len(tail) not in (2, 3):
        raise LispiArityError("if requires a condition, a then-expression and an optional else")

    cond = evaluate_fn(tail[0], env, context)
    # Only false and nil are falsy
    if is_truthy(cond):
        return evaluate_fn(tail[1], env, context)
    elif len(tail) > 2:
        return evaluate_fn(tail[2], env, context)
    else:
        return Nil
