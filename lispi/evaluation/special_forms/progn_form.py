from lispi import EvaluatorFn
from lispi import SExpression, LispValue
from lispi.types.environment import Environment
from lispi.types.values import Nil


def progn_form(
    tail: list[SExpression],
    env: Environment,
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    result: LispValue = Nil
    for e in tail:
        result = evaluate_fn(e, env, context)
    return result
