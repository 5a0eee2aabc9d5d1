from lispi import SExpression, LispValue
from lispi.types.environment import Environment
from lispi.types.values import FALSE, TRUE, is_truthy


def and_form(tail: list[SExpression], env: Environment, context, evaluate_fn) -> LispValue:
    """Short-circuiting logical AND special form.

    (and a b c ...) evaluates each operand left-to-right until a falsy value
    (false or nil) is found, which is returned immediately. If all operands are
    truthy, returns the value of the last operand. With zero operands, returns true.
    """
    result: LispValue = TRUE
    for expr in tail:
        result = evaluate_fn(expr, env, context)
        if not is_truthy(result):
            return result
    return result


def or_form(tail: list[SExpression], env: Environment, context, evaluate_fn) -> LispValue:
    """Short-circuiting logical OR special form.

    (or a b c ...) evaluates each operand left-to-right and returns the first
    truthy value. If none are truthy, returns the last operand's value. With
    zero operands, returns false.
    """
    result: LispValue = FALSE
    for expr in tail:
        result = evaluate_fn(expr, env, context)
        if is_truthy(result):
            return result
    return result
