"""Application engine for lispi.

Function application for the evaluator and for special forms:
- Lambdas get a fresh child of their captured environment with the arguments
  bound to the formals; the body forms run in order and the last value is
  the result.
- Builtins are Python callables invoked with the caller's environment and the
  list of already-evaluated arguments.
"""

from __future__ import annotations

from lispi import EvaluatorFn, LispValue
from lispi.errors import LispiTypeError
from lispi.types.environment import Environment
from lispi.types.lambda_fn import Lambda
from lispi.types.values import Builtin, Nil


def apply_lambda(
    fn: Lambda,
    args: list[LispValue],
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply a Lambda to already-evaluated arguments.

    Raises LispiArityError when the argument count differs from the formals.
    """
    new_env = fn.extend_env(args)
    result: LispValue = Nil
    for form in fn.body:
        result = evaluate_fn(form, new_env, context)
    return result


def apply(
    head: LispValue,
    args: list[LispValue],
    env: Environment,
    context,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply either a Lambda or a Builtin; anything else is a type error."""
    if isinstance(head, Lambda):
        return apply_lambda(head, args, context, evaluate_fn)
    elif isinstance(head, Builtin):
        return head(env, args)
    else:
        raise LispiTypeError(f"Cannot apply non-function {head} ({head.type_name})")
