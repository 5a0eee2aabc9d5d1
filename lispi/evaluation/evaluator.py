"""Core tree-walking evaluator for the lispi interpreter.

Implements single dispatch per node kind: literals evaluate to themselves,
symbols are looked up in the environment, lists are either special forms or
call-by-value applications, and declaration nodes are handed to the module
resolver.
"""

from __future__ import annotations

from lispi import LispValue, SExpression
from lispi.errors import LispiTypeError
from lispi.evaluation.apply import apply
from lispi.evaluation.special_forms import SPECIAL_FORMS
from lispi.modules.resolver import import_form, load_form, module_form, require_form
from lispi.runtime_context import RuntimeContext
from lispi.types.environment import Environment
from lispi.types.expr import (
    BigNumberExpr,
    BooleanExpr,
    BracketExpr,
    ImportExpr,
    KeywordExpr,
    ListExpr,
    LoadExpr,
    ModuleExpr,
    NumberExpr,
    RequireExpr,
    StringExpr,
    SymbolExpr,
)
from lispi.types.values import FALSE, TRUE, BigNumber, Keyword, ListValue, Number, String


def evaluate(
    expr: SExpression, env: Environment, context: RuntimeContext | None = None
) -> LispValue:
    """
    Evaluate `expr` in `env`. Side effects are limited to `env` and the
    module registry held by `context`.
    """
    if context is None:
        context = RuntimeContext()

    match expr:
        # --- Atoms ---
        case NumberExpr(value=value):
            return Number(value)
        case BigNumberExpr(value=text):
            return BigNumber.from_text(text)
        case StringExpr(value=value):
            return String(value)
        case BooleanExpr(value=value):
            return TRUE if value else FALSE
        case KeywordExpr(value=value):
            return Keyword(value)
        case SymbolExpr(name=name):
            return env.lookup(name)

        # --- Sequences ---
        case BracketExpr(elements=elements):
            return ListValue(tuple(evaluate(e, env, context) for e in elements))
        case ListExpr(elements=()):
            return ListValue(())
        case ListExpr(elements=(SymbolExpr(name=name), *tail)) if name in SPECIAL_FORMS:
            return SPECIAL_FORMS[name](tail, env, context, evaluate)
        case ListExpr(elements=(head, *tail)):
            fn = evaluate(head, env, context)
            # Call-by-value: arguments left to right, before application
            args = [evaluate(arg, env, context) for arg in tail]
            return apply(fn, args, env, context, evaluate)

        # --- Module declarations ---
        case ModuleExpr():
            return module_form(expr, env, context, evaluate)
        case ImportExpr():
            return import_form(expr, env, context, evaluate)
        case RequireExpr():
            return require_form(expr, env, context, evaluate)
        case LoadExpr():
            return load_form(expr, env, context, evaluate)

    raise LispiTypeError(f"Cannot evaluate {expr!r}")
