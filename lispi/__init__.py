# Core type aliases for lispi's data model.
# Syntax and runtime data are kept apart:
# - Expr nodes (lispi.types.expr) are produced by the reader and never mutated.
# - Value objects (lispi.types.values) are produced by evaluation.
#
# Naming guidance:
# - SExpression: use in reader/parser code to denote syntactic forms.
# - LispValue:  use in evaluator/runtime code to denote evaluated values.
# Both aliases resolve to the base classes so annotations stay readable without
# importing every variant.

from typing import Callable

from lispi.types.expr import Expr
from lispi.types.values import Value

# Syntax tree node alias
SExpression = Expr
# Runtime value alias
LispValue = Value

# Evaluator function type: passed to special forms so they can evaluate sub-forms
EvaluatorFn = Callable[..., LispValue]

__version__ = "0.3.0"
