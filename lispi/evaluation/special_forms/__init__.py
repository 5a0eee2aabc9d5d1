"""Registry of special forms for the lispi evaluator.

Maps head symbol names to handler functions that implement non-standard
evaluation rules. The evaluator consults this table before ordinary function
application, so these names cannot be shadowed by bindings. Every handler is
called as handler(tail, env, context, evaluate_fn) with the unevaluated tail.

module, import, load and require are not listed: the parser already turned
them into declaration nodes.
"""

from lispi.evaluation.special_forms.define_form import define_form
from lispi.evaluation.special_forms.if_form import if_form
from lispi.evaluation.special_forms.lambda_form import lambda_form
from lispi.evaluation.special_forms.let_form import let_form
from lispi.evaluation.special_forms.list_forms import (
    cons_form,
    empty_form,
    first_form,
    length_form,
    list_form,
    rest_form,
)
from lispi.evaluation.special_forms.logic_forms import and_form, or_form
from lispi.evaluation.special_forms.progn_form import progn_form
from lispi.evaluation.special_forms.quote_forms import quote_form
from lispi.evaluation.special_forms.set_form import set_form

SPECIAL_FORMS = {
    "quote": quote_form,
    "define": define_form,
    "set": set_form,
    "lambda": lambda_form,
    "if": if_form,
    "let": let_form,
    "do": progn_form,
    "begin": progn_form,
    "and": and_form,
    "or": or_form,
    "list": list_form,
    "empty?": empty_form,
    "length": length_form,
    "first": first_form,
    "rest": rest_form,
    "cons": cons_form,
}
