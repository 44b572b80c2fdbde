"""Registry of special forms for the schemer evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before ordinary
function application. Every handler is called as
`handler(args, env, evaluator, is_tail_call)` with the unevaluated operand list.
"""

from schemer.types.symbol import Symbol
from schemer.evaluation.special_forms.set_form import set_form
from schemer.evaluation.special_forms.begin_form import begin_form
from schemer.evaluation.special_forms.define_syntax_form import define_syntax_form
from schemer.evaluation.special_forms.foreign_forms import pyfunc_form, pyobj_form
from schemer.evaluation.special_forms.quote_forms import quote_form, str_quote_form
from schemer.evaluation.special_forms.lambda_form import lambda_form
from schemer.evaluation.special_forms.define_form import define_form
from schemer.evaluation.special_forms.if_form import if_form
from schemer.evaluation.special_forms.list_forms import cons_form, car_form, cdr_form, null_form
from schemer.evaluation.special_forms.apply_form import apply_form

SPECIAL_FORMS = {
    Symbol("set!"): set_form,
    Symbol("begin"): begin_form,
    Symbol("define-syntax"): define_syntax_form,
    Symbol("pyfunc"): pyfunc_form,
    Symbol("pyobj"): pyobj_form,
    Symbol("quote"): quote_form,
    Symbol("str-quote"): str_quote_form,
    Symbol("lambda"): lambda_form,
    Symbol("define"): define_form,
    Symbol("if"): if_form,
    Symbol("cons"): cons_form,
    Symbol("car"): car_form,
    Symbol("cdr"): cdr_form,
    Symbol("null?"): null_form,
    Symbol("apply"): apply_form,
}
