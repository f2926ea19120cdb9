"""Registry of special forms for the Pebble evaluator.

Maps syntax node types to handler functions that implement non-standard
evaluation rules. The evaluator consults this table before treating a node as
a literal.
"""

from pebble.reader.ast import Define, If, LambdaExpr, PairLiteral
from pebble.evaluation.special_forms.lambda_form import lambda_form
from pebble.evaluation.special_forms.define_form import define_form
from pebble.evaluation.special_forms.if_form import if_form
from pebble.evaluation.special_forms.quote_form import quote_form

SPECIAL_FORMS = {
    LambdaExpr: lambda_form,
    Define: define_form,
    If: if_form,
    PairLiteral: quote_form,
}
