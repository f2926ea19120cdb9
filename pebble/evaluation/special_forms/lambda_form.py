import logging

from pebble import EvaluatorFn
from pebble import LispValue
from pebble.reader.ast import LambdaExpr
from pebble.types.environment import Environment
from pebble.types.lambda_fn import Lambda

logger = logging.getLogger(__name__)


def lambda_form(
    expr: LambdaExpr,
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> LispValue:
    # The closure keeps a snapshot, so later defines in `env` do not leak in.
    fn = Lambda(list(expr.params), expr.body, env.capture())
    logger.debug("created closure over (%s)", " ".join(p.id for p in expr.params))
    return fn
