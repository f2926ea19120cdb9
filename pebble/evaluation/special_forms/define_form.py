import logging

from pebble import EvaluatorFn
from pebble import LispValue
from pebble.reader.ast import Define
from pebble.types.nil import Nil
from pebble.types.environment import Environment

logger = logging.getLogger(__name__)


def define_form(
    expr: Define,
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> LispValue:
    """
    (define name value)
    """
    value = evaluate_fn(expr.value, env, depth + 1)  # normal evaluation
    env.define(expr.name, value)
    logger.debug("defined %s", expr.name)
    return Nil
