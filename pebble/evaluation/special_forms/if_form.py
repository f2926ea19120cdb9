from pebble import EvaluatorFn
from pebble.errors import PebbleTypeError
from pebble.printer import to_string
from pebble.reader.ast import If
from pebble.types.environment import Environment
from pebble.types.tail_call import TailCall


def if_form(
    expr: If,
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> TailCall:
    cond = evaluate_fn(expr.condition, env, depth + 1)
    # Only booleans decide a branch; there is no truthiness for other values
    if not isinstance(cond, bool):
        raise PebbleTypeError(f"Expected boolean in condition, got {to_string(cond)}")

    branch = expr.consequent if cond else expr.alternative
    return TailCall(branch, env)
