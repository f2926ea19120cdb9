"""Application engine for Pebble.

This module centralizes function application semantics for the interpreter:
- Built-in procedures receive the environment and the evaluated arguments.
- Lambdas get a fresh call frame over their captured environment; the body is
  handed back as a TailCall so the trampoline runs it without nesting.
- Anything else in head position is rejected by the evaluator with a message
  naming its kind (see not_callable_message).
"""

from __future__ import annotations

from typing import Callable

from pebble import LispValue
from pebble.printer import to_string
from pebble.types.char import Char
from pebble.types.environment import Environment
from pebble.types.lambda_fn import Lambda
from pebble.types.nil import NilType
from pebble.types.pair import Pair
from pebble.types.tail_call import TailCall


def apply_lambda(fn: Lambda, args: list[LispValue]) -> TailCall:
    """Bind already-evaluated arguments and return the body as a TailCall.

    Too many arguments raise PebbleArityError (from Lambda.extend_env).
    """
    return TailCall(fn.body, fn.extend_env(args))


def apply(
    head: Lambda | Callable[[Environment, list[LispValue]], LispValue],
    args: list[LispValue],
    env: Environment,
) -> LispValue | TailCall:
    """Apply either a Lambda or a built-in procedure.

    - For Lambda, defer to apply_lambda.
    - For built-ins, invoke with the runtime env and list of args.
    """
    if isinstance(head, Lambda):
        return apply_lambda(head, args)
    return head(env, args)


def not_callable_message(value: LispValue) -> str:
    """Describe why `value` cannot be used as a function."""
    if isinstance(value, NilType):
        return "Nil is not callable"
    if isinstance(value, bool):
        kind = "a boolean"
    elif isinstance(value, (int, float)):
        kind = "a number"
    elif isinstance(value, Char):
        kind = "a character"
    elif isinstance(value, str):
        kind = "a string"
    elif isinstance(value, Pair):
        kind = "a pair"
    else:
        kind = f"a {type(value).__name__}"
    return f"{to_string(value)} is {kind}, not a function"
