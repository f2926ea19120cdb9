"""Core evaluator and trampoline for the Pebble interpreter.

Implements special-form dispatch, built-in and function application, and
tail-call aware evaluation via a simple trampoline using TailCall objects.
Non-tail nesting is counted so runaway recursion becomes a PebbleRecursionError
instead of exhausting the host stack.
"""

from __future__ import annotations

from pebble import SExpression, LispValue
from pebble.builtin.env_builtin import BUILTINS
from pebble.errors import PebbleRecursionError, PebbleTypeError, PebbleUnboundSymbol
from pebble.evaluation.apply import apply, not_callable_message
from pebble.evaluation.special_forms import SPECIAL_FORMS
from pebble.reader.ast import Application
from pebble.runtime_context import get_max_depth
from pebble.types.environment import Environment
from pebble.types.lambda_fn import Lambda
from pebble.types.symbol import Symbol
from pebble.types.tail_call import TailCall


def evaluate(expr: SExpression, env: Environment, depth: int = 0) -> LispValue:
    """
    Trampoline evaluator: tail-call aware evaluation.
    """
    limit = get_max_depth()
    if depth > limit:
        raise PebbleRecursionError(f"Recursion limit exceeded (max depth {limit})")
    try:
        result = evaluate0(expr, env, depth)
        while isinstance(result, TailCall):
            result = evaluate0(result.expr, result.env, depth)
    except RecursionError:
        raise PebbleRecursionError("Recursion limit exceeded (host stack exhausted)") from None
    return result


def evaluate0(
    expr: SExpression,
    env: Environment,
    depth: int = 0,
) -> LispValue | TailCall:
    """
    Core evaluator: single-step evaluation.
    Every expression evaluate0 sees is in tail position, so function bodies and
    if-branches come back as a TailCall for the trampoline in evaluate.
    """
    match expr:
        case Symbol():
            return env.lookup(expr)
        case Application(head, tail_args):
            # Arguments first, left to right; the first failure aborts the call.
            args = [evaluate(arg, env, depth + 1) for arg in tail_args]
            return apply(resolve_head(head, env, depth), args, env)

    handler = SPECIAL_FORMS.get(type(expr))
    if handler is not None:
        return handler(expr, env, evaluate, depth)

    # --- Literals return as-is ---
    return expr


def resolve_head(head: SExpression, env: Environment, depth: int) -> LispValue:
    """Find what an application calls: a built-in, or a function value."""
    if isinstance(head, Symbol):
        builtin = BUILTINS.get(head)
        if builtin is not None:
            return builtin
        try:
            fn = env.lookup(head)
        except PebbleUnboundSymbol:
            raise PebbleUnboundSymbol(f"Symbol {head} not found") from None
        if not isinstance(fn, Lambda):
            raise PebbleTypeError(f"{head} is not a function")
        return fn

    fn = evaluate(head, env, depth + 1)
    if not isinstance(fn, Lambda):
        raise PebbleTypeError(not_callable_message(fn))
    return fn
