from pebble import SExpression
from pebble.types.environment import Environment


class TailCall:
    """A pending evaluation of `expr` in `env`, consumed by the trampoline."""

    __slots__ = ("expr", "env")

    def __init__(self, expr: SExpression, env: Environment):
        self.expr = expr
        self.env = env
