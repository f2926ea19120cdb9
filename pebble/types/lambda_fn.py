"""Lambda function representation and argument binding for Pebble."""

from __future__ import annotations

from io import StringIO

from pebble import SExpression, LispValue
from pebble.errors import PebbleArityError
from pebble.types.environment import Environment, UNBOUND
from pebble.types.symbol import Symbol


class Lambda:
    """A first-class function: formal parameters, body, and captured environment."""

    __slots__ = ("formals", "body", "env")

    def __init__(
        self, formals: list[Symbol], body: SExpression, env: Environment | None = None
    ):
        self.formals: list[Symbol] = list(formals)
        self.body: SExpression = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def __str__(self) -> str:
        return "function"

    def __repr__(self) -> str:
        from pebble.printer import expr_to_string

        with StringIO() as buffer:
            buffer.write("<lambda (")
            buffer.write(" ".join(str(f) for f in self.formals))
            buffer.write(") ")
            buffer.write(expr_to_string(self.body))
            buffer.write(">")
            return buffer.getvalue()

    def extend_env(self, args: list[LispValue]) -> Environment:
        """
        Bind the given argument values to this lambda's formal parameters and
        return a new call frame over the captured environment.

        Surplus arguments are an arity error. Missing arguments leave their
        parameters unbound: they shadow outer names but fail when read.
        """
        if len(args) > len(self.formals):
            extra = args[len(self.formals):]
            raise PebbleArityError(
                f"Too many arguments: function takes {len(self.formals)}, "
                f"got {len(args)} (extra: {len(extra)})"
            )
        bindings: dict[Symbol, LispValue] = {}
        for i, name in enumerate(self.formals):
            bindings[name] = args[i] if i < len(args) else UNBOUND
        return self.env.extend(bindings)
