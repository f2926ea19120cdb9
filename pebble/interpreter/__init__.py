from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable

from pebble import SExpression, LispValue
from pebble import config, runtime_context
from pebble.errors import PebbleError
from pebble.reader.lexer import lex
from pebble.reader.parser import TokenStream
from pebble.types.nil import Nil
from pebble.types.environment import Environment

logger = logging.getLogger(__name__)

# Host frames used per level of evaluation depth, with headroom
_FRAMES_PER_LEVEL = 4
_FRAME_HEADROOM = 500


class Interpreter:
    """
    Orchestrates reading and evaluating Pebble code.
    Maintains the top-level Environment across calls, so definitions persist.
    A form that fails leaves the bindings made by earlier forms in place.
    """

    # Class-level default to avoid env-variable coupling in tests
    DefaultMaxDepth: int | None = None

    def __init__(
        self,
        eval_fn: Callable[[SExpression, Environment], LispValue] | None = None,
        prelude: str | None = None,
        *,
        max_depth: int | None = None,
    ):
        if eval_fn is None:
            from pebble.evaluation.evaluator import evaluate
            eval_fn = evaluate
        self.eval_fn = eval_fn
        self.env: Environment = Environment()

        depth = max_depth if max_depth is not None else self.DefaultMaxDepth
        if depth is None:
            depth = config.get_max_depth()
        if depth <= 0:
            raise ValueError(f"max depth must be positive, got {depth}")
        self.max_depth: int = depth
        _ensure_host_stack(depth)

        if prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        tokens = lex(code)
        stream = TokenStream(iter(tokens))
        while (expr := stream.parse_expr()) is not None:
            with runtime_context.max_depth(self.max_depth):
                self.eval_fn(expr, self.env)

    def eval_forms(self, code: str):
        """Yield the result of each top-level form in `code` as it is evaluated.

        If a form fails, bindings it made before failing are rolled back and
        the error propagates.
        """
        stream = TokenStream(lex(code))
        while (expr := stream.parse_expr()) is not None:
            checkpoint = self.env.checkpoint()
            try:
                with runtime_context.max_depth(self.max_depth):
                    result = self.eval_fn(expr, self.env)
            except PebbleError:
                self.env.rollback(checkpoint)
                raise
            yield result

    def eval(self, code: str) -> LispValue:
        results: list[LispValue] = list(self.eval_forms(code))
        if not results:
            return Nil
        if len(results) == 1:
            return results[0]
        return results

    def eval_file(self, path: str | Path) -> LispValue:
        path = Path(path)
        logger.info("evaluating file %s", path)
        return self.eval(path.read_text(encoding="utf-8"))


def _ensure_host_stack(max_depth: int) -> None:
    needed = max_depth * _FRAMES_PER_LEVEL + _FRAME_HEADROOM
    if sys.getrecursionlimit() < needed:
        logger.debug("raising host recursion limit to %d", needed)
        sys.setrecursionlimit(needed)
