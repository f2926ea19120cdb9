from pebble import EvaluatorFn
from pebble import LispValue
from pebble.reader.ast import PairLiteral
from pebble.types.environment import Environment
from pebble.types.nil import Nil
from pebble.types.pair import Pair


def quote_form(
    expr: PairLiteral,
    env: Environment,
    evaluate_fn: EvaluatorFn,
    depth: int,
) -> LispValue:
    """
    '(a b c)
    Elements of a quoted list are evaluated in the current environment, so
    '(x 1) holds the value of x, not the symbol.
    """
    items: list[LispValue] = []
    cell = expr
    while isinstance(cell, PairLiteral):
        items.append(evaluate_fn(cell.car, env, depth + 1))
        cell = cell.cdr
    tail = Nil if cell is Nil else evaluate_fn(cell, env, depth + 1)
    return Pair.from_iterable(items, tail)
