"""Compound syntax nodes produced by the parser.

Literals stay plain Python values (int, float, bool, str, Char, Nil) and
identifiers are Symbols; only forms with structure get a node class here.
"""

from __future__ import annotations

from dataclasses import dataclass

from pebble import SExpression
from pebble.types.symbol import Symbol


@dataclass(frozen=True)
class Application:
    """(head arg ...): a call of a built-in or a function value."""
    head: SExpression
    args: tuple[SExpression, ...]


@dataclass(frozen=True)
class LambdaExpr:
    params: tuple[Symbol, ...]
    body: SExpression


@dataclass(frozen=True)
class Define:
    name: Symbol
    value: SExpression


@dataclass(frozen=True)
class If:
    condition: SExpression
    consequent: SExpression
    alternative: SExpression


@dataclass(frozen=True)
class PairLiteral:
    """One cell of a quoted list literal; the spine ends in Nil."""
    car: SExpression
    cdr: SExpression
