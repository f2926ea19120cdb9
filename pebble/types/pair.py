"""Cons cells for Pebble list values.

A Pair owns its car and cdr. Chains of pairs ending in Nil are proper lists;
anything else in the final cdr makes the list improper.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from pebble import LispValue
from pebble.types.nil import Nil


class Pair:
    __slots__ = ("car", "cdr")

    def __init__(self, car: LispValue, cdr: LispValue):
        self.car = car
        self.cdr = cdr

    @classmethod
    def from_iterable(cls, items: Iterable[LispValue], tail: LispValue = Nil) -> LispValue:
        """Right-fold `items` into a Pair chain terminated by `tail`."""
        result = tail
        for item in reversed(list(items)):
            result = cls(item, result)
        return result

    def cells(self) -> Iterator[Pair]:
        """Iterate over the pairs of the spine, stopping at the first non-pair cdr."""
        cell: LispValue = self
        while isinstance(cell, Pair):
            yield cell
            cell = cell.cdr

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pair):
            return False
        a: LispValue = self
        b: LispValue = other
        # Walk the spine iteratively so long lists do not recurse on the cdr
        while isinstance(a, Pair) and isinstance(b, Pair):
            if not _same(a.car, b.car):
                return False
            a, b = a.cdr, b.cdr
        if isinstance(a, Pair) or isinstance(b, Pair):
            return False
        return _same(a, b)

    __hash__ = None

    def __repr__(self):
        return f"Pair({self.car!r}, {self.cdr!r})"


def _same(a: LispValue, b: LispValue) -> bool:
    # bool is an int subclass and 1 == 1.0, so compare types first
    return type(a) is type(b) and a == b
