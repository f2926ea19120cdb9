from __future__ import annotations


class Char:
    """A single character value, kept distinct from one-character strings."""

    __slots__ = ("ch",)

    def __init__(self, ch: str):
        if len(ch) != 1:
            raise ValueError(f"Char expects exactly one character, got {ch!r}")
        self.ch = ch

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Char) and self.ch == other.ch

    def __hash__(self) -> int:
        return hash(("char", self.ch))

    def __repr__(self):
        return f"Char({self.ch!r})"

    def __str__(self):
        return "#\\" + self.ch
