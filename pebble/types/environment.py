"""Runtime environment for Pebble.

The Environment stores bindings of Symbols to evaluated values and supports
nested scopes via an `outer` link. Call frames are small dictionaries layered
over the environment a closure captured, so applying a function never copies
the caller's bindings.

Closures hold a snapshot taken with `capture()`. A snapshot shares the frame
dictionaries of the live chain; the live frames switch to copy-on-write so a
later `define` can never change what an existing closure sees. Names that were
not bound when the snapshot was taken resolve against the live top-level
environment instead (late-bound globals), which is what lets a top-level
function call itself or a function defined after it.
"""

from __future__ import annotations

from io import StringIO
from typing import Iterator, Optional

from pebble import LispValue
from pebble.errors import PebbleUnboundSymbol
from pebble.types.symbol import Symbol


class _UnboundType:
    """Marks a parameter that received no argument."""

    __slots__ = ()

    def __repr__(self):
        return "<unbound>"


UNBOUND = _UnboundType()


class Environment:
    """Hierarchical mapping from Symbols to values with snapshot support."""

    __slots__ = ("vars", "outer", "late", "_shared")

    def __init__(
        self,
        outer: Optional[Environment] = None,
        bindings: dict[Symbol, LispValue] | None = None,
    ):
        self.vars: dict[Symbol, LispValue] = bindings if bindings is not None else {}
        self.outer: Environment | None = outer
        # Live top-level environment consulted for names missing from a snapshot
        self.late: Environment | None = None
        # True while `vars` is also referenced by a snapshot
        self._shared = False

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame, replacing any previous binding."""
        if self._shared:
            self.vars = dict(self.vars)
            self._shared = False
        self.vars[name] = value

    def extend(self, bindings: dict[Symbol, LispValue]) -> Environment:
        """Return a new frame holding `bindings` whose parent is this environment."""
        return Environment(outer=self, bindings=bindings)

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`.

        Falls back to the late-bound top-level environment of the chain root.
        """
        env: Optional[Environment] = self
        root = self
        while env is not None:
            if symbol in env.vars:
                return env
            root = env
            env = env.outer
        if root.late is not None:
            return root.late.find(symbol)
        return None

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`.

        Raises PebbleUnboundSymbol if not found, or if the name is a parameter
        that was not supplied an argument.
        """
        env = self.find(name)
        if env is None:
            raise PebbleUnboundSymbol(f"Variable {name} not in environment")
        value = env.vars[name]
        if value is UNBOUND:
            raise PebbleUnboundSymbol(f"Variable {name} not in environment")
        return value

    def __contains__(self, name: Symbol) -> bool:
        env = self.find(name)
        return env is not None and env.vars[name] is not UNBOUND

    def capture(self) -> Environment:
        """Return a snapshot of this chain for a closure to keep.

        Frame dictionaries are shared, not copied; both sides become
        copy-on-write.
        """
        outer = self.outer.capture() if self.outer is not None else None
        snapshot = Environment(outer=outer, bindings=self.vars)
        snapshot._shared = True
        self._shared = True
        if outer is None:
            # Only the chain root carries the late-bound globals link
            snapshot.late = self.late if self.late is not None else self
        return snapshot

    def checkpoint(self) -> dict[Symbol, LispValue]:
        """Remember this frame's bindings; later defines copy before writing."""
        self._shared = True
        return self.vars

    def rollback(self, checkpoint: dict[Symbol, LispValue]) -> None:
        """Restore the bindings saved by `checkpoint`."""
        self.vars = checkpoint
        self._shared = True

    def names(self) -> Iterator[tuple[Symbol, LispValue]]:
        """Yield every visible binding, innermost first, without duplicates."""
        seen: set[Symbol] = set()
        env: Optional[Environment] = self
        while env is not None:
            for k, v in env.vars.items():
                if k not in seen and v is not UNBOUND:
                    seen.add(k)
                    yield k, v
            env = env.outer

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        first = True
        for k, v in self.vars.items():
            if not first:
                buffer.write(", ")
            buffer.write(f"{k}: {v!r}")
            first = False
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env = self
            chain = []
            while env is not None:
                env_buf: StringIO = StringIO()
                env._write_vars(env_buf)
                chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
