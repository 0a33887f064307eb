"""Runtime environment for keikaku.

The Environment stores bindings of Symbols to evaluated values. The global
frame lives for the whole session; Lambda application pushes a child frame
linked through `outer` and drops it when the call returns.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from keikaku import LispValue
from keikaku.errors import UnknownDef
from keikaku.reader.position import Span
from keikaku.types.nil import Nil
from keikaku.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to runtime values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: LispValue) -> LispValue:
        """Bind `name` to `value` in this frame, overwriting any earlier binding."""
        if not isinstance(name, Symbol):
            raise TypeError(f"Cannot define {name!r}: not a Symbol")
        self.vars[name] = value
        return Nil

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def lookup(self, name: Symbol, span: Span | None = None) -> LispValue:
        """Look up the value bound to `name`, innermost frame first.

        Raises UnknownDef (located at `span`) if no frame binds it.
        """
        env = self.find(name)
        if env is None:
            raise UnknownDef(span, name)
        return env.vars[name]

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def __contains__(self, name: Symbol) -> bool:
        return self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Whole chain, innermost frame first."""
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env: Optional[Environment] = self
            chain = []
            while env is not None:
                with StringIO() as env_buf:
                    env._write_vars(env_buf)
                    chain.append(env_buf.getvalue())
                env = env.outer
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
