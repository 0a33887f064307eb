"""Built-in operators as runtime values."""

from __future__ import annotations

from typing import Callable

from keikaku import LispValue
from keikaku.reader.position import Span

# (call span, [(evaluated argument, argument span), ...]) -> value
PrimitiveFn = Callable[[Span, list[tuple[LispValue, Span]]], LispValue]


class PrimitiveOp:
    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: PrimitiveFn):
        self.name = name
        self.fn = fn

    def __call__(self, span: Span, args: list[tuple[LispValue, Span]]) -> LispValue:
        return self.fn(span, args)

    def __repr__(self) -> str:
        return f"PrimitiveOp({self.name!r})"

    def __str__(self) -> str:
        return "#primop#"
