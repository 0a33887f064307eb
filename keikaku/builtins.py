"""Primitive operators for the keikaku runtime environment.

Each primitive receives the span of the whole call and the evaluated
arguments paired with their own spans, so type and zero errors can point at
the offending argument. Only Python ints take part in arithmetic.
"""
from __future__ import annotations

from keikaku import LispValue
from keikaku.errors import DivisionByZero, InvalidType, WrongArity
from keikaku.reader.position import Span
from keikaku.types.environment import Environment
from keikaku.types.primitive import PrimitiveOp
from keikaku.types.symbol import Symbol

Args = list[tuple[LispValue, Span]]


def is_int(value: LispValue) -> bool:
    # bool is an int subclass but never a keikaku value
    return type(value) is int


def _int_arg(value: LispValue, span: Span) -> int:
    if not is_int(value):
        raise InvalidType(span, f"expected an integer, got {value}")
    return value


def truncating_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient


# -------------------------------
# Arithmetic
# -------------------------------
def add(span: Span, args: Args) -> int:
    """Sum of all arguments; 0 for none."""
    acc = 0
    for value, arg_span in args:
        acc += _int_arg(value, arg_span)
    return acc


def mul(span: Span, args: Args) -> int:
    """Product of all arguments; 1 for none."""
    acc = 1
    for value, arg_span in args:
        acc *= _int_arg(value, arg_span)
    return acc


def sub(span: Span, args: Args) -> int:
    """Negate a single argument, otherwise subtract the rest from the first."""
    if not args:
        raise WrongArity(span, "- requires at least 1 argument")
    first, first_span = args[0]
    acc = _int_arg(first, first_span)
    if len(args) == 1:
        return -acc
    for value, arg_span in args[1:]:
        acc -= _int_arg(value, arg_span)
    return acc


def div(span: Span, args: Args) -> int:
    """Divide the first argument by the sum of the rest, truncating toward zero.

    A denominator term that is literally 0 is reported at its own span; a
    sum that cancels out to 0 is reported at the call.
    """
    if not args:
        raise WrongArity(span, "/ requires at least 2 arguments")
    first, first_span = args[0]
    numerator = _int_arg(first, first_span)
    if len(args) == 1:
        raise WrongArity(span, "/ requires at least 2 arguments")
    denominator = 0
    for value, arg_span in args[1:]:
        term = _int_arg(value, arg_span)
        if term == 0:
            raise DivisionByZero(arg_span)
        denominator += term
    if denominator == 0:
        raise DivisionByZero(span, "denominators sum to zero")
    return truncating_div(numerator, denominator)


PRIMITIVES: dict[str, PrimitiveOp] = {
    "+": PrimitiveOp("+", add),
    "-": PrimitiveOp("-", sub),
    "*": PrimitiveOp("*", mul),
    "/": PrimitiveOp("/", div),
}


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment):
    env.update({Symbol(name): op for name, op in PRIMITIVES.items()})
