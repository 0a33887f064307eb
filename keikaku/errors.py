from __future__ import annotations

from typing import Optional

from keikaku.reader.position import Span


class KeikakuError(Exception):
    """ Base class for all keikaku errors"""

    message = "error"

    def __init__(self, span: Optional[Span] = None, detail: str | None = None):
        self.span = span
        self.detail = detail
        super().__init__(str(self))

    def describe(self) -> str:
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message

    def __str__(self) -> str:
        if self.span is None:
            return self.describe()
        return f"{self.describe()} at {self.span}"


# -------------------------------
# Parse-time errors
# -------------------------------
class ParseError(KeikakuError):
    """ Raised when the token stream does not form valid expressions"""


class MismatchedClosingBrace(ParseError):
    """ Raised when ')' appears where an expression is expected"""
    message = "mismatched closing brace"


class UnexpectedEndOfInput(ParseError):
    """ Raised when input ends before a list is closed"""
    message = "unexpected end of input"


class InvalidNumberFormat(ParseError):
    """ Raised when number text is not an integer in the supported range"""
    message = "invalid number format"


# -------------------------------
# Evaluation-time errors
# -------------------------------
class EvalError(KeikakuError):
    """ Base class for errors raised while evaluating a form"""


class DivisionByZero(EvalError):
    message = "division by zero"


class EmptyDef(EvalError):
    message = "empty def"


class MalformedDef(EvalError):
    """ Raised for def forms other than (def name expr)"""
    message = "malformed def, expected (def name expr)"


class InvalidForm(EvalError):
    """ Raised when a list does not start with a symbol"""
    message = "cannot evaluate form, head is not a symbol"


class InvalidType(EvalError):
    message = "unexpected argument type"


class WrongArity(EvalError):
    message = "wrong arity"


class RecursionTooDeep(EvalError):
    """ Raised when nested evaluation exceeds the configured depth"""
    message = "recursion too deep"

    def __init__(self, span: Optional[Span] = None, limit: int | None = None):
        self.limit = limit
        super().__init__(span, f"limit is {limit}" if limit is not None else None)


class _SymbolError(EvalError):
    def __init__(self, span: Optional[Span], symbol):
        self.symbol = symbol
        super().__init__(span)


class NotAFunction(_SymbolError):
    def describe(self) -> str:
        return f"`{self.symbol}` is not a function"


class UnknownDef(_SymbolError):
    def describe(self) -> str:
        return f"undefined symbol: `{self.symbol}`"
