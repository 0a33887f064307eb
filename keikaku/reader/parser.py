"""
  Recursive-descent parser

- One token of lookahead over the (Token, Span) stream from the lexer
- Open lists are kept on an explicit stack, so nesting depth is not
  limited by the Python call stack
- Emits plain Python values, each paired with its span in a Located tuple:

    - integers      -> int (signed 128-bit range)
    - identifiers   -> Symbol
    - `def`         -> Def marker
    - ( ... )       -> list[Located]; `()` is the empty list

- The top level is a sequence of expressions, not an implicit outer list
- The first error aborts the parse
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Iterator, NamedTuple, Optional

from keikaku import SExpression
from keikaku.errors import InvalidNumberFormat, MismatchedClosingBrace, UnexpectedEndOfInput
from keikaku.reader.lexer import Token, TokenKind, lex
from keikaku.reader.position import Span
from keikaku.types.symbol import Symbol

logger = logging.getLogger(__name__)

I128_MIN = -(1 << 127)
I128_MAX = (1 << 127) - 1

_INT_RE = re.compile(r"-?[0-9]+")


class DefType:
    """Marker node for the `def` keyword."""

    _instance: Optional[DefType] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "Def"

    def __str__(self):
        return "def"


Def = DefType()


class Located(NamedTuple):
    node: SExpression
    span: Span


def parse_int(text: str, span: Span) -> int:
    if not _INT_RE.fullmatch(text):
        raise InvalidNumberFormat(span, "invalid digit found in string")
    value = int(text)
    if value > I128_MAX:
        raise InvalidNumberFormat(span, "number too large to fit in target type")
    if value < I128_MIN:
        raise InvalidNumberFormat(span, "number too small to fit in target type")
    return value


class Parser:
    def __init__(self, tokens: Iterable[tuple[Token, Span]]):
        self.tokens = iter(tokens)
        self.buffer: list[tuple[Token, Span]] = []

    def peek(self) -> Optional[tuple[Token, Span]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[tuple[Token, Span]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def parse_expr(self) -> Located:
        # lists still open, innermost last: (span of its '(', children so far)
        open_lists: list[tuple[Span, list[Located]]] = []
        while True:
            item = self.advance()
            if item is None:
                # points at the innermost brace left open
                raise UnexpectedEndOfInput(open_lists[-1][0] if open_lists else None)
            token, span = item

            if token.kind is TokenKind.OPENING_BRACE:
                open_lists.append((span, []))
                continue

            if token.kind is TokenKind.CLOSING_BRACE:
                if not open_lists:
                    raise MismatchedClosingBrace(span)
                open_span, children = open_lists.pop()
                expr = Located(children, open_span.start.to(span.end))
            else:
                expr = self._parse_atom(token, span)

            if not open_lists:
                return expr
            open_lists[-1][1].append(expr)

    def _parse_atom(self, token: Token, span: Span) -> Located:
        if token.kind is TokenKind.IDENTIFIER:
            if token.text == "def":
                return Located(Def, span)
            return Located(Symbol(token.text), span)
        return Located(parse_int(token.text, span), span)

    def parse_all(self) -> Iterator[Located]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse(tokens: Iterable[tuple[Token, Span]]) -> list[Located]:
    """Parse a whole token stream. Nothing is returned unless every expression parses."""
    exprs = list(Parser(tokens).parse_all())
    logger.debug("parsed %d top-level expression(s)", len(exprs))
    return exprs


def read(text: str, name: str = "<input>") -> list[Located]:
    """Lex and parse source text."""
    return parse(lex(text, name))
