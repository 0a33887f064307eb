"""
  Tokenizer

- Lazy: tokens are produced on demand from a Source
- Emits (Token, Span) pairs
- Never fails: text such as `1-2` is a NUMBER token here and is rejected
  by the parser when converted to an integer

Token kinds:

    (           -> OPENING_BRACE
    )           -> CLOSING_BRACE
    -<digit>... -> NUMBER
    <digit>...  -> NUMBER
    anything    -> IDENTIFIER

NUMBER and IDENTIFIER tokens extend greedily up to the next brace or
whitespace character.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Iterator, NamedTuple

from keikaku.reader.position import Span
from keikaku.reader.source import Source

logger = logging.getLogger(__name__)


class TokenKind(Enum):
    OPENING_BRACE = "("
    CLOSING_BRACE = ")"
    IDENTIFIER = "identifier"
    NUMBER = "number"


class Token(NamedTuple):
    kind: TokenKind
    text: str

    def __repr__(self) -> str:
        if self.kind in (TokenKind.OPENING_BRACE, TokenKind.CLOSING_BRACE):
            return self.kind.name
        return f"{self.kind.name}({self.text!r})"


OPENING_BRACE = Token(TokenKind.OPENING_BRACE, "(")
CLOSING_BRACE = Token(TokenKind.CLOSING_BRACE, ")")


def is_ascii_digit(ch: str | None) -> bool:
    return ch is not None and "0" <= ch <= "9"


def _is_atom_char(ch: str) -> bool:
    return ch != "(" and ch != ")" and not ch.isspace()


def _discard_while(source: Source, predicate: Callable[[str], bool]) -> None:
    while (ch := source.peek()) is not None and predicate(ch):
        source.next_char()


def _read_while(source: Source, predicate: Callable[[str], bool], first: str) -> str:
    chars = [first]
    while (ch := source.peek()) is not None and predicate(ch):
        chars.append(source.next_char())
    return "".join(chars)


def tokenize(source: Source) -> Iterator[tuple[Token, Span]]:
    """Token generator: yields (Token, Span) pairs until the source runs dry."""
    while True:
        _discard_while(source, str.isspace)

        start_pos = source.current_pos
        ch = source.next_char()
        if ch is None:
            return

        if ch == "(":
            token = OPENING_BRACE
        elif ch == ")":
            token = CLOSING_BRACE
        elif (ch == "-" and is_ascii_digit(source.peek())) or is_ascii_digit(ch):
            token = Token(TokenKind.NUMBER, _read_while(source, _is_atom_char, ch))
        else:
            token = Token(TokenKind.IDENTIFIER, _read_while(source, _is_atom_char, ch))

        span = start_pos.to(source.previous_pos)
        logger.debug("%s: token %r at %s", source.name, token, span)
        yield token, span


def lex(text: str, name: str = "<input>") -> Iterator[tuple[Token, Span]]:
    """Tokenize a string."""
    return tokenize(Source(text, name))
