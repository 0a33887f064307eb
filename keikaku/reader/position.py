"""Source positions and spans.

Positions are 0-based line/column pairs. A Span holds the positions of the
first and last character of a token or form, both inclusive. Spans exist for
diagnostics only; nothing in evaluation depends on them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    line: int = 0
    column: int = 0

    def advance(self, ch: str) -> Position:
        """Return the position following the consumed character `ch`."""
        if ch == "\n":
            return Position(self.line + 1, 0)
        return Position(self.line, self.column + 1)

    def to(self, other: Position) -> Span:
        return Span(self, other)

    def as_string(self) -> str:
        # lines are shown 1-based, columns as stored
        return f"{self.line + 1}:{self.column}"

    def __str__(self) -> str:
        return self.as_string()


@dataclass(frozen=True, slots=True)
class Span:
    start: Position
    end: Position

    def __str__(self) -> str:
        if self.start == self.end:
            return self.start.as_string()
        return f"{self.start.as_string()}-{self.end.as_string()}"
