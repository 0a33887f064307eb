"""Character source with one character of lookahead.

Wraps any iterable of characters, stamps every consumed character with a
Position and reports positions that stay correct while a character is
peeked. The tokenizer needs that: it must look one character past a token
before it knows where the token ends.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from keikaku.reader.position import Position


class Source(Iterator[str]):
    __slots__ = ("name", "_chars", "_peeked", "_cur_pos", "_prev_pos")

    def __init__(self, chars: Iterable[str], name: str = "<input>"):
        self.name = name
        self._chars = iter(chars)
        # (peeked char or None at end, current_pos, previous_pos) as seen before the peek
        self._peeked: Optional[tuple[Optional[str], Position, Position]] = None
        self._cur_pos = Position()
        self._prev_pos = Position()

    @property
    def current_pos(self) -> Position:
        """Position of the next character to be consumed."""
        if self._peeked is not None:
            return self._peeked[1]
        return self._cur_pos

    @property
    def previous_pos(self) -> Position:
        """Position of the last consumed character."""
        if self._peeked is not None:
            return self._peeked[2]
        return self._prev_pos

    def peek(self) -> Optional[str]:
        if self._peeked is None:
            cur_pos = self.current_pos
            prev_pos = self.previous_pos
            ch = self.next_char()
            self._peeked = (ch, cur_pos, prev_pos)
        return self._peeked[0]

    def next_char(self) -> Optional[str]:
        """Consume one character; None signals the end of the stream."""
        if self._peeked is not None:
            ch = self._peeked[0]
            self._peeked = None
            return ch
        ch = next(self._chars, None)
        if ch is not None:
            self._prev_pos = self._cur_pos
            self._cur_pos = self._cur_pos.advance(ch)
        return ch

    def __iter__(self) -> Source:
        return self

    def __next__(self) -> str:
        ch = self.next_char()
        if ch is None:
            raise StopIteration
        return ch
