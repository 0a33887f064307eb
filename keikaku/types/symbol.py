from __future__ import annotations
import sys
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Symbol:
    """Identifier used both in parsed forms and as an Environment key."""

    name: str

    def __post_init__(self):
        # environment keys are compared constantly; interned names keep that cheap
        object.__setattr__(self, "name", sys.intern(self.name))

    def __str__(self) -> str:
        return self.name
