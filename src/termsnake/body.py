# body.py
from __future__ import annotations
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, Iterable, Iterator, Optional

from .geometry import Position


class Outcome(Enum):
    ALIVE = "alive"
    SELF_COLLISION = "self_collision"


@dataclass(frozen=True)
class Advance:
    """
    Result of one attempted move.
      head:    the cell that was appended (None if nothing moved)
      removed: the old tail cell that was dropped, so the renderer can erase it
    """
    outcome: Outcome
    head: Optional[Position] = None
    removed: Optional[Position] = None

    @property
    def alive(self) -> bool:
        return self.outcome is Outcome.ALIVE


class Snake:
    """
    Body cells ordered tail (oldest) first, head (newest) last.

    The body behaves like a sliding window: each move appends a head and,
    once the body is longer than the target length, drops the tail.
    """

    def __init__(self, cells: Iterable[Position]):
        self._cells: Deque[Position] = deque(Position(*c) for c in cells)
        if not self._cells:
            raise ValueError("a snake needs at least one cell")

    @classmethod
    def seed(cls, position: Position) -> "Snake":
        return cls([position])

    @property
    def head(self) -> Position:
        return self._cells[-1]

    @property
    def tail(self) -> Position:
        return self._cells[0]

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[Position]:
        return iter(self._cells)

    def __contains__(self, position) -> bool:
        return position in self._cells

    def __repr__(self) -> str:
        return f"Snake({list(self._cells)!r})"

    def try_advance(self, target: Position, target_length: int) -> Advance:
        # Stepping onto our own head means nothing moved this tick.
        if target == self.head:
            return Advance(Outcome.ALIVE)

        if target in self._cells:
            return Advance(Outcome.SELF_COLLISION)

        self._cells.append(target)

        removed = None
        if len(self._cells) > target_length:
            removed = self._cells.popleft()

        return Advance(Outcome.ALIVE, head=target, removed=removed)
