# geometry.py
from __future__ import annotations
from enum import Enum
from typing import NamedTuple


class Position(NamedTuple):
    x: int
    y: int


# ----- Directions (dx, dy) -----
class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def vertical(self) -> bool:
        return self.dx == 0


def opposite(direction: Direction) -> Direction:
    return Direction((-direction.dx, -direction.dy))


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.dx == -b.dx and a.dy == -b.dy


def next_position(direction: Direction, position: Position) -> Position:
    """Where the head will be after one step in `direction`."""
    return Position(position.x + direction.dx, position.y + direction.dy)


def prev_position(direction: Direction, position: Position) -> Position:
    """Where the head was one step ago, moving in `direction`."""
    return Position(position.x - direction.dx, position.y - direction.dy)


def in_bounds(position: Position, width: int, height: int) -> bool:
    """Check if a cell is inside the grid."""
    return 0 <= position.x < width and 0 <= position.y < height


def manhattan(a: Position, b: Position) -> int:
    """Manhattan (L1) distance on the grid."""
    return abs(a.x - b.x) + abs(a.y - b.y)
