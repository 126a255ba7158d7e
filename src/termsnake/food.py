# food.py
from __future__ import annotations
from dataclasses import dataclass
import logging
import random
from typing import Optional

import numpy as np  # type: ignore

from .body import Snake
from .geometry import Position, manhattan

logger = logging.getLogger(__name__)

# Flavor is a roll in [0, FLAVORS); the lowest rolls are magic (2 in 11).
FLAVORS = 11
MAGIC_BELOW = 2


@dataclass(frozen=True)
class FoodDrop:
    position: Position
    flavor: int = FLAVORS - 1

    @property
    def magic(self) -> bool:
        return self.flavor < MAGIC_BELOW

    @property
    def tier(self) -> str:
        """Cosmetic tier; the body is green so no tier is drawn green."""
        if self.flavor >= 8:
            return "blue"
        if self.flavor >= 6:
            return "yellow"
        if self.flavor >= 4:
            return "magenta"
        if self.flavor >= 2:
            return "cyan"
        return "magic"


def place_food(
    width: int,
    height: int,
    snake: Snake,
    rng: Optional[random.Random] = None,
    min_distance: int = 8,
    max_attempts: int = 1000,
) -> Optional[FoodDrop]:
    """
    Find a free cell that is more than `min_distance` steps (Manhattan) from
    the head. Random sampling is tried first; if that keeps missing, the
    whole board is scanned (see `_fallback_cell`). Returns None only when
    every cell is taken by the snake.
    """
    rng = rng or random.Random()
    flavor = rng.randrange(FLAVORS)
    head = snake.head

    for _ in range(max_attempts):
        cell = Position(rng.randrange(width), rng.randrange(height))
        if cell not in snake and manhattan(cell, head) > min_distance:
            return FoodDrop(cell, flavor)

    logger.debug("Food sampling gave up after %d attempts, scanning board", max_attempts)
    cell = _fallback_cell(width, height, snake, rng, min_distance)
    if cell is None:
        logger.info("Board is full, no room for food")
        return None
    return FoodDrop(cell, flavor)


def _fallback_cell(
    width: int,
    height: int,
    snake: Snake,
    rng: random.Random,
    min_distance: int,
) -> Optional[Position]:
    """
    Pick uniformly among free cells that still satisfy the distance rule.
    When none do, take the free cell farthest from the head instead.
    """
    free = np.ones((height, width), dtype=bool)
    for x, y in snake:
        if 0 <= x < width and 0 <= y < height:
            free[y, x] = False
    if not free.any():
        return None

    ys, xs = np.mgrid[0:height, 0:width]
    head = snake.head
    dist = np.abs(xs - head.x) + np.abs(ys - head.y)

    fair = free & (dist > min_distance)
    if fair.any():
        cy, cx = np.nonzero(fair)
        i = rng.randrange(len(cx))
        return Position(int(cx[i]), int(cy[i]))

    # Nothing is far enough away: relax the rule to "as far as possible".
    dist = np.where(free, dist, -1)
    cy, cx = np.unravel_index(int(np.argmax(dist)), dist.shape)
    return Position(int(cx), int(cy))
