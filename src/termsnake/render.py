# render.py
from __future__ import annotations
from contextlib import contextmanager
from enum import Enum
import logging
import threading
from typing import Iterator, Optional, Protocol

from .body import Advance
from .errors import RenderFailure
from .food import FoodDrop
from .geometry import Position

logger = logging.getLogger(__name__)


class Glyph(Enum):
    BODY = "body"
    HEAD = "head"
    FOOD_MAGIC = "magic"
    FOOD_CYAN = "cyan"
    FOOD_MAGENTA = "magenta"
    FOOD_YELLOW = "yellow"
    FOOD_BLUE = "blue"

    @classmethod
    def for_food(cls, food: FoodDrop) -> "Glyph":
        return cls(food.tier)


class Surface(Protocol):
    """What the game needs from a display. Grid coordinates, not pixels."""

    # True when only the main thread may draw; background redraws are deferred
    main_thread_only: bool

    def clear(self, width: int, height: int) -> None: ...
    def paint(self, position: Position, glyph: Glyph) -> None: ...
    def erase(self, position: Position) -> None: ...
    def write_score_line(self, score: int, length: int, width: int) -> None: ...
    def write_message(self, text: str, width: int, height: int) -> None: ...
    def refresh(self) -> None: ...


def score_line(score: int, length: int, width: int, banner: str) -> str:
    """Banner text; column spacing shrinks with the board width."""
    if width >= 70:
        cols = (16, 35)
    elif width >= 50:
        cols = (13, 28)
    else:
        cols = (8, 16)
    return f"Score: {score:06d}    {'Len: ' + str(length):>{cols[0]}} {banner:>{cols[1]}}"


class Drawer:
    """
    Serializes every write to the surface.

    `drawing` is True while a draw call holds the lock. Other threads may
    read it without locking to decide whether to wait or do something else.
    """

    def __init__(self, surface: Surface, width: int, height: int):
        self.surface = surface
        self.width = width
        self.height = height
        self.drawing = False
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @contextmanager
    def draw_call(self) -> Iterator[Surface]:
        with self._lock:
            self.drawing = True
            try:
                yield self.surface
                self.surface.refresh()
            except RenderFailure as e:
                logger.warning("Render failed: %s", e)
            finally:
                self.drawing = False

    # ---------- Drawing helpers ----------
    def draw_board(self) -> None:
        with self.draw_call() as s:
            s.clear(self.width, self.height)

    def draw_move(self, previous_head: Position, step: Advance) -> None:
        """Repaint the old head as body, paint the new head, erase the dropped tail."""
        if step.head is None:
            return
        with self.draw_call() as s:
            s.paint(previous_head, Glyph.BODY)
            s.paint(step.head, Glyph.HEAD)
            if step.removed is not None:
                s.erase(step.removed)

    def draw_head(self, position: Position) -> None:
        with self.draw_call() as s:
            s.paint(position, Glyph.HEAD)

    def draw_food(self, food: Optional[FoodDrop]) -> None:
        if food is None:
            return
        with self.draw_call() as s:
            s.paint(food.position, Glyph.for_food(food))

    def show_score(self, score: int, length: int) -> None:
        with self.draw_call() as s:
            s.write_score_line(score, length, self.width)

    def show_message(self, text: str) -> None:
        with self.draw_call() as s:
            s.write_message(text, self.width, self.height)
