# curses_frontend.py
from __future__ import annotations
import curses
import threading
from typing import Optional

from .config import BANNER, BODY_CHAR, FOOD_CHAR, HEAD_CHAR
from .controls import InputEvent
from .errors import InputReadFailure, RenderFailure
from .geometry import Position
from .render import Glyph, score_line

# ----- Keys -----
KEYMAP = {
    curses.KEY_UP: InputEvent.UP,
    curses.KEY_DOWN: InputEvent.DOWN,
    curses.KEY_LEFT: InputEvent.LEFT,
    curses.KEY_RIGHT: InputEvent.RIGHT,
    ord("w"): InputEvent.UP,
    ord("s"): InputEvent.DOWN,
    ord("a"): InputEvent.LEFT,
    ord("d"): InputEvent.RIGHT,
    ord("+"): InputEvent.SPEED_UP,
    ord("="): InputEvent.SPEED_UP,
    ord("-"): InputEvent.SPEED_DOWN,
    ord("_"): InputEvent.SPEED_DOWN,
    27: InputEvent.QUIT,  # ESC
    ord("q"): InputEvent.QUIT,
}


def key_to_event(key: int) -> Optional[InputEvent]:
    if 0 <= key < 256:
        key = ord(chr(key).lower())
    return KEYMAP.get(key)


# ----- Color pairs (curses pairs start at 1) -----
PAIR_BORDER, PAIR_BODY, PAIR_HEAD, PAIR_EMPTY, PAIR_BANNER = 1, 2, 3, 4, 5
FOOD_PAIRS = {
    Glyph.FOOD_MAGIC: (6, curses.COLOR_WHITE),
    Glyph.FOOD_CYAN: (7, curses.COLOR_CYAN),
    Glyph.FOOD_MAGENTA: (8, curses.COLOR_MAGENTA),
    Glyph.FOOD_YELLOW: (9, curses.COLOR_YELLOW),
    Glyph.FOOD_BLUE: (10, curses.COLOR_BLUE),
}


class CursesSurface:
    """
    Draws the board inside a one-cell border. Grid cell (x, y) lives at
    screen row y + 1, column x + 1; row 0 doubles as the score banner.
    """

    main_thread_only = False

    def __init__(self, window):
        self.window = window
        self._colors = False
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        if curses.has_colors():
            curses.start_color()
            curses.init_pair(PAIR_BORDER, curses.COLOR_BLACK, curses.COLOR_WHITE)
            curses.init_pair(PAIR_BODY, curses.COLOR_GREEN, curses.COLOR_GREEN)
            curses.init_pair(PAIR_HEAD, curses.COLOR_WHITE, curses.COLOR_RED)
            curses.init_pair(PAIR_EMPTY, curses.COLOR_BLACK, curses.COLOR_BLACK)
            curses.init_pair(PAIR_BANNER, curses.COLOR_BLACK, curses.COLOR_WHITE)
            for pair, color in FOOD_PAIRS.values():
                curses.init_pair(pair, curses.COLOR_BLACK, color)
            self._colors = True

    def _attr(self, pair: int) -> int:
        return curses.color_pair(pair) if self._colors else curses.A_NORMAL

    def _put(self, row: int, col: int, text: str, pair: int) -> None:
        try:
            self.window.addstr(row, col, text, self._attr(pair))
        except curses.error as e:
            # writing the bottom-right cell moves the cursor off screen and
            # raises even though the glyph was drawn
            rows, cols = self.window.getmaxyx()
            if (row, col + len(text)) != (rows - 1, cols):
                raise RenderFailure(f"addstr({row}, {col}) failed: {e}") from e

    def clear(self, width: int, height: int) -> None:
        rows, cols = self.window.getmaxyx()
        if rows < height + 2 or cols < width + 2:
            raise RenderFailure(f"terminal is {cols}x{rows}, need {width + 2}x{height + 2}")
        self.window.erase()
        for row in range(height + 2):
            self._put(row, 0, " " * (width + 2), PAIR_BORDER)
        for row in range(1, height + 1):
            self._put(row, 1, " " * width, PAIR_EMPTY)

    def paint(self, position: Position, glyph: Glyph) -> None:
        if glyph is Glyph.HEAD:
            self._put(position.y + 1, position.x + 1, HEAD_CHAR, PAIR_HEAD)
        elif glyph is Glyph.BODY:
            self._put(position.y + 1, position.x + 1, BODY_CHAR, PAIR_BODY)
        else:
            self._put(position.y + 1, position.x + 1, FOOD_CHAR, FOOD_PAIRS[glyph][0])

    def erase(self, position: Position) -> None:
        self._put(position.y + 1, position.x + 1, " ", PAIR_EMPTY)

    def write_score_line(self, score: int, length: int, width: int) -> None:
        self._put(0, 1, score_line(score, length, width, BANNER)[:width], PAIR_BANNER)

    def write_message(self, text: str, width: int, height: int) -> None:
        col = max(1, (width + 2) // 2 - len(text) // 2)
        self._put((height + 2) // 2, col, text, PAIR_BANNER)

    def refresh(self) -> None:
        try:
            self.window.refresh()
        except curses.error as e:
            raise RenderFailure(f"refresh failed: {e}") from e


class CursesInput:
    """
    Non-blocking keyboard poll. `getch()` refreshes the window, so it takes
    the drawer's lock to stay out of the way of other threads drawing.
    """

    def __init__(self, window, lock: Optional[threading.RLock] = None):
        self.window = window
        self.lock = lock or threading.RLock()
        self.window.nodelay(True)
        self.window.keypad(True)

    def poll(self) -> Optional[InputEvent]:
        with self.lock:
            try:
                key = self.window.getch()
            except curses.error as e:
                raise InputReadFailure(str(e)) from e
        if key == -1:
            return None
        return key_to_event(key)
