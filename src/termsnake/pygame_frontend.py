# pygame_frontend.py
from __future__ import annotations
from typing import Optional

import pygame # type: ignore

from .config import (
    BANNER, TITLE,
    BG, BORDER, GREEN, RED, WHITE, CYAN, MAGENTA, YELLOW, BLUE, TEXT,
    Settings,
)
from .controls import InputEvent
from .errors import InputReadFailure, RenderFailure
from .geometry import Position
from .render import Glyph, score_line

CELL_SIZE = 20

COLORS = {
    Glyph.BODY: GREEN,
    Glyph.HEAD: RED,
    Glyph.FOOD_MAGIC: WHITE,
    Glyph.FOOD_CYAN: CYAN,
    Glyph.FOOD_MAGENTA: MAGENTA,
    Glyph.FOOD_YELLOW: YELLOW,
    Glyph.FOOD_BLUE: BLUE,
}

KEYMAP = {
    pygame.K_UP: InputEvent.UP,
    pygame.K_DOWN: InputEvent.DOWN,
    pygame.K_LEFT: InputEvent.LEFT,
    pygame.K_RIGHT: InputEvent.RIGHT,
    pygame.K_w: InputEvent.UP,
    pygame.K_s: InputEvent.DOWN,
    pygame.K_a: InputEvent.LEFT,
    pygame.K_d: InputEvent.RIGHT,
    pygame.K_PLUS: InputEvent.SPEED_UP,
    pygame.K_EQUALS: InputEvent.SPEED_UP,
    pygame.K_KP_PLUS: InputEvent.SPEED_UP,
    pygame.K_MINUS: InputEvent.SPEED_DOWN,
    pygame.K_KP_MINUS: InputEvent.SPEED_DOWN,
    pygame.K_ESCAPE: InputEvent.QUIT,
}


class PygameSurface:
    """Window version of the board: same one-cell border, banner in row 0."""

    # SDL draws and flips only from the thread that opened the window
    main_thread_only = True

    def __init__(self, width: int, height: int, settings: Optional[Settings] = None, cell_size: int = CELL_SIZE):
        settings = settings or Settings()
        self.cell_size = cell_size
        self.screen = pygame.display.set_mode(((width + 2) * cell_size, (height + 2) * cell_size))
        pygame.display.set_caption(TITLE)
        # font_size is in terminal points; scale it to fit one cell row
        self.font = pygame.font.SysFont(settings.font_name, min(settings.font_size, cell_size))

    def _rect(self, gx: int, gy: int) -> pygame.Rect:
        return pygame.Rect((gx + 1) * self.cell_size, (gy + 1) * self.cell_size, self.cell_size, self.cell_size)

    def clear(self, width: int, height: int) -> None:
        self.screen.fill(BORDER)
        pygame.draw.rect(
            self.screen, BG,
            pygame.Rect(self.cell_size, self.cell_size, width * self.cell_size, height * self.cell_size),
        )

    def paint(self, position: Position, glyph: Glyph) -> None:
        pygame.draw.rect(self.screen, COLORS[glyph], self._rect(position.x, position.y))

    def erase(self, position: Position) -> None:
        pygame.draw.rect(self.screen, BG, self._rect(position.x, position.y))

    def write_score_line(self, score: int, length: int, width: int) -> None:
        banner = pygame.Rect(0, 0, (width + 2) * self.cell_size, self.cell_size)
        self.screen.fill(BORDER, banner)
        txt = self.font.render(score_line(score, length, width, BANNER), True, TEXT)
        self.screen.blit(txt, (self.cell_size, 0))

    def write_message(self, text: str, width: int, height: int) -> None:
        txt = self.font.render(text, True, WHITE)
        center = ((width + 2) * self.cell_size // 2, (height + 2) * self.cell_size // 2)
        self.screen.blit(txt, txt.get_rect(center=center))

    def refresh(self) -> None:
        try:
            pygame.display.flip()
        except pygame.error as e:
            raise RenderFailure(str(e)) from e


class PygameInput:
    """
    Drains the pygame event queue and hands out one key per poll. Must be
    polled from the main thread.
    """

    def __init__(self):
        self.pending: list[InputEvent] = []

    def poll(self) -> Optional[InputEvent]:
        try:
            events = pygame.event.get()
        except pygame.error as e:
            raise InputReadFailure(str(e)) from e
        for event in events:
            if event.type == pygame.QUIT:
                self.pending.append(InputEvent.QUIT)
            elif event.type == pygame.KEYDOWN and event.key in KEYMAP:
                self.pending.append(KEYMAP[event.key])
        return self.pending.pop(0) if self.pending else None
