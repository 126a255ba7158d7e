"""
Shared fakes for the game's collaborators: a surface that records draw
calls, a keyboard that replays a script, and a tone that counts plays.
"""
from __future__ import annotations

import random
import threading
from typing import Iterable, Optional

import pytest

from termsnake.config import Config
from termsnake.controls import InputEvent
from termsnake.errors import RenderFailure
from termsnake.game import SnakeGame


class RecordingSurface:
    def __init__(self, fail_on: Iterable[str] = (), main_thread_only: bool = False):
        self.calls: list[tuple] = []
        self.fail_on = set(fail_on)
        self.main_thread_only = main_thread_only
        self.threads: set[str] = set()

    def _record(self, *call) -> None:
        self.calls.append(call)
        self.threads.add(threading.current_thread().name)
        if call[0] in self.fail_on:
            raise RenderFailure(f"{call[0]} failed")

    def clear(self, width, height):
        self._record("clear", width, height)

    def paint(self, position, glyph):
        self._record("paint", position, glyph)

    def erase(self, position):
        self._record("erase", position)

    def write_score_line(self, score, length, width):
        self._record("score", score, length, width)

    def write_message(self, text, width, height):
        self._record("message", text)

    def refresh(self):
        self._record("refresh")

    def named(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]


class ScriptedInput:
    """Hands out one scripted event per poll, then None forever."""

    def __init__(self, events: Iterable[Optional[InputEvent]] = ()):
        self.events = list(events)
        self.polls = 0

    def poll(self) -> Optional[InputEvent]:
        self.polls += 1
        return self.events.pop(0) if self.events else None


class RecordingTone:
    def __init__(self):
        self.played = threading.Event()
        self.count = 0

    def play(self) -> None:
        self.count += 1
        self.played.set()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def small_cfg() -> Config:
    return Config(width=10, height=10, game_over_pause_s=0.0, score_interval_s=60.0)


@pytest.fixture
def make_game(surface, small_cfg):
    """Build a SnakeGame that never really sleeps."""
    def _make(events=(), cfg: Optional[Config] = None, tone=None, seed: int = 7) -> SnakeGame:
        sleeps: list[float] = []
        game = SnakeGame(
            surface,
            ScriptedInput(events),
            cfg=cfg or small_cfg,
            tone=tone,
            rng=random.Random(seed),
            sleep=sleeps.append,
        )
        game.sleeps = sleeps
        return game
    return _make
