# sound.py
from __future__ import annotations
import logging
import threading
from typing import Protocol

import numpy as np  # type: ignore
import pygame       # type: ignore

logger = logging.getLogger(__name__)

SAMPLE_RATE = 22050


class Tone(Protocol):
    def play(self) -> None: ...


def play_async(tone: Tone) -> threading.Thread:
    """Fire-and-forget: some backends block for the length of the sound."""
    def _play() -> None:
        try:
            tone.play()
        except (pygame.error, OSError) as e:
            logger.warning("Tone failed: %s", e)

    t = threading.Thread(target=_play, name="tone", daemon=True)
    t.start()
    return t


class SilentTone:
    def play(self) -> None:
        pass


class TerminalBell:
    """Audible bell through curses (falls back to a flash if the terminal has none)."""

    def play(self) -> None:
        import curses
        try:
            curses.beep()
        except curses.error:
            logger.debug("Terminal bell unavailable")


def synth_sweep(
    frequency_hz: float,
    duration_ms: int,
    end_frequency_hz: float | None = None,
    volume: float = 0.3,
    release_ms: int = 120,
    sample_rate: int = SAMPLE_RATE,
) -> np.ndarray:
    """Mono 16-bit sine sweep with a linear fade-out."""
    n = max(1, int(sample_rate * duration_ms / 1000))
    end_frequency_hz = frequency_hz if end_frequency_hz is None else end_frequency_hz

    freq = np.linspace(frequency_hz, end_frequency_hz, n)
    phase = 2.0 * np.pi * np.cumsum(freq) / sample_rate

    env = np.ones(n)
    release = min(n, int(sample_rate * release_ms / 1000))
    if release > 0:
        env[n - release:] = np.linspace(1.0, 0.0, release)

    amplitude = 32767 * max(0.0, min(volume, 1.0))
    return (amplitude * env * np.sin(phase)).astype(np.int16)


class PygameTone:
    """Game-over sweep through pygame.mixer. Silently disabled if audio is unavailable."""

    def __init__(self, frequency_hz: float = 420, duration_ms: int = 420, end_frequency_hz: float = 110):
        self.sound = None
        try:
            if pygame.mixer.get_init() is None:
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1, buffer=512)
            samples = synth_sweep(frequency_hz, duration_ms, end_frequency_hz)
            self.sound = pygame.mixer.Sound(buffer=samples.tobytes())
        except pygame.error as e:
            logger.info("Audio disabled: %s", e)

    @property
    def enabled(self) -> bool:
        return self.sound is not None

    def play(self) -> None:
        if self.sound is not None:
            self.sound.play()
