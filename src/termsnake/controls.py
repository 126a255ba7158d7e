# controls.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import logging
import queue
import threading
import time
from typing import Optional, Protocol

from .config import CFG, Config
from .errors import InputReadFailure
from .geometry import Direction, is_opposite

logger = logging.getLogger(__name__)


class InputEvent(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SPEED_UP = "speed_up"
    SPEED_DOWN = "speed_down"
    QUIT = "quit"

    @property
    def direction(self) -> Optional[Direction]:
        return _DIRECTIONS.get(self)


_DIRECTIONS = {
    InputEvent.UP: Direction.UP,
    InputEvent.DOWN: Direction.DOWN,
    InputEvent.LEFT: Direction.LEFT,
    InputEvent.RIGHT: Direction.RIGHT,
}


class InputSource(Protocol):
    def poll(self) -> Optional[InputEvent]:
        """Return a queued event, or None right away if there is none."""
        ...


# ---------- Heading + speed ----------
@dataclass
class DirectionState:
    """
    Current heading and tick delays.

    `speed_ms` is the delay actually used between ticks. It starts at the
    configured start speed and switches to the horizontal or vertical rate
    once the player steers.
    """
    direction: Direction
    speed_ms: int
    rate_horz_ms: int
    rate_vert_ms: int
    cfg: Config = CFG

    @classmethod
    def initial(cls, cfg: Config = CFG) -> "DirectionState":
        return cls(
            direction=Direction.RIGHT,
            speed_ms=cfg.start_speed_ms,
            rate_horz_ms=cfg.rate_horz_ms,
            rate_vert_ms=cfg.rate_vert_ms,
            cfg=cfg,
        )

    def axis_rate(self) -> int:
        return self.rate_vert_ms if self.direction.vertical else self.rate_horz_ms

    def steer(self, direction: Direction) -> bool:
        """Turn to `direction` unless that is a 180° reversal. Returns True if accepted."""
        if is_opposite(direction, self.direction):
            return False
        self.direction = direction
        self.speed_ms = self.axis_rate()
        return True

    def speed_up(self) -> None:
        step, floor = self.cfg.rate_step_ms, self.cfg.rate_floor_ms
        self.rate_horz_ms = max(floor, self.rate_horz_ms - step)
        self.rate_vert_ms = max(floor, self.rate_vert_ms - step)
        self.speed_ms = self.axis_rate()
        logger.debug("Speed increase: %d", self.speed_ms)

    def speed_down(self) -> None:
        step, ceiling = self.cfg.rate_step_ms, self.cfg.rate_ceiling_ms
        self.rate_horz_ms = min(ceiling, self.rate_horz_ms + step)
        self.rate_vert_ms = min(ceiling, self.rate_vert_ms + step)
        self.speed_ms = self.axis_rate()
        logger.debug("Speed decrease: %d", self.speed_ms)

    def grow_rates(self, amount: int) -> None:
        """Difficulty ramp on food; does not touch the current speed."""
        self.rate_horz_ms += amount
        self.rate_vert_ms += amount

    def apply(self, event: Optional[InputEvent]) -> bool:
        """
        Apply one input event. Returns False if the event asks to quit,
        True otherwise (including when there was no event).
        """
        if event is None:
            return True
        if event is InputEvent.QUIT:
            return False
        if event is InputEvent.SPEED_UP:
            self.speed_up()
        elif event is InputEvent.SPEED_DOWN:
            self.speed_down()
        else:
            self.steer(event.direction)
        return True


# ---------- Input sources ----------
class ThreadedInput:
    """
    Reads another source on a dedicated daemon thread and queues the events.

    The wrapped source may block; `poll()` never does. Only use this with
    sources that are safe to read off the main thread (the curses one is,
    pygame's event queue is not).
    """

    def __init__(self, source: InputSource, idle_s: float = 0.01):
        self.source = source
        self.idle_s = idle_s
        self.events: "queue.Queue[InputEvent]" = queue.Queue()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> "ThreadedInput":
        if self._thread is None:
            self._thread = threading.Thread(target=self._read_loop, name="input-reader", daemon=True)
            self._thread.start()
        return self

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None

    def _read_loop(self) -> None:
        while not self._stop.is_set():
            try:
                event = self.source.poll()
            except InputReadFailure as e:
                logger.warning("Input read failed: %s", e)
                event = None
            if event is None:
                time.sleep(self.idle_s)
                continue
            logger.debug("Input: %s", event)
            self.events.put(event)

    def poll(self) -> Optional[InputEvent]:
        try:
            return self.events.get_nowait()
        except queue.Empty:
            return None
