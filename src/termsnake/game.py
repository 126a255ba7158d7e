# game.py
from __future__ import annotations
from dataclasses import dataclass
import logging
import random
import time
from typing import Callable, Optional

from .body import Snake
from .config import CFG, Config
from .controls import DirectionState, InputEvent, InputSource
from .errors import InputReadFailure
from .food import FoodDrop, place_food
from .geometry import Position, in_bounds, next_position
from .render import Drawer, Surface
from .sound import SilentTone, Tone, play_async
from .timer import RepeatingTimer

logger = logging.getLogger(__name__)


# ---------- State ----------
@dataclass
class GameSession:
    snake: Snake                   # tail first, head last
    controls: DirectionState       # heading, speed, rates
    target_length: int
    food: Optional[FoodDrop] = None
    special: bool = False          # last placed food was magic
    score: int = 0
    ticks: int = 0

    def award(self, points: int) -> None:
        self.score += points


def new_session(cfg: Config = CFG) -> GameSession:
    return GameSession(
        snake=Snake.seed(Position(*cfg.start_position)),
        controls=DirectionState.initial(cfg),
        target_length=cfg.start_length,
    )


# ---------- Controller ----------
class SnakeGame:
    """
    Runs games back to back until the player quits.

    One game: setup, then ticks until the snake leaves the board or runs
    into itself, then the game-over screen. A background timer redraws the
    score every few seconds, or hands out a small survival bonus when it
    catches the screen mid-draw.
    """

    def __init__(
        self,
        surface: Surface,
        source: Optional[InputSource],
        cfg: Config = CFG,
        tone: Optional[Tone] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.cfg = cfg
        self.source = source
        self.tone = tone or SilentTone()
        self.rng = rng or random.Random(cfg.seed)
        self.sleep = sleep
        self.drawer = Drawer(surface, cfg.width, cfg.height)
        self.timer = RepeatingTimer(cfg.score_interval_s, self.check_state)
        self.session: Optional[GameSession] = None
        self.running = True
        self.loop_count = 0
        self.score_dirty = False

    def quit(self) -> None:
        self.running = False

    # ---------- Setup ----------
    def setup(self) -> GameSession:
        self.session = new_session(self.cfg)
        self.drawer.draw_board()
        self.drawer.draw_head(self.session.snake.head)
        self.show_score()
        return self.session

    def show_score(self) -> None:
        s = self.session
        if s is not None:
            self.drawer.show_score(s.score, s.target_length)

    # ---------- Input ----------
    def read_input(self) -> None:
        try:
            event = self.source.poll()
        except InputReadFailure as e:
            logger.warning("Input read failed: %s", e)
            return
        if event is not None:
            logger.debug("Input: %s", event)
        if not self.session.controls.apply(event):
            logger.info("Quit requested")
            self.quit()

    # ---------- One tick ----------
    def tick(self) -> bool:
        """
        Advance the game by one step. Returns True if the snake is alive,
        False on game over. Does not sleep; see `play()`.
        """
        s = self.session
        if s is None:
            raise RuntimeError("tick() before setup()")
        s.ticks += 1
        self.loop_count += 1

        # 1) latest heading
        self.read_input()

        # 2) where we'll be
        previous_head = s.snake.head
        target = next_position(s.controls.direction, previous_head)

        # 3) walls, then body
        if not in_bounds(target, self.cfg.width, self.cfg.height):
            logger.info("Out of bounds at %s after %d ticks", target, s.ticks)
            return False
        step = s.snake.try_advance(target, s.target_length)
        if not step.alive:
            logger.info("Self collision at %s after %d ticks", target, s.ticks)
            return False

        # 4) food
        ate = s.food is not None and target == s.food.position
        if ate:
            self.eat(s)

        # 5) restock
        placed = None
        if s.food is None:
            placed = s.food = place_food(
                self.cfg.width, self.cfg.height, s.snake, self.rng,
                min_distance=self.cfg.food_min_distance,
                max_attempts=self.cfg.food_max_attempts,
            )
            if placed is not None:
                s.special = placed.magic

        # 6) draw
        self.drawer.draw_move(previous_head, step)
        self.drawer.draw_food(placed)
        if ate or self.score_dirty:
            self.score_dirty = False
            self.show_score()

        return True

    def eat(self, s: GameSession) -> None:
        s.food = None
        if s.special:
            s.special = False
            s.target_length += self.cfg.growth_magic
        else:
            s.target_length += self.cfg.growth_normal
        s.award(self.cfg.food_points + s.target_length)
        # auto-adjust the difficulty
        s.controls.grow_rates(self.cfg.ramp_per_food)
        logger.debug("Ate food: length=%d score=%d", s.target_length, s.score)

    # ---------- One game ----------
    def play(self) -> GameSession:
        """Setup plus ticks until game over or quit. Returns the finished session."""
        s = self.setup()
        while self.tick() and self.running:
            self.sleep(s.controls.speed_ms / 1000.0)
        return s

    def game_over(self) -> None:
        if self.running:
            self.drawer.show_message("Game Over")
            # some tone backends block while the sound plays
            play_async(self.tone)
        else:
            self.drawer.show_message("Good Bye ☺")
            self.timer.stop()
        self.pause(self.cfg.game_over_pause_s)

    def pause(self, seconds: float) -> None:
        """
        Wait on the end screen in short naps, draining input between them so
        a window keeps answering the OS. Keys are dropped; QUIT still counts.
        """
        remaining = seconds
        while remaining > 0:
            try:
                if self.source.poll() is InputEvent.QUIT:
                    logger.info("Quit requested")
                    self.quit()
            except InputReadFailure as e:
                logger.warning("Input read failed: %s", e)
            nap = min(self.cfg.pause_poll_s, remaining)
            self.sleep(nap)
            remaining -= nap

    # ---------- All games ----------
    def run(self) -> None:
        self.timer.start()
        try:
            while self.running:
                s = self.play()
                logger.info("Game finished: score=%d length=%d ticks=%d", s.score, len(s.snake), s.ticks)
                self.game_over()
        finally:
            self.timer.stop()

    # ---------- Background scoring ----------
    def check_state(self) -> None:
        """Timer callback. Reads `drawing` without the lock on purpose."""
        interval = self.cfg.score_interval_s
        logger.debug("Loops/sec: %.1f", self.loop_count / interval if interval else 0.0)
        self.loop_count = 0

        s = self.session
        if s is None:
            return
        if self.drawer.drawing:
            # award some points just for staying alive
            s.award(self.cfg.idle_bonus)
        elif self.drawer.surface.main_thread_only:
            # the next tick redraws it
            self.score_dirty = True
        else:
            self.show_score()
