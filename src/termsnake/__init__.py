# src/termsnake/__init__.py
"""Snake Jr.: a terminal snake game."""

from termsnake.body import Advance, Outcome, Snake
from termsnake.config import CFG, Config
from termsnake.controls import DirectionState, InputEvent, ThreadedInput
from termsnake.food import FoodDrop, place_food
from termsnake.game import GameSession, SnakeGame, new_session
from termsnake.geometry import Direction, Position, in_bounds, next_position, opposite, prev_position

__version__ = "1.0.0"

__all__ = [
    "Advance", "Outcome", "Snake",
    "CFG", "Config",
    "DirectionState", "InputEvent", "ThreadedInput",
    "FoodDrop", "place_food",
    "GameSession", "SnakeGame", "new_session",
    "Direction", "Position", "in_bounds", "next_position", "opposite", "prev_position",
]
