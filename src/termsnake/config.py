# config.py
from __future__ import annotations
from dataclasses import dataclass, asdict, replace
import json
import logging
import os

logger = logging.getLogger(__name__)

# ----- Board (grid cells, not including the border) -----
GRID_W, GRID_H = 60, 24

# ----- Glyphs -----
BODY_CHAR = "▓"
HEAD_CHAR = "░"
FOOD_CHAR = "▒"

# ----- Colors (window frontend) -----
BG      = (0, 0, 0)
BORDER  = (160, 160, 160)
GREEN   = (0, 100, 0)
RED     = (200, 40, 40)
WHITE   = (240, 240, 240)
CYAN    = (0, 139, 139)
MAGENTA = (139, 0, 139)
YELLOW  = (184, 134, 11)
BLUE    = (40, 70, 220)
TEXT    = (10, 10, 10)

TITLE = "Snake Jr."
BANNER = "Snake Jr. ☺ 2022"
SETTINGS_FILE = "settings.json"


# ----- Tunables (what you'd tweak for difficulty) -----
@dataclass(frozen=True)
class Config:
    width: int = GRID_W
    height: int = GRID_H
    seed: int | None = None

    start_length: int = 3
    start_speed_ms: int = 200
    rate_horz_ms: int = 60           # glyphs are taller than wide, so horizontal runs faster
    rate_vert_ms: int = 80
    rate_step_ms: int = 10           # manual speed up / down
    rate_floor_ms: int = 20
    rate_ceiling_ms: int = 500
    ramp_per_food: int = 1           # both rates grow by this on every food

    growth_normal: int = 3
    growth_magic: int = 6
    food_points: int = 10
    food_min_distance: int = 8
    food_max_attempts: int = 1000

    score_interval_s: float = 2.0
    idle_bonus: int = 2
    game_over_pause_s: float = 2.5
    pause_poll_s: float = 0.05

    @property
    def start_position(self) -> tuple[int, int]:
        # left-most column, middle row
        return (0, self.height // 2)


CFG = Config()


# ----- Persisted settings (font preferences for the window frontend) -----
@dataclass
class Settings:
    font_name: str = "Consolas"
    font_size: int = 32


def load_settings(path: str = SETTINGS_FILE) -> Settings:
    """
    Load settings from a JSON file. A missing file is created with defaults;
    an unreadable one is logged and defaults are used instead.
    """
    if not os.path.exists(path):
        logger.debug("No settings found at %s, creating defaults", path)
        fresh = Settings()
        save_settings(fresh, path)
        return fresh

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        settings = Settings(
            font_name=str(raw.get("font_name", Settings.font_name)),
            font_size=int(raw.get("font_size", Settings.font_size)),
        )
    except (OSError, ValueError, AttributeError) as e:
        logger.warning("Could not load settings from %s: %s", path, e)
        return Settings()

    logger.debug("Settings loaded: %s", settings)
    return settings


def save_settings(settings: Settings, path: str = SETTINGS_FILE) -> bool:
    """Write settings as JSON. Returns False (and logs) when the write fails."""
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(asdict(settings), f, indent=2)
    except OSError as e:
        logger.warning("Could not save settings to %s: %s", path, e)
        return False
    logger.debug("Settings saved to %s", path)
    return True


def with_overrides(cfg: Config, **overrides) -> Config:
    """Return a copy of cfg with the non-None overrides applied."""
    return replace(cfg, **{k: v for k, v in overrides.items() if v is not None})
