"""term-snake — a terminal Snake game."""

from term_snake.engine import GameEngine, GameOutcome
from term_snake.food import place_food
from term_snake.grid import GridConfig, WallMode
from term_snake.session import GameState, Session
from term_snake.settings import Settings, SettingsError, SettingsStore
from term_snake.snake import AdvanceResult, Direction, Snake

__all__ = [
    "AdvanceResult",
    "Direction",
    "GameEngine",
    "GameOutcome",
    "GameState",
    "GridConfig",
    "Session",
    "Settings",
    "SettingsError",
    "SettingsStore",
    "Snake",
    "WallMode",
    "place_food",
]
