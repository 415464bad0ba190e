"""Step-based game engine composing grid, snake, and food logic."""

from __future__ import annotations

import enum
import logging

import numpy as np

from term_snake.food import place_food
from term_snake.grid import GridConfig
from term_snake.snake import AdvanceResult, Direction, Snake

logger = logging.getLogger(__name__)

INITIAL_LENGTH = 5


class GameOutcome(enum.Enum):
    """Why a game ended."""

    SELF_COLLISION = "self_collision"
    WALL = "wall"


class GameEngine:
    """Single-snake, step-based game engine.

    The engine owns the snake and the food position for one game. Each call
    to :meth:`step` advances the game by one tick and returns the updated
    state dictionary.
    """

    def __init__(
        self,
        grid: GridConfig | None = None,
        initial_length: int = INITIAL_LENGTH,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid if grid is not None else GridConfig()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.initial_length = initial_length

        self.snake = self.spawn_snake(self.grid, initial_length)
        self.food = place_food(self.snake, self.grid, self.rng)
        self.tick = 0
        self.game_over = False
        self.outcome: GameOutcome | None = None
        self.last_advance: AdvanceResult | None = None
        self._pending_direction: Direction | None = None
        logger.info(
            "New game on %dx%d grid (%s).",
            self.grid.width, self.grid.height, self.grid.wall_mode.value,
        )

    @staticmethod
    def spawn_snake(grid: GridConfig, length: int = INITIAL_LENGTH) -> Snake:
        """Place a new snake at the grid centre, heading up.

        On short grids the head is raised so the tail stays above the
        bottom border. Raises ``ValueError`` if the body is taller than
        the playable area.
        """
        lowest_head = grid.height - 1 - grid.border - (length - 1)
        y = min(grid.height // 2, lowest_head)
        snake = Snake(grid.width // 2, y, Direction.UP, length)
        if not all(grid.contains(seg) for seg in snake.body):
            raise ValueError(
                "initial_length does not fit the grid; increase grid size "
                "or reduce initial_length."
            )
        return snake

    @property
    def score(self) -> int:
        """Segments gained since the start of the game."""
        return len(self.snake) - self.initial_length

    def set_direction(self, direction: Direction | None) -> None:
        """Buffer at most one direction request for the next step."""
        if direction is None or self._pending_direction is not None:
            return
        self._pending_direction = direction

    def step(self) -> dict:
        """Advance the game by one tick.

        Returns the full game state as a serializable dict.
        """
        if self.game_over:
            return self.get_state()

        result = self.snake.advance(self._pending_direction, self.grid)
        self._pending_direction = None
        self.last_advance = result
        self.tick += 1

        if result.collision:
            self._end(GameOutcome.SELF_COLLISION)
        elif result.boundary_violation:
            self._end(GameOutcome.WALL)
        elif result.head == self.food:
            self.snake.grow()
            self.food = place_food(self.snake, self.grid, self.rng)

        return self.get_state()

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "score": self.score,
            "game_over": self.game_over,
            "outcome": self.outcome.value if self.outcome else None,
            "grid": self.grid.to_dict(),
            "snake": self.snake.to_dict(),
            "food": list(self.food) if self.food is not None else None,
        }

    def _end(self, outcome: GameOutcome) -> None:
        """Freeze the game with the given outcome."""
        self.game_over = True
        self.outcome = outcome
        logger.info(
            "Game over (%s) at tick %d with score %d.",
            outcome.value, self.tick, self.score,
        )
