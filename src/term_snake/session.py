"""Menu and game lifecycle for one run of the program."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING

from term_snake.controls import Command
from term_snake.engine import INITIAL_LENGTH, GameEngine
from term_snake.grid import GridConfig

if TYPE_CHECKING:
    from term_snake.settings import Settings, SettingsStore

logger = logging.getLogger(__name__)


class GameState(enum.Enum):
    """Screens the session moves between."""

    WELCOME = "welcome"
    OPTIONS = "options"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    EXITED = "exited"


class Session:
    """Drives the WELCOME → PLAYING → GAME_OVER cycle.

    ``OPTIONS`` is reachable from ``WELCOME`` and only edits settings.
    ``EXITED`` is terminal: the main loop stops once it is reached.
    """

    def __init__(
        self,
        settings: Settings,
        width: int,
        height: int,
        store: SettingsStore | None = None,
        seed: int | None = None,
        initial_length: int = INITIAL_LENGTH,
        overrides: dict[str, bool] | None = None,
    ) -> None:
        # Bounded mode has the smaller playable area.
        GameEngine.spawn_snake(GridConfig(width, height), initial_length)
        self.stored = settings
        self.overrides = dict(overrides or {})
        self.settings = settings.model_copy(update=self.overrides)
        self.width = width
        self.height = height
        self.store = store
        self.seed = seed
        self.initial_length = initial_length
        self.state = GameState.WELCOME
        self.engine: GameEngine | None = None
        self.final_score: int | None = None
        self.games_played = 0

    @property
    def finished(self) -> bool:
        return self.state == GameState.EXITED

    def handle(self, command: Command | None) -> GameState:
        """Apply one polled command; in ``PLAYING`` this is one tick."""
        if self.state == GameState.EXITED:
            return self.state
        if command == Command.QUIT:
            self._transition(GameState.EXITED)
            return self.state

        handlers = {
            GameState.WELCOME: self._handle_welcome,
            GameState.OPTIONS: self._handle_options,
            GameState.PLAYING: self._handle_playing,
            GameState.GAME_OVER: self._handle_game_over,
        }
        handlers[self.state](command)
        return self.state

    def start_game(self) -> GameEngine:
        """Begin a fresh game with the current settings."""
        grid = GridConfig.from_settings(self.width, self.height, self.settings)
        # Derive a distinct seed per game.
        seed = None if self.seed is None else self.seed + self.games_played
        self.engine = GameEngine(
            grid, initial_length=self.initial_length, seed=seed,
        )
        self.games_played += 1
        self.final_score = None
        self._transition(GameState.PLAYING)
        return self.engine

    def _handle_welcome(self, command: Command | None) -> None:
        if command in (Command.SELECT_1, Command.CONFIRM):
            self.start_game()
        elif command == Command.SELECT_2:
            self._transition(GameState.OPTIONS)

    def _handle_options(self, command: Command | None) -> None:
        if command == Command.SELECT_1:
            self._toggle("vim_mode")
        elif command == Command.SELECT_2:
            self._toggle("no_wall_mode")
        elif command in (Command.SELECT_3, Command.CONFIRM):
            self._transition(GameState.WELCOME)

    def _handle_playing(self, command: Command | None) -> None:
        assert self.engine is not None  # noqa: S101
        if command is not None:
            self.engine.set_direction(command.direction)
        self.engine.step()
        if self.engine.game_over:
            self.final_score = self.engine.score
            self._transition(GameState.GAME_OVER)

    def _handle_game_over(self, command: Command | None) -> None:
        if command in (Command.SELECT_1, Command.CONFIRM):
            self.engine = None
            self._transition(GameState.WELCOME)

    def _toggle(self, name: str) -> None:
        """Flip *name* as shown and save it without the other overrides."""
        value = not getattr(self.settings, name)
        self.overrides.pop(name, None)
        if getattr(self.stored, name) != value:
            self.stored = self.stored.toggled(name)
        self.settings = self.stored.model_copy(update=self.overrides)
        if self.store is not None:
            self.store.save(self.stored)

    def _transition(self, state: GameState) -> None:
        logger.debug("Session %s -> %s", self.state.value, state.value)
        self.state = state
