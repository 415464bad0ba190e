"""Tick-driven main loop tying the session to the terminal."""

from __future__ import annotations

import curses
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from term_snake.controls import KeyPoller
from term_snake.render import CursesRenderer
from term_snake.session import GameState, Session

if TYPE_CHECKING:
    from term_snake.settings import Settings, SettingsStore

logger = logging.getLogger(__name__)

MIN_TICK_MS = 50
MAX_TICK_MS = 1000


@dataclass(frozen=True)
class AppConfig:
    """Per-run options that are not persisted."""

    width: int | None = None
    height: int | None = None
    tick_ms: int = 100
    seed: int | None = None

    def __post_init__(self) -> None:
        if not MIN_TICK_MS <= self.tick_ms <= MAX_TICK_MS:
            raise ValueError(
                f"tick_ms must be between {MIN_TICK_MS} and {MAX_TICK_MS}."
            )

    def grid_size(self, rows: int, cols: int) -> tuple[int, int]:
        """Fit the requested grid into a terminal of *rows* × *cols*.

        One row is kept free for the status line.
        """
        rows -= 1
        width = cols if self.width is None else min(self.width, cols)
        height = rows if self.height is None else min(self.height, rows)
        return width, height


def run_loop(session: Session, renderer, poller) -> int | None:
    """Render, poll, and apply one command per iteration until exit.

    Returns the score of the last finished game, if any.
    """
    last_score: int | None = None
    while not session.finished:
        renderer.draw(session)
        command = poller.poll(
            session.settings.vim_mode,
            prefer_movement=session.state == GameState.PLAYING,
        )
        session.handle(command)
        if session.final_score is not None:
            last_score = session.final_score
    return last_score


def run(
    window: curses.window,
    config: AppConfig,
    settings: Settings,
    store: SettingsStore | None = None,
    overrides: dict[str, bool] | None = None,
) -> int | None:
    """Entry point for :func:`curses.wrapper`.

    *settings* is the stored record; *overrides* apply to this run only.
    """
    rows, cols = window.getmaxyx()
    width, height = config.grid_size(rows, cols)
    session = Session(
        settings, width, height, store=store, seed=config.seed,
        overrides=overrides,
    )
    logger.info(
        "Session started on %dx%d grid, tick %d ms.",
        width, height, config.tick_ms,
    )
    renderer = CursesRenderer(window)
    poller = KeyPoller(window, timeout_ms=config.tick_ms)
    score = run_loop(session, renderer, poller)
    logger.info("Session ended after %d game(s).", session.games_played)
    return score
