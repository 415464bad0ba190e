"""Frame composition and curses drawing."""

from __future__ import annotations

import curses
from typing import TYPE_CHECKING

import numpy as np

from term_snake.session import GameState

if TYPE_CHECKING:
    from term_snake.engine import GameEngine
    from term_snake.session import Session
    from term_snake.settings import Settings

HEAD = "O"
BODY = "o"
FOOD = "F"
WALL = "#"
EMPTY = " "

GAME_OVER_MESSAGE = "Game Over!"

# Color pair numbers (curses pairs start at 1).
_PAIR_HEAD = 1
_PAIR_BODY = 2
_PAIR_FOOD = 3
_PAIR_WALL = 4

_GLYPH_PAIRS = {
    HEAD: _PAIR_HEAD,
    BODY: _PAIR_BODY,
    FOOD: _PAIR_FOOD,
    WALL: _PAIR_WALL,
}


def _on_off(flag: bool) -> str:
    return "on" if flag else "off"


def _overlay(board: np.ndarray, row: int, text: str) -> None:
    """Write *text* centered on *row*, clipped to the board."""
    height, width = board.shape
    if not 0 <= row < height:
        return
    text = text[:width]
    start = (width - len(text)) // 2
    board[row, start:start + len(text)] = list(text)


def _menu_board(width: int, height: int, lines: list[str]) -> np.ndarray:
    board = np.full((height, width), EMPTY, dtype="<U1")
    top = max((height - len(lines)) // 2, 0)
    for offset, line in enumerate(lines):
        _overlay(board, top + offset, line)
    return board


def _welcome_lines(settings: Settings) -> list[str]:
    return [
        "S N A K E",
        "",
        "1) Play",
        "2) Options",
        "q) Quit",
        "",
        f"vim keys: {_on_off(settings.vim_mode)}"
        f"   walls: {_on_off(not settings.no_wall_mode)}",
    ]


def _options_lines(settings: Settings) -> list[str]:
    return [
        "Options",
        "",
        f"1) Vim keys (h/j/k/l): {_on_off(settings.vim_mode)}",
        f"2) No walls (wrap around): {_on_off(settings.no_wall_mode)}",
        "3) Back",
    ]


def _game_board(engine: GameEngine) -> np.ndarray:
    grid = engine.grid
    board = np.full((grid.height, grid.width), EMPTY, dtype="<U1")
    if grid.border:
        board[0, :] = WALL
        board[-1, :] = WALL
        board[:, 0] = WALL
        board[:, -1] = WALL

    if engine.food is not None:
        fx, fy = engine.food
        board[fy, fx] = FOOD
    for x, y in engine.snake.body[1:]:
        board[y, x] = BODY
    hx, hy = engine.snake.head
    if 0 <= hx < grid.width and 0 <= hy < grid.height:
        board[hy, hx] = HEAD
    return board


def status_line(session: Session) -> str:
    """Score and active modes shown below the board."""
    engine = session.engine
    score = engine.score if engine is not None else 0
    parts = [f"Score: {score}"]
    if session.settings.no_wall_mode:
        parts.append("no walls")
    if session.settings.vim_mode:
        parts.append("vim keys")
    parts.append("q: quit")
    return "  ".join(parts)


def render_frame(session: Session) -> list[str]:
    """Compose the text of one frame for the session's current screen.

    The frame has one line per grid row followed by a status line.
    """
    width, height = session.width, session.height
    engine = session.engine

    playing = session.state in (GameState.PLAYING, GameState.GAME_OVER)
    if playing and engine is not None:
        board = _game_board(engine)
        if session.state == GameState.GAME_OVER:
            middle = board.shape[0] // 2
            _overlay(board, middle, GAME_OVER_MESSAGE)
            _overlay(
                board, middle + 1,
                f"Score: {engine.score}  Enter: menu  q: quit",
            )
    elif session.state == GameState.OPTIONS:
        board = _menu_board(width, height, _options_lines(session.settings))
    else:
        board = _menu_board(width, height, _welcome_lines(session.settings))

    lines = ["".join(row) for row in board]
    lines.append(status_line(session)[:width])
    return lines


class CursesRenderer:
    """Draws composed frames onto a curses window."""

    def __init__(self, window: curses.window) -> None:
        self.window = window
        self.colors = curses.has_colors()
        curses.curs_set(0)
        if self.colors:
            curses.start_color()
            curses.init_pair(_PAIR_HEAD, curses.COLOR_GREEN, curses.COLOR_BLACK)
            curses.init_pair(_PAIR_BODY, curses.COLOR_YELLOW, curses.COLOR_BLACK)
            curses.init_pair(_PAIR_FOOD, curses.COLOR_RED, curses.COLOR_BLACK)
            curses.init_pair(_PAIR_WALL, curses.COLOR_CYAN, curses.COLOR_BLACK)

    def draw(self, session: Session) -> None:
        """Clear the window and draw the session's current frame."""
        lines = render_frame(session)
        rows, cols = self.window.getmaxyx()
        colored = self._colored_rows(session)
        self.window.erase()
        for y, line in enumerate(lines[:rows]):
            # The bottom-right cell cannot be written without an error.
            limit = cols - 1 if y == rows - 1 else cols
            self.window.addnstr(y, 0, line, limit)
            if y in colored:
                self._colorize(y, line[:limit])
        self.window.refresh()

    def _colored_rows(self, session: Session) -> set[int]:
        """Board rows whose glyphs get colors; text rows stay plain."""
        if not self.colors or session.state not in (
            GameState.PLAYING, GameState.GAME_OVER,
        ):
            return set()
        rows = set(range(session.height))
        if session.state == GameState.GAME_OVER:
            middle = session.height // 2
            rows -= {middle, middle + 1}
        return rows

    def _colorize(self, y: int, line: str) -> None:
        for x, glyph in enumerate(line):
            pair = _GLYPH_PAIRS.get(glyph)
            if pair is not None:
                self.window.chgat(y, x, 1, curses.color_pair(pair))
