"""Key input translation and polling."""

from __future__ import annotations

import curses
import enum

from term_snake.snake import Direction

_ESCAPE = 27
_NO_KEY = -1


class Command(enum.Enum):
    """Player intents recognised by the game."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    QUIT = "quit"
    CONFIRM = "confirm"
    SELECT_1 = "select_1"
    SELECT_2 = "select_2"
    SELECT_3 = "select_3"

    @property
    def direction(self) -> Direction | None:
        """The movement direction for this command, if it is one."""
        return _DIRECTIONS.get(self)


_DIRECTIONS: dict[Command, Direction] = {
    Command.UP: Direction.UP,
    Command.DOWN: Direction.DOWN,
    Command.LEFT: Direction.LEFT,
    Command.RIGHT: Direction.RIGHT,
}

_KEYMAP: dict[int, Command] = {
    curses.KEY_UP: Command.UP,
    curses.KEY_DOWN: Command.DOWN,
    curses.KEY_LEFT: Command.LEFT,
    curses.KEY_RIGHT: Command.RIGHT,
    ord("q"): Command.QUIT,
    ord("Q"): Command.QUIT,
    _ESCAPE: Command.QUIT,
    ord("\n"): Command.CONFIRM,
    ord("\r"): Command.CONFIRM,
    curses.KEY_ENTER: Command.CONFIRM,
    ord(" "): Command.CONFIRM,
    ord("1"): Command.SELECT_1,
    ord("2"): Command.SELECT_2,
    ord("3"): Command.SELECT_3,
}

_VIM_KEYMAP: dict[int, Command] = {
    ord("h"): Command.LEFT,
    ord("j"): Command.DOWN,
    ord("k"): Command.UP,
    ord("l"): Command.RIGHT,
}


def translate_key(key: int, vim_mode: bool = False) -> Command | None:
    """Map a curses key code to a command; unknown keys give ``None``."""
    if vim_mode and key in _VIM_KEYMAP:
        return _VIM_KEYMAP[key]
    return _KEYMAP.get(key)


class KeyPoller:
    """Waits for one key per tick and discards the rest of the burst.

    The first recognised command of a burst is returned, except that a quit
    request anywhere in it always wins. With ``prefer_movement`` a direction
    later in the burst beats an earlier menu key.
    """

    def __init__(self, window: curses.window, timeout_ms: int = 100) -> None:
        if timeout_ms < 0:
            raise ValueError("timeout_ms must be >= 0.")
        self.window = window
        self.timeout_ms = timeout_ms

    def poll(
        self, vim_mode: bool = False, prefer_movement: bool = False,
    ) -> Command | None:
        """Block up to the tick timeout and return at most one command."""
        self.window.timeout(self.timeout_ms)
        key = self.window.getch()
        if key == _NO_KEY:
            return None

        keys = [key]
        self.window.timeout(0)
        while True:
            key = self.window.getch()
            if key == _NO_KEY:
                break
            keys.append(key)
        self.window.timeout(self.timeout_ms)

        commands = [translate_key(k, vim_mode) for k in keys]
        if Command.QUIT in commands:
            return Command.QUIT
        recognised = [c for c in commands if c is not None]
        if prefer_movement:
            moves = [c for c in recognised if c.direction is not None]
            if moves:
                return moves[0]
        return recognised[0] if recognised else None
