"""Tests for key translation and polling."""

import curses

import pytest

from term_snake.controls import Command, KeyPoller, translate_key
from term_snake.snake import Direction


class FakeWindow:
    """Replays queued key codes the way a curses window would."""

    def __init__(self, keys=()):
        self.keys = list(keys)
        self.timeouts = []

    def timeout(self, delay):
        self.timeouts.append(delay)

    def getch(self):
        return self.keys.pop(0) if self.keys else -1


class TestTranslateKey:
    @pytest.mark.parametrize(("key", "command"), [
        (curses.KEY_UP, Command.UP),
        (curses.KEY_DOWN, Command.DOWN),
        (curses.KEY_LEFT, Command.LEFT),
        (curses.KEY_RIGHT, Command.RIGHT),
        (ord("q"), Command.QUIT),
        (27, Command.QUIT),
        (ord("\n"), Command.CONFIRM),
        (ord("1"), Command.SELECT_1),
        (ord("3"), Command.SELECT_3),
    ])
    def test_standard_keys(self, key, command):
        assert translate_key(key) == command

    def test_vim_keys_need_vim_mode(self):
        assert translate_key(ord("h")) is None
        assert translate_key(ord("k")) is None

    @pytest.mark.parametrize(("char", "command"), [
        ("h", Command.LEFT),
        ("j", Command.DOWN),
        ("k", Command.UP),
        ("l", Command.RIGHT),
    ])
    def test_vim_keys(self, char, command):
        assert translate_key(ord(char), vim_mode=True) == command

    def test_arrows_still_work_in_vim_mode(self):
        assert translate_key(curses.KEY_UP, vim_mode=True) == Command.UP

    def test_unknown_key(self):
        assert translate_key(ord("z")) is None
        assert translate_key(ord("9")) is None


class TestCommandDirection:
    def test_movement_commands(self):
        assert Command.UP.direction == Direction.UP
        assert Command.LEFT.direction == Direction.LEFT

    def test_other_commands_have_no_direction(self):
        assert Command.QUIT.direction is None
        assert Command.SELECT_1.direction is None


class TestKeyPoller:
    def test_timeout_returns_none(self):
        window = FakeWindow()
        assert KeyPoller(window, timeout_ms=120).poll() is None
        assert window.timeouts == [120]

    def test_single_key(self):
        window = FakeWindow([curses.KEY_LEFT])
        assert KeyPoller(window).poll() == Command.LEFT

    def test_burst_keeps_first_and_drains_rest(self):
        window = FakeWindow([curses.KEY_LEFT, curses.KEY_DOWN, curses.KEY_RIGHT])
        poller = KeyPoller(window, timeout_ms=100)
        assert poller.poll() == Command.LEFT
        assert window.keys == []
        assert window.timeouts == [100, 0, 100]

    def test_unknown_keys_skipped_in_burst(self):
        window = FakeWindow([ord("z"), curses.KEY_UP])
        assert KeyPoller(window).poll() == Command.UP

    def test_quit_wins_in_burst(self):
        window = FakeWindow([curses.KEY_UP, ord("q")])
        assert KeyPoller(window).poll() == Command.QUIT

    def test_menu_key_first_in_burst_when_not_moving(self):
        window = FakeWindow([ord("1"), curses.KEY_LEFT])
        assert KeyPoller(window).poll() == Command.SELECT_1

    def test_direction_beats_menu_key_while_moving(self):
        window = FakeWindow([ord("1"), curses.KEY_LEFT])
        assert KeyPoller(window).poll(prefer_movement=True) == Command.LEFT
        assert window.keys == []

    def test_menu_key_alone_while_moving(self):
        window = FakeWindow([ord("2"), ord("x")])
        assert KeyPoller(window).poll(prefer_movement=True) == Command.SELECT_2

    def test_vim_mode_passed_through(self):
        window = FakeWindow([ord("j")])
        assert KeyPoller(window).poll(vim_mode=True) == Command.DOWN

    def test_unrecognised_only(self):
        window = FakeWindow([ord("x")])
        assert KeyPoller(window).poll() is None

    def test_negative_timeout_rejected(self):
        with pytest.raises(ValueError, match="timeout_ms"):
            KeyPoller(FakeWindow(), timeout_ms=-1)
