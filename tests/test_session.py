"""Tests for the session state machine."""

import pytest

from term_snake.controls import Command
from term_snake.engine import GameOutcome
from term_snake.grid import WallMode
from term_snake.session import GameState, Session
from term_snake.settings import Settings, SettingsStore
from term_snake.snake import Direction


def _session(settings=None, store=None, width=20, height=20, seed=0):
    return Session(
        settings or Settings(), width, height, store=store, seed=seed,
    )


def _play_until_over(session, limit=100):
    for _ in range(limit):
        session.handle(None)
        if session.state != GameState.PLAYING:
            return
    raise AssertionError("game did not end")


class TestSessionInit:
    def test_starts_at_welcome(self):
        session = _session()
        assert session.state == GameState.WELCOME
        assert session.engine is None
        assert not session.finished

    def test_terminal_too_small(self):
        with pytest.raises(ValueError, match="initial_length"):
            _session(width=20, height=6)


class TestWelcome:
    def test_start_game(self):
        session = _session()
        assert session.handle(Command.SELECT_1) == GameState.PLAYING
        assert session.engine is not None
        assert session.engine.grid.wall_mode == WallMode.DEATH

    def test_confirm_starts_game(self):
        session = _session()
        session.handle(Command.CONFIRM)
        assert session.state == GameState.PLAYING

    def test_open_options(self):
        session = _session()
        assert session.handle(Command.SELECT_2) == GameState.OPTIONS

    def test_unrecognised_input_no_change(self):
        session = _session()
        session.handle(None)
        session.handle(Command.LEFT)
        assert session.state == GameState.WELCOME

    def test_quit(self):
        session = _session()
        assert session.handle(Command.QUIT) == GameState.EXITED
        assert session.finished


class TestOptions:
    def test_toggle_flags(self):
        session = _session()
        session.handle(Command.SELECT_2)
        session.handle(Command.SELECT_1)
        session.handle(Command.SELECT_2)
        assert session.settings == Settings(vim_mode=True, no_wall_mode=True)
        assert session.state == GameState.OPTIONS

    def test_toggles_are_persisted(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")
        session = _session(store=store)
        session.handle(Command.SELECT_2)
        session.handle(Command.SELECT_2)
        assert store.load().no_wall_mode is True

    def test_toggle_does_not_save_run_overrides(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")
        session = Session(
            Settings(), 20, 20, store=store, overrides={"vim_mode": True},
        )
        assert session.settings.vim_mode is True
        session.handle(Command.SELECT_2)
        session.handle(Command.SELECT_2)
        assert session.settings == Settings(vim_mode=True, no_wall_mode=True)
        assert store.load() == Settings(no_wall_mode=True)

    def test_toggling_overridden_flag_flips_shown_value(self, tmp_path):
        store = SettingsStore(tmp_path / "settings.json")
        session = Session(
            Settings(), 20, 20, store=store, overrides={"vim_mode": True},
        )
        session.handle(Command.SELECT_2)
        session.handle(Command.SELECT_1)
        assert session.settings.vim_mode is False
        assert session.overrides == {}
        assert store.load() == Settings()
        session.handle(Command.SELECT_1)
        assert session.settings.vim_mode is True
        assert store.load() == Settings(vim_mode=True)

    def test_back_to_welcome(self):
        session = _session()
        session.handle(Command.SELECT_2)
        assert session.handle(Command.SELECT_3) == GameState.WELCOME

    def test_no_wall_mode_applies_to_next_game(self):
        session = _session()
        session.handle(Command.SELECT_2)
        session.handle(Command.SELECT_2)
        session.handle(Command.SELECT_3)
        session.handle(Command.SELECT_1)
        assert session.engine.grid.wall_mode == WallMode.WRAP


class TestPlaying:
    def test_each_handle_is_one_tick(self):
        session = _session()
        session.handle(Command.SELECT_1)
        session.handle(None)
        session.handle(None)
        assert session.engine.tick == 2

    def test_direction_command_applied(self):
        session = _session()
        session.handle(Command.SELECT_1)
        session.handle(Command.LEFT)
        assert session.engine.snake.direction == Direction.LEFT

    def test_menu_keys_do_not_steer(self):
        session = _session()
        session.handle(Command.SELECT_1)
        session.handle(Command.SELECT_2)
        assert session.state == GameState.PLAYING
        assert session.engine.snake.direction == Direction.UP
        assert session.engine.tick == 1

    def test_quit_skips_pending_tick(self):
        session = _session()
        session.handle(Command.SELECT_1)
        engine = session.engine
        engine.food = engine.snake.next_head(engine.grid)
        session.handle(Command.QUIT)
        assert session.state == GameState.EXITED
        assert engine.tick == 0
        assert engine.score == 0

    def test_wall_hit_ends_game(self):
        session = _session()
        session.handle(Command.SELECT_1)
        _play_until_over(session)
        assert session.state == GameState.GAME_OVER
        assert session.engine.outcome == GameOutcome.WALL
        assert session.final_score == session.engine.score


class TestGameOver:
    def test_input_ignored_except_confirm_and_quit(self):
        session = _session()
        session.handle(Command.SELECT_1)
        _play_until_over(session)
        tick = session.engine.tick
        session.handle(Command.LEFT)
        session.handle(None)
        assert session.state == GameState.GAME_OVER
        assert session.engine.tick == tick

    def test_confirm_returns_to_welcome_with_fresh_game(self):
        session = _session()
        session.handle(Command.SELECT_1)
        first = session.engine
        _play_until_over(session)
        session.handle(Command.CONFIRM)
        assert session.state == GameState.WELCOME
        assert session.engine is None
        session.handle(Command.SELECT_1)
        assert session.engine is not first
        assert session.engine.score == 0
        assert session.final_score is None
        assert session.games_played == 2

    def test_quit_from_game_over(self):
        session = _session()
        session.handle(Command.SELECT_1)
        _play_until_over(session)
        assert session.handle(Command.QUIT) == GameState.EXITED


class TestExited:
    def test_exited_is_terminal(self):
        session = _session()
        session.handle(Command.QUIT)
        assert session.handle(Command.SELECT_1) == GameState.EXITED
        assert session.engine is None
