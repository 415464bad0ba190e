"""Command-line launcher for term-snake."""

from __future__ import annotations

import argparse
import curses
import logging
import sys

from term_snake.app import MAX_TICK_MS, MIN_TICK_MS, AppConfig, run
from term_snake.settings import SettingsError, SettingsStore

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="term-snake",
        description="Play Snake in the terminal.",
    )
    parser.add_argument(
        "--width", type=int, default=None,
        help="Grid width in cells (defaults to the terminal width).",
    )
    parser.add_argument(
        "--height", type=int, default=None,
        help="Grid height in cells (defaults to the terminal height - 1).",
    )
    parser.add_argument(
        "--tick-ms", type=int, default=100,
        help=f"Tick interval in milliseconds ({MIN_TICK_MS}-{MAX_TICK_MS}).",
    )
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument(
        "--settings", type=str, default=None,
        help="Path to the settings JSON file.",
    )
    parser.add_argument(
        "--vim", action=argparse.BooleanOptionalAction, default=None,
        help="Override the stored vim-keys setting for this run.",
    )
    parser.add_argument(
        "--walls", action=argparse.BooleanOptionalAction, default=None,
        help="Override the stored wall setting for this run.",
    )
    parser.add_argument(
        "--log-file", type=str, default=None,
        help="Write logs to this file (the terminal is used by the game).",
    )
    parser.add_argument(
        "--log-level", type=str, default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def _configure_logging(log_file: str | None, level: str) -> None:
    if log_file is None:
        logging.getLogger().addHandler(logging.NullHandler())
        return
    logging.basicConfig(
        filename=log_file,
        level=getattr(logging, level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``term-snake`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_file, args.log_level)

    try:
        config = AppConfig(
            width=args.width, height=args.height,
            tick_ms=args.tick_ms, seed=args.seed,
        )
    except ValueError as exc:
        parser.error(str(exc))

    store = SettingsStore(args.settings)
    try:
        settings = store.load()
    except SettingsError as exc:
        logger.error("%s", exc)
        print(f"term-snake: {exc}", file=sys.stderr)  # noqa: T201
        return 1

    overrides: dict[str, bool] = {}
    if args.vim is not None:
        overrides["vim_mode"] = args.vim
    if args.walls is not None:
        overrides["no_wall_mode"] = not args.walls

    try:
        score = curses.wrapper(run, config, settings, store, overrides)
    except ValueError as exc:
        logger.error("Cannot start game: %s", exc)
        print(f"term-snake: {exc}", file=sys.stderr)  # noqa: T201
        return 1

    if score is not None:
        print(f"Game over. Final score: {score}")  # noqa: T201
    return 0


if __name__ == "__main__":
    sys.exit(main())
