"""Food placement logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from term_snake.grid import GridConfig, Position
    from term_snake.snake import Snake

logger = logging.getLogger(__name__)

# Above this share of occupied cells, sampling is skipped in favour of
# enumerating the free cells directly.
_DENSE_OCCUPANCY = 0.5


def place_food(
    snake: Snake,
    grid: GridConfig,
    rng: np.random.Generator | None = None,
    max_attempts: int = 32,
) -> Position | None:
    """Choose a random free playable cell for the next food item.

    Draws uniformly from the playable area and rejects cells covered by the
    snake. After *max_attempts* rejections, or straight away on a crowded
    board, one of the remaining free cells is picked instead. Returns
    ``None`` when the snake fills the whole board.
    """
    if max_attempts < 0:
        raise ValueError("max_attempts must be >= 0.")
    rng = rng if rng is not None else np.random.default_rng()
    occupied = set(snake.body)

    if len(occupied) < grid.interior_size * _DENSE_OCCUPANCY:
        xs, ys = grid.x_range, grid.y_range
        for _ in range(max_attempts):
            pos = (
                int(rng.integers(xs.start, xs.stop)),
                int(rng.integers(ys.start, ys.stop)),
            )
            if pos not in occupied:
                logger.debug("Food placed at %s.", pos)
                return pos

    free = grid.free_cells(occupied)
    if not free:
        logger.warning("No free cells available for food placement.")
        return None
    pos = free[int(rng.integers(len(free)))]
    logger.debug("Food placed at %s from %d free cells.", pos, len(free))
    return pos
