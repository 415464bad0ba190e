"""Playfield bounds and boundary policy for the snake game."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from term_snake.settings import Settings

Position = tuple[int, int]


class WallMode(enum.Enum):
    """Defines behavior when a snake reaches the grid boundary."""

    DEATH = "death"
    WRAP = "wrap"


@dataclass(frozen=True)
class GridConfig:
    """Immutable grid dimensions and wall mode for one game.

    Coordinates are ``(x, y)`` pairs: ``x`` is the column and grows to the
    right, ``y`` is the row and grows downward, matching terminal cells.

    In :attr:`WallMode.DEATH` the outermost rows and columns are reserved for
    the border, so the playable area is inset by one cell on every side.
    """

    width: int = 20
    height: int = 20
    wall_mode: WallMode = WallMode.DEATH

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")

    @classmethod
    def from_settings(
        cls, width: int, height: int, settings: Settings,
    ) -> GridConfig:
        """Build the grid for a new game from the player's settings."""
        mode = WallMode.WRAP if settings.no_wall_mode else WallMode.DEATH
        return cls(width=width, height=height, wall_mode=mode)

    @property
    def wraps(self) -> bool:
        return self.wall_mode == WallMode.WRAP

    @property
    def border(self) -> int:
        """Width of the reserved border on each edge."""
        return 0 if self.wraps else 1

    @property
    def x_range(self) -> range:
        return range(self.border, self.width - self.border)

    @property
    def y_range(self) -> range:
        return range(self.border, self.height - self.border)

    @property
    def interior_size(self) -> int:
        """Number of playable cells."""
        return len(self.x_range) * len(self.y_range)

    def contains(self, pos: Position) -> bool:
        """Check whether a position lies inside the playable area."""
        x, y = pos
        return (
            self.border <= x < self.width - self.border
            and self.border <= y < self.height - self.border
        )

    def wrap(self, pos: Position) -> Position:
        """Map a coordinate onto its toroidal equivalent."""
        x, y = pos
        return x % self.width, y % self.height

    def free_cells(self, occupied: Iterable[Position]) -> list[Position]:
        """Return every playable cell not in *occupied*, row-major."""
        mask = np.zeros((self.height, self.width), dtype=bool)
        b = self.border
        mask[b:self.height - b, b:self.width - b] = True
        for x, y in occupied:
            if 0 <= x < self.width and 0 <= y < self.height:
                mask[y, x] = False
        rows, cols = np.nonzero(mask)
        return list(zip(cols.tolist(), rows.tolist(), strict=True))

    def to_dict(self) -> dict:
        """Serialize grid configuration to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "wall_mode": self.wall_mode.value,
        }
