"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

from term_snake.grid import GridConfig, Position


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class AdvanceResult:
    """Outcome of a single :meth:`Snake.advance` call."""

    head: Position
    body: tuple[Position, ...]
    direction: Direction
    collision: bool
    boundary_violation: bool
    vacated: Position


class Snake:
    """A snake represented as an ordered list of (x, y) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. The body trails
    behind the head, opposite to the starting direction.
    """

    def __init__(
        self,
        start_x: int,
        start_y: int,
        direction: Direction = Direction.UP,
        length: int = 5,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        self.body: list[Position] = [
            (start_x - dx * i, start_y - dy * i) for i in range(length)
        ]
        self.direction = direction
        self._vacated: Position | None = None

    @classmethod
    def from_segments(
        cls, segments: Iterable[Position], direction: Direction,
    ) -> Snake:
        """Create a snake from an explicit head-first list of segments."""
        body = [tuple(seg) for seg in segments]
        if not body:
            raise ValueError("Snake length must be at least 1.")
        snake = cls(body[0][0], body[0][1], direction, length=1)
        snake.body = body
        return snake

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Position:
        return self.body[-1]

    def resolve_direction(self, requested: Direction | None) -> Direction:
        """Return the heading to use for the next move.

        ``None`` keeps the current heading, as does a request for the exact
        opposite of it.
        """
        if requested is None or requested == self.direction.opposite:
            return self.direction
        return requested

    def next_head(self, grid: GridConfig) -> Position:
        """Compute the next head position along the current heading."""
        dx, dy = self.direction.value
        x, y = self.head
        if grid.wraps:
            return grid.wrap((x + dx, y + dy))
        # Saturate at zero; landing on the border is reported, not clamped.
        return max(x + dx, 0), max(y + dy, 0)

    def advance(
        self, requested: Direction | None, grid: GridConfig,
    ) -> AdvanceResult:
        """Move the snake one step forward.

        Shifts every segment into its predecessor's cell and reports whether
        the new head hit the body or, in bounded mode, the border.
        """
        self.direction = self.resolve_direction(requested)
        new_head = self.next_head(grid)

        vacated = self.body[-1]
        self.body = [new_head, *self.body[:-1]]
        self._vacated = vacated

        boundary = not grid.wraps and not grid.contains(new_head)
        return AdvanceResult(
            head=new_head,
            body=tuple(self.body),
            direction=self.direction,
            collision=self.self_collision(),
            boundary_violation=boundary,
            vacated=vacated,
        )

    def grow(self) -> None:
        """Extend the tail by one segment.

        The cell vacated by the latest move is reclaimed; before the first
        move the current tail is duplicated.
        """
        self.body.append(self._vacated if self._vacated is not None else self.tail)
        self._vacated = None

    def occupies(self, pos: Position) -> bool:
        """Check whether the snake occupies a given cell."""
        return pos in self.body

    def self_collision(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        head = self.head
        return any(seg == head for seg in self.body[1:])

    def segment_directions(self) -> list[Direction]:
        """Per-segment headings, derived from neighbouring segments.

        Only used for drawing. Recomputed on every call so it always
        matches the body.
        """
        headings = [self.direction]
        for prev, seg in zip(self.body, self.body[1:]):
            headings.append(_step_direction(seg, prev, headings[-1]))
        return headings

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name,
            "length": len(self.body),
        }


def _step_direction(
    src: Position, dst: Position, fallback: Direction,
) -> Direction:
    dx = dst[0] - src[0]
    dy = dst[1] - src[1]
    if dx == 0 and dy == 0:
        return fallback
    if dy == 0:
        # A jump across the board is a wrapped single step.
        return Direction.RIGHT if (dx == 1 or dx < -1) else Direction.LEFT
    return Direction.DOWN if (dy == 1 or dy < -1) else Direction.UP
