"""Bordered play area and cell snapshots for renderers."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence

import numpy as np

from dynamite_snake.position import Position

# Play area of an 80x23 terminal once the one-column and two-row
# coordinate offsets are removed.
DEFAULT_WIDTH = 79
DEFAULT_HEIGHT = 21

MIN_WIDTH = 8
MIN_HEIGHT = 3

_START_X = 3
_START_Y = 15


class CellType(enum.IntEnum):
    """Integer codes stored in board snapshots."""

    EMPTY = 0
    WALL = 1
    SNAKE = 2
    HEAD = 3
    FRUIT = 4
    DYNAMITE = 5


class Collision(enum.Enum):
    """What the snake's head ran into."""

    WALL = "wall"
    SELF = "self"


class Board:
    """Rectangular board surrounded by a one-cell wall.

    Walls sit on ``x == 0``, ``x == width``, ``y == 0`` and ``y == height``.
    Everything strictly between them is the play area.
    """

    def __init__(
        self,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
    ) -> None:
        if width < MIN_WIDTH or height < MIN_HEIGHT:
            raise ValueError(
                f"Board dimensions must be at least {MIN_WIDTH}×{MIN_HEIGHT}.",
            )
        self.width = width
        self.height = height

    def is_wall(self, position: Position) -> bool:
        """Check whether *position* lies on (or beyond) the border."""
        return not self.contains(position)

    def contains(self, position: Position) -> bool:
        """Check whether *position* lies inside the play area."""
        return 0 < position.x < self.width and 0 < position.y < self.height

    @property
    def play_cells(self) -> int:
        """Number of cells inside the walls."""
        return (self.width - 1) * (self.height - 1)

    def start_position(self) -> Position:
        """Tail position of a freshly created snake."""
        return Position(_START_X, min(_START_Y, self.height - 1))

    def snapshot(
        self,
        snake_body: Sequence[Position],
        fruits: Iterable[Position] = (),
        dynamites: Iterable[Position] = (),
    ) -> np.ndarray:
        """Return an int8 ``[y, x]`` array of :class:`CellType` codes.

        The array includes the wall ring, so its shape is
        ``(height + 1, width + 1)``. Later layers overwrite earlier ones:
        walls, then fruit and dynamite, then the snake, then its head.
        """
        cells = np.zeros((self.height + 1, self.width + 1), dtype=np.int8)
        cells[0, :] = CellType.WALL
        cells[-1, :] = CellType.WALL
        cells[:, 0] = CellType.WALL
        cells[:, -1] = CellType.WALL

        for p in fruits:
            self._paint(cells, p, CellType.FRUIT)
        for p in dynamites:
            self._paint(cells, p, CellType.DYNAMITE)
        for p in snake_body:
            self._paint(cells, p, CellType.SNAKE)
        if snake_body:
            self._paint(cells, snake_body[-1], CellType.HEAD)
        return cells

    def _paint(self, cells: np.ndarray, p: Position, cell_type: CellType) -> None:
        # A crashed head may sit on the wall line; anything further out
        # has no cell to paint.
        if 0 <= p.x <= self.width and 0 <= p.y <= self.height:
            cells[p.y, p.x] = cell_type

    def to_dict(self) -> dict:
        """Serialize board dimensions to a dictionary."""
        return {"width": self.width, "height": self.height}
