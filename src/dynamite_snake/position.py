"""Immutable grid coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dynamite_snake.snake import Direction


@dataclass(frozen=True)
class Position:
    """A 2D integer coordinate on the board.

    ``x`` grows to the right and ``y`` grows downwards, matching terminal
    column/row ordering. Positions compare and hash by value.
    """

    x: int
    y: int

    def translate(self, dx: int, dy: int) -> Position:
        """Return a new position offset by ``(dx, dy)``."""
        return Position(self.x + dx, self.y + dy)

    def step(self, direction: Direction) -> Position:
        """Return the neighbouring position one cell towards *direction*."""
        dx, dy = direction.value
        return self.translate(dx, dy)

    def to_list(self) -> list[int]:
        return [self.x, self.y]
