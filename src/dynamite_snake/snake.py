"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque

from dynamite_snake.position import Position


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


def is_opposite(a: Direction, b: Direction) -> bool:
    """Return True if *a* and *b* point in exactly opposite directions."""
    return _OPPOSITES.get(a) == b


SNAKE_INITIAL_SIZE = 4
DEFAULT_START = Position(3, 15)


class Snake:
    """A snake represented as an ordered deque of body segments.

    The tail is ``body[0]``; the head is ``body[-1]``. Each instance owns
    its body exclusively.

    The snake does not know about walls, fruit placement or reversal rules.
    :meth:`move` happily steps into a wall or into itself; detecting that is
    up to the caller.
    """

    def __init__(
        self,
        direction: Direction = Direction.RIGHT,
        start: Position = DEFAULT_START,
        length: int = SNAKE_INITIAL_SIZE,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        self.body: deque[Position] = deque(
            start.translate(dx * i, dy * i) for i in range(length)
        )
        self.direction = direction
        self.alive = True

    @property
    def head(self) -> Position:
        """Return the head segment (most recently added)."""
        return self.body[-1]

    @property
    def tail(self) -> Position:
        """Return the tail segment."""
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def set_direction(self, direction: Direction) -> None:
        """Overwrite the facing direction unconditionally."""
        self.direction = direction

    def move(self) -> Position:
        """Glide one cell forward and return the new head.

        The tail segment is dropped and a new head appended, so the body
        length is unchanged.
        """
        new_head = self.head.step(self.direction)
        self.body.popleft()
        self.body.append(new_head)
        return new_head

    def increase_size(self) -> None:
        """Grow by one segment by duplicating the tail.

        The duplicate stays in place while the rest of the body moves on,
        so the extra segment shows up after the next :meth:`move`.
        """
        self.body.appendleft(self.tail)

    def is_body(self, position: Position) -> bool:
        """Check whether the snake occupies *position*."""
        return position in self.body

    def ate_fruit(self, fruits: list[Position]) -> bool:
        """Remove the first fruit under the head. Returns True if one was eaten."""
        return _take_at(fruits, self.head)

    def stepped_over_dynamite(self, dynamites: list[Position]) -> bool:
        """Remove the first dynamite under the head. Returns True on contact."""
        return _take_at(dynamites, self.head)

    def self_collision(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        head = self.head
        return any(seg == head for seg in list(self.body)[:-1])

    def kill(self) -> None:
        self.alive = False

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [seg.to_list() for seg in self.body],
            "direction": self.direction.name,
            "alive": self.alive,
        }


def _take_at(objects: list[Position], position: Position) -> bool:
    for i, obj in enumerate(objects):
        if obj == position:
            del objects[i]
            return True
    return False

