"""Game session state: snake, fruit, dynamite and score."""

from __future__ import annotations

import logging
from collections import deque

import numpy as np

from dynamite_snake.board import Board, Collision
from dynamite_snake.position import Position
from dynamite_snake.snake import Direction, Snake, is_opposite
from dynamite_snake.spawn import DEFAULT_MAX_ATTEMPTS, random_free_position

logger = logging.getLogger(__name__)

# Points lost when the snake steps over a dynamite.
SCORE_PENALTY = 25


class GameState:
    """State of a single game.

    The state owns the snake, the fruit and dynamite lists and the score,
    and is the only thing that mutates them. A new instance is created for
    every game; restarting never reuses one.
    """

    def __init__(
        self,
        board: Board | None = None,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
        max_spawn_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ) -> None:
        self.board = board if board is not None else Board()
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.max_spawn_attempts = max_spawn_attempts

        self.snake = Snake(Direction.RIGHT, start=self.board.start_position())
        self.fruits: list[Position] = []
        self.dynamites: list[Position] = []
        self.score = 0

    # --- accessors ---

    @property
    def snake_body(self) -> deque[Position]:
        return self.snake.body

    @property
    def snake_head(self) -> Position:
        return self.snake.head

    @property
    def snake_tail(self) -> Position:
        return self.snake.tail

    @property
    def snake_alive(self) -> bool:
        return self.snake.alive

    @property
    def direction(self) -> Direction:
        return self.snake.direction

    # --- snake control ---

    def set_direction(self, direction: Direction) -> None:
        """Turn the snake, ignoring a reversal into its own neck."""
        if not isinstance(direction, Direction):
            raise ValueError(f"No such direction: {direction!r}")
        if is_opposite(direction, self.snake.direction):
            return
        self.snake.set_direction(direction)

    def move_snake(self) -> Position:
        return self.snake.move()

    def kill_snake(self) -> None:
        self.snake.kill()
        logger.info(
            "Snake died at %s with score %d (length %d).",
            self.snake.head, self.score, len(self.snake),
        )

    # --- scoring events ---

    def snake_ate_fruit(self) -> bool:
        """Consume a fruit under the head, scoring and growing the snake.

        The reward is twice the current body length plus one point per
        dynamite on the board.
        """
        if not self.snake.ate_fruit(self.fruits):
            return False
        self.score += len(self.snake) * 2 + len(self.dynamites)
        self.snake.increase_size()
        return True

    def snake_stepped_dynamite(self) -> bool:
        """Apply the dynamite penalty if the head is on one. No score floor."""
        if not self.snake.stepped_over_dynamite(self.dynamites):
            return False
        self.score -= SCORE_PENALTY
        return True

    # --- collisions ---

    def detect_collision(self) -> Collision | None:
        """Return what the head has run into after the last move, if anything."""
        if self.board.is_wall(self.snake.head):
            return Collision.WALL
        if self.snake.self_collision():
            return Collision.SELF
        return None

    def check_collision(self) -> bool:
        return self.detect_collision() is not None

    # --- spawning ---

    def is_empty_position(self, position: Position) -> bool:
        """Check that no snake segment, fruit or dynamite sits on *position*."""
        return not (
            self.snake.is_body(position)
            or position in self.fruits
            or position in self.dynamites
        )

    def generate_random_object(
        self, max_x: int | None = None, max_y: int | None = None,
    ) -> Position:
        """Return a random free position with ``1 <= x < max_x``, ``1 <= y < max_y``.

        The bounds default to the board dimensions, which keeps objects off
        the walls. The position is not added to any collection; use
        :meth:`spawn_fruit` or :meth:`spawn_dynamite` for that.

        Raises :class:`~dynamite_snake.spawn.BoardFullError` when every
        cell in range is taken.
        """
        if max_x is None:
            max_x = self.board.width
        if max_y is None:
            max_y = self.board.height
        occupied = {*self.snake.body, *self.fruits, *self.dynamites}
        return random_free_position(
            self.rng, max_x, max_y, occupied,
            max_attempts=self.max_spawn_attempts,
        )

    def spawn_fruit(self) -> Position:
        position = self.generate_random_object()
        self.fruits.append(position)
        logger.debug("Fruit spawned at %s.", position)
        return position

    def spawn_dynamite(self) -> Position:
        position = self.generate_random_object()
        self.dynamites.append(position)
        logger.debug("Dynamite spawned at %s.", position)
        return position

    # --- rendering ---

    def cells(self) -> np.ndarray:
        """Return a board snapshot of the current state for renderers."""
        return self.board.snapshot(self.snake.body, self.fruits, self.dynamites)

    def to_dict(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "score": self.score,
            "alive": self.snake.alive,
            "board": self.board.to_dict(),
            "snake": self.snake.to_dict(),
            "fruits": [p.to_list() for p in self.fruits],
            "dynamites": [p.to_list() for p in self.dynamites],
        }
