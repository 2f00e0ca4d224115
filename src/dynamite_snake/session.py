"""Tick-driven game loop composing board, state and spawn cadence."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable

import numpy as np

from dynamite_snake.board import Board, Collision
from dynamite_snake.config import GameConfig
from dynamite_snake.snake import Direction, is_opposite
from dynamite_snake.spawn import BoardFullError
from dynamite_snake.state import GameState

logger = logging.getLogger(__name__)


class Speed(enum.Enum):
    """Speed levels; each value is the number of ticks between moves."""

    LEVEL_1 = 90
    LEVEL_2 = 75
    LEVEL_3 = 60
    LEVEL_4 = 45
    LEVEL_5 = 35

    @classmethod
    def from_level(cls, level: int) -> Speed:
        return list(cls)[level - 1]


class TickOutcome(enum.Enum):
    """What happened during a single call to :meth:`GameSession.tick`."""

    IDLE = "idle"
    MOVED = "moved"
    ATE_FRUIT = "ate_fruit"
    HIT_DYNAMITE = "hit_dynamite"
    CRASHED = "crashed"
    GAME_OVER = "game_over"


class GameSession:
    """Headless driver for one player's games.

    Input is polled far more often than the snake moves: every call to
    :meth:`tick` is one polling cycle, the snake moves every
    ``speed.value`` ticks and a fresh fruit and dynamite appear every
    ``spawn_interval`` ticks, starting on tick 0. Renderers read
    :attr:`state` (or :meth:`get_state`) after each tick.
    """

    def __init__(self, config: GameConfig | None = None) -> None:
        self.config = config if config is not None else GameConfig()
        self.board = Board(self.config.board_width, self.config.board_height)
        self.speed = Speed.from_level(self.config.speed)
        self.rng = np.random.default_rng(self.config.seed)
        self._new_game()

    def _new_game(self) -> None:
        self.state = GameState(
            self.board,
            rng=self.rng,
            max_spawn_attempts=self.config.max_spawn_attempts,
        )
        self.counter = 0
        self.last_collision: Collision | None = None
        self._pending_direction: Direction | None = None

    @property
    def game_over(self) -> bool:
        return not self.state.snake_alive

    def restart(self) -> None:
        """Discard the current game and start a fresh one."""
        logger.info("Restarting game (previous score %d).", self.state.score)
        self._new_game()

    def handle_input(self, direction: Direction) -> None:
        """Buffer at most one valid direction change for the next move."""
        if not isinstance(direction, Direction):
            raise ValueError(f"No such direction: {direction!r}")
        if self._pending_direction is not None:
            return
        if is_opposite(direction, self.state.direction):
            return
        self._pending_direction = direction

    def tick(self) -> TickOutcome:
        """Run one polling cycle of the game loop."""
        if self.game_over:
            return TickOutcome.GAME_OVER

        if self.counter % self.config.spawn_interval == 0:
            self._spawn_objects()

        outcome = TickOutcome.IDLE
        if self.counter % self.speed.value == 0:
            outcome = self._update()

        self.counter += 1
        return outcome

    def run(
        self,
        max_ticks: int,
        controller: Callable[[GameSession], Direction | None] | None = None,
    ) -> TickOutcome:
        """Tick until the game ends or *max_ticks* cycles have run.

        *controller* is called once per tick and may return a direction to
        feed into :meth:`handle_input`.
        """
        outcome = TickOutcome.GAME_OVER if self.game_over else TickOutcome.IDLE
        for _ in range(max_ticks):
            if controller is not None:
                direction = controller(self)
                if direction is not None:
                    self.handle_input(direction)
            outcome = self.tick()
            if outcome in (TickOutcome.CRASHED, TickOutcome.GAME_OVER):
                break
        return outcome

    def _update(self) -> TickOutcome:
        if self._pending_direction is not None:
            self.state.set_direction(self._pending_direction)
            self._pending_direction = None

        self.state.move_snake()

        collision = self.state.detect_collision()
        if collision is not None:
            self.last_collision = collision
            logger.info(
                "Collision with %s at tick %d.", collision.value, self.counter,
            )
            self.state.kill_snake()
            return TickOutcome.CRASHED

        if self.state.snake_ate_fruit():
            self._spawn(self.state.spawn_fruit)
            return TickOutcome.ATE_FRUIT
        if self.state.snake_stepped_dynamite():
            return TickOutcome.HIT_DYNAMITE
        return TickOutcome.MOVED

    def _spawn_objects(self) -> None:
        self._spawn(self.state.spawn_fruit)
        self._spawn(self.state.spawn_dynamite)

    def _spawn(self, spawner: Callable[[], object]) -> None:
        try:
            spawner()
        except BoardFullError:
            logger.warning("Board is full; skipping spawn at tick %d.", self.counter)

    def get_state(self) -> dict:
        """Return the full, serializable session state."""
        state = self.state.to_dict()
        state.update({
            "tick": self.counter,
            "speed": self.config.speed,
            "last_collision": (
                self.last_collision.value if self.last_collision else None
            ),
        })
        return state
