"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

from dynamite_snake.board import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    MIN_HEIGHT,
    MIN_WIDTH,
)
from dynamite_snake.spawn import DEFAULT_MAX_ATTEMPTS

logger = logging.getLogger(__name__)

SPEED_LEVELS = range(1, 6)


@dataclass(frozen=True)
class GameConfig:
    """Settings for a game session.

    Supports JSON serialization so a seeded run can be reproduced.
    """

    # Board
    board_width: int = DEFAULT_WIDTH
    board_height: int = DEFAULT_HEIGHT

    # Pacing, in driver ticks
    speed: int = 1
    spawn_interval: int = 6000

    # Spawning
    max_spawn_attempts: int = DEFAULT_MAX_ATTEMPTS
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.board_width < MIN_WIDTH or self.board_height < MIN_HEIGHT:
            raise ValueError(
                f"board must be at least {MIN_WIDTH}×{MIN_HEIGHT}, got "
                f"{self.board_width}×{self.board_height}.",
            )
        if self.speed not in SPEED_LEVELS:
            raise ValueError(
                f"speed must be between {SPEED_LEVELS[0]} and "
                f"{SPEED_LEVELS[-1]}, got {self.speed}.",
            )
        if self.spawn_interval < 1:
            raise ValueError("spawn_interval must be at least 1.")
        if self.max_spawn_attempts < 1:
            raise ValueError("max_spawn_attempts must be at least 1.")

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        return cls(**raw)
