"""Random placement of fruit and dynamite on free cells."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from dynamite_snake.position import Position

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 1000


class BoardFullError(RuntimeError):
    """Raised when no free cell is left to place an object on."""


def random_free_position(
    rng: np.random.Generator,
    max_x: int,
    max_y: int,
    occupied: Iterable[Position],
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Position:
    """Pick a uniformly random free position in ``[1, max_x) × [1, max_y)``.

    Candidates are drawn independently and rejected while they land on an
    occupied cell. After *max_attempts* misses the remaining free cells are
    enumerated and one is chosen directly, so the call always terminates.

    Raises :class:`BoardFullError` if every candidate cell is occupied.
    """
    if max_x <= 1 or max_y <= 1:
        raise ValueError("max_x and max_y must both be greater than 1.")
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1.")

    taken = _occupancy(max_x, max_y, occupied)
    if taken[1:, 1:].all():
        logger.warning(
            "No free cells available in %dx%d area.", max_x - 1, max_y - 1,
        )
        raise BoardFullError(
            f"No free cell left in [1, {max_x}) × [1, {max_y}).",
        )

    for _ in range(max_attempts):
        x = int(rng.integers(1, max_x))
        y = int(rng.integers(1, max_y))
        if not taken[y, x]:
            return Position(x, y)

    free = _free_cells(taken)
    logger.debug(
        "Rejection sampling gave up after %d attempts; %d free cells left.",
        max_attempts, len(free),
    )
    return free[int(rng.integers(len(free)))]


def _occupancy(
    max_x: int, max_y: int, occupied: Iterable[Position],
) -> np.ndarray:
    """Boolean ``[y, x]`` mask of occupied cells; row and column 0 are unused."""
    taken = np.zeros((max_y, max_x), dtype=bool)
    for p in occupied:
        if 0 < p.x < max_x and 0 < p.y < max_y:
            taken[p.y, p.x] = True
    return taken


def _free_cells(taken: np.ndarray) -> list[Position]:
    ys, xs = np.where(~taken[1:, 1:])
    return [
        Position(x + 1, y + 1)
        for y, x in zip(ys.tolist(), xs.tolist(), strict=True)
    ]
