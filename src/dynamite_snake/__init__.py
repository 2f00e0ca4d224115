"""Dynamite Snake: game simulation core."""

from dynamite_snake.board import Board, CellType, Collision
from dynamite_snake.config import GameConfig
from dynamite_snake.position import Position
from dynamite_snake.session import GameSession, Speed, TickOutcome
from dynamite_snake.snake import Direction, Snake, is_opposite
from dynamite_snake.spawn import BoardFullError
from dynamite_snake.state import GameState

__all__ = [
    "Board",
    "BoardFullError",
    "CellType",
    "Collision",
    "Direction",
    "GameConfig",
    "GameSession",
    "GameState",
    "Position",
    "Snake",
    "Speed",
    "TickOutcome",
    "is_opposite",
]
