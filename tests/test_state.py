"""Tests for the GameState module."""

import json

import numpy as np
import pytest

from dynamite_snake.board import Board, CellType, Collision
from dynamite_snake.position import Position
from dynamite_snake.snake import Direction
from dynamite_snake.spawn import BoardFullError
from dynamite_snake.state import SCORE_PENALTY, GameState


class TestStateInit:
    def test_fresh_state(self):
        state = GameState(seed=0)
        assert len(state.snake_body) == 4
        assert state.direction == Direction.RIGHT
        assert state.fruits == []
        assert state.dynamites == []
        assert state.score == 0
        assert state.snake_alive

    def test_accessors(self):
        state = GameState(seed=0)
        assert state.snake_head == Position(6, 15)
        assert state.snake_tail == Position(3, 15)
        assert state.snake_body[-1] == state.snake_head

    def test_states_are_independent(self):
        a = GameState(seed=0)
        b = GameState(seed=0)
        a.move_snake()
        assert a.snake_head == Position(7, 15)
        assert b.snake_head == Position(6, 15)


class TestStateMovement:
    def test_move_once(self):
        state = GameState(seed=0)
        state.move_snake()
        assert len(state.snake_body) == 4
        assert state.snake_head == Position(7, 15)
        assert state.score == 0


class TestStateDirection:
    @pytest.mark.parametrize("facing", list(Direction))
    def test_reversal_rejected(self, facing):
        state = GameState(seed=0)
        state.snake.set_direction(facing)
        state.set_direction(facing.opposite)
        assert state.direction == facing

    def test_down_while_facing_up_is_rejected(self):
        state = GameState(seed=0)
        state.set_direction(Direction.UP)
        state.set_direction(Direction.DOWN)
        assert state.direction == Direction.UP

    def test_perpendicular_turn(self):
        state = GameState(seed=0)
        state.set_direction(Direction.DOWN)
        assert state.direction == Direction.DOWN

    def test_invalid_direction(self):
        state = GameState(seed=0)
        with pytest.raises(ValueError, match="No such direction"):
            state.set_direction("UP")


class TestStateScoring:
    def test_eat_fruit_at_head(self):
        state = GameState(seed=0)
        state.fruits.append(state.snake_head)
        assert state.snake_ate_fruit()
        assert state.fruits == []
        assert state.score == 8
        state.move_snake()
        assert len(state.snake_body) == 5

    def test_fruit_score_counts_length_and_dynamite(self):
        state = GameState(seed=0)
        state.snake.increase_size()
        state.move_snake()
        state.dynamites.extend([Position(1, 1), Position(2, 1), Position(3, 1)])
        state.fruits.append(state.snake_head)
        state.score = 10
        length = len(state.snake_body)
        assert state.snake_ate_fruit()
        assert state.score == 10 + 2 * length + 3

    def test_no_fruit_under_head(self):
        state = GameState(seed=0)
        state.fruits.append(Position(1, 1))
        assert not state.snake_ate_fruit()
        assert state.score == 0
        assert state.fruits == [Position(1, 1)]
        state.move_snake()
        assert len(state.snake_body) == 4

    def test_dynamite_penalty(self):
        state = GameState(seed=0)
        state.dynamites.append(state.snake_head)
        assert state.snake_stepped_dynamite()
        assert state.dynamites == []
        assert state.score == -SCORE_PENALTY
        assert len(state.snake_body) == 4

    def test_score_has_no_floor(self):
        state = GameState(seed=0)
        for _ in range(3):
            state.dynamites.append(state.snake_head)
            assert state.snake_stepped_dynamite()
        assert state.score == -75

    def test_no_dynamite_under_head(self):
        state = GameState(seed=0)
        assert not state.snake_stepped_dynamite()
        assert state.score == 0


class TestStateCollision:
    def test_no_collision_at_start(self):
        state = GameState(seed=0)
        assert state.detect_collision() is None
        assert not state.check_collision()

    def test_wall_collision(self):
        state = GameState(Board(width=10, height=8), seed=0)
        # Head starts at (6, 7); the right wall is x == 10.
        for _ in range(3):
            state.move_snake()
            assert not state.check_collision()
        state.move_snake()
        assert state.snake_head == Position(10, 7)
        assert state.detect_collision() == Collision.WALL

    def test_self_collision(self):
        state = GameState(seed=0)
        for _ in range(2):
            state.snake.increase_size()
            state.move_snake()
        for direction in (Direction.DOWN, Direction.LEFT, Direction.UP):
            state.set_direction(direction)
            state.move_snake()
        assert state.detect_collision() == Collision.SELF

    def test_head_is_not_a_self_collision(self):
        state = GameState(seed=0)
        state.move_snake()
        assert state.detect_collision() is None


class TestStateSpawning:
    def test_generate_avoids_everything(self):
        state = GameState(Board(width=8, height=6), seed=5)
        # Leave only a handful of free cells.
        free = {Position(1, 1), Position(7, 5), Position(2, 4)}
        for y in range(1, 6):
            for x in range(1, 8):
                p = Position(x, y)
                if p in free or state.snake.is_body(p):
                    continue
                (state.fruits if (x + y) % 2 else state.dynamites).append(p)
        for _ in range(100):
            p = state.generate_random_object(8, 6)
            assert p in free

    def test_generate_does_not_insert(self):
        state = GameState(seed=0)
        state.generate_random_object(79, 21)
        assert state.fruits == []
        assert state.dynamites == []

    def test_generate_defaults_to_board(self):
        state = GameState(Board(width=9, height=4), seed=3)
        for _ in range(100):
            p = state.generate_random_object()
            assert state.board.contains(p)

    def test_generate_on_full_board(self):
        state = GameState(Board(width=8, height=3), seed=0)
        for y in range(1, 3):
            for x in range(1, 8):
                p = Position(x, y)
                if not state.snake.is_body(p):
                    state.fruits.append(p)
        with pytest.raises(BoardFullError):
            state.generate_random_object()

    def test_spawn_fruit_and_dynamite(self):
        state = GameState(seed=11)
        fruit = state.spawn_fruit()
        dynamite = state.spawn_dynamite()
        assert state.fruits == [fruit]
        assert state.dynamites == [dynamite]
        assert fruit != dynamite
        assert not state.snake.is_body(fruit)
        assert not state.is_empty_position(fruit)
        assert not state.is_empty_position(state.snake_head)

    def test_spawn_deterministic(self):
        a = GameState(seed=99)
        b = GameState(seed=99)
        assert [a.spawn_fruit() for _ in range(5)] == [
            b.spawn_fruit() for _ in range(5)
        ]

    def test_shared_rng(self):
        rng = np.random.default_rng(4)
        state = GameState(rng=rng)
        assert state.rng is rng


class TestStateRendering:
    def test_cells(self):
        state = GameState(seed=0)
        state.fruits.append(Position(10, 10))
        cells = state.cells()
        assert cells[15, 6] == CellType.HEAD
        assert cells[15, 3] == CellType.SNAKE
        assert cells[10, 10] == CellType.FRUIT

    def test_to_dict_is_json_serializable(self):
        state = GameState(seed=0)
        state.spawn_fruit()
        state.spawn_dynamite()
        d = state.to_dict()
        assert json.loads(json.dumps(d)) == d
        assert d["score"] == 0
        assert d["alive"] is True
        assert len(d["fruits"]) == 1
        assert d["snake"]["body"][-1] == [6, 15]

    def test_kill_snake(self):
        state = GameState(seed=0)
        state.kill_snake()
        assert not state.snake_alive
        assert state.to_dict()["alive"] is False
