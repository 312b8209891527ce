from __future__ import annotations

import random

import numpy as np
import pytest

from treasure_tetris.game import BASE_SHAPES, GameGrid, TetrominoType, rotate_cw
from treasure_tetris.game.pieces import cells_at


I_FLAT = BASE_SHAPES[TetrominoType.I]


def _reference_collides(grid: GameGrid, x: int, y: int, shape) -> bool:
    for cx, cy in cells_at(shape, x, y):
        if not 0 <= cx < grid.width or cy >= grid.height:
            return True
        if cy >= 0 and grid.grid[cy, cx]:
            return True
    return False


def test_rejects_non_positive_dimensions():
    with pytest.raises(ValueError):
        GameGrid(0, 20)


def test_walls_and_floor():
    grid = GameGrid(10, 20)
    assert not grid.collides(0, 0, I_FLAT)
    assert not grid.collides(6, 19, I_FLAT)
    assert grid.collides(-1, 0, I_FLAT)
    assert grid.collides(7, 0, I_FLAT)
    assert grid.collides(0, 20, I_FLAT)


def test_rows_above_board_are_not_checked_against_content():
    grid = GameGrid(10, 20)
    grid.grid[0, :] = 1
    assert not grid.collides(3, -1, I_FLAT)
    assert grid.collides(3, 0, I_FLAT)
    # Still bounded by the side walls above the board
    assert grid.collides(8, -1, I_FLAT)


def test_collision_matches_definition_on_random_boards():
    rng = random.Random(42)
    kinds = list(TetrominoType)
    for _ in range(300):
        grid = GameGrid(10, 20)
        grid.grid[:] = np.array([[rng.random() < 0.3 for _ in range(10)] for _ in range(20)], dtype=np.int8)
        shape = BASE_SHAPES[rng.choice(kinds)]
        for _ in range(rng.randrange(4)):
            shape = rotate_cw(shape)
        x, y = rng.randint(-3, 11), rng.randint(-4, 21)
        assert grid.collides(x, y, shape) == _reference_collides(grid, x, y, shape)


def test_place_drops_cells_above_board():
    grid = GameGrid(10, 20)
    written = grid.place([(0, -2), (0, -1), (0, 0), (0, 1)], 3)
    assert written == 2
    assert grid.grid[0, 0] == 3 and grid.grid[1, 0] == 3
    assert int(np.count_nonzero(grid.grid)) == 2


def test_clear_single_line_shifts_rows_down():
    grid = GameGrid(10, 20)
    grid.grid[19, :] = 2
    grid.grid[18, 3] = 5
    grid.grid[10, 7] = 6
    assert grid.clear_full_lines() == 1
    assert grid.grid[19].tolist() == [0, 0, 0, 5, 0, 0, 0, 0, 0, 0]
    assert grid.grid[11, 7] == 6
    assert not grid.grid[0].any()
    assert int(np.count_nonzero(grid.grid)) == 2


def test_clear_non_adjacent_lines():
    grid = GameGrid(10, 20)
    grid.grid[19, :] = 1
    grid.grid[18, 0] = 4
    grid.grid[17, :] = 1
    assert grid.clear_full_lines() == 2
    assert grid.grid[19].tolist() == [4] + [0] * 9
    assert int(np.count_nonzero(grid.grid)) == 1


def test_clear_no_full_lines():
    grid = GameGrid(10, 20)
    grid.grid[19, :9] = 1
    before = grid.clone_state()
    assert grid.clear_full_lines() == 0
    assert np.array_equal(grid.grid, before)


def test_max_height():
    grid = GameGrid(10, 20)
    assert grid.get_max_height() == 0
    grid.grid[15, 2] = 1
    assert grid.get_max_height() == 5
