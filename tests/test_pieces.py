from __future__ import annotations

import numpy as np
import pytest

from treasure_tetris.game import BASE_SHAPES, COLORS, Piece, TetrominoType, rotate_cw
from treasure_tetris.game.pieces import cells_at, color_for_tag, rgb_for_tag


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_four_rotations_restore_shape(kind):
    shape = BASE_SHAPES[kind]
    rotated = shape
    for _ in range(4):
        rotated = rotate_cw(rotated)
    assert rotated.shape == shape.shape
    assert np.array_equal(rotated, shape)


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_every_shape_has_four_cells(kind):
    assert int(BASE_SHAPES[kind].sum()) == 4


def test_rotate_is_clockwise():
    t = BASE_SHAPES[TetrominoType.T]
    assert rotate_cw(t).tolist() == [[1, 0], [1, 1], [1, 0]]
    assert rotate_cw(BASE_SHAPES[TetrominoType.I]).tolist() == [[1], [1], [1], [1]]


def test_catalog_is_read_only():
    with pytest.raises(ValueError):
        BASE_SHAPES[TetrominoType.L][0, 0] = 1


def test_piece_rotation_replaces_shape_only():
    piece = Piece.spawn(TetrominoType.J, 4, 0)
    rotated = piece.rotated()
    assert rotated is not piece
    assert (rotated.x, rotated.y, rotated.kind) == (4, 0, TetrominoType.J)
    assert np.array_equal(piece.shape, BASE_SHAPES[TetrominoType.J])


def test_cells_at_offsets_occupied_cells():
    assert cells_at(BASE_SHAPES[TetrominoType.S], 2, 5) == [(3, 5), (4, 5), (2, 6), (3, 6)]


def test_colors():
    assert Piece.spawn(TetrominoType.I, 0, 0).color == "#1FB8CD"
    assert color_for_tag(0) is None
    assert color_for_tag(-int(TetrominoType.Z)) == COLORS[TetrominoType.Z]
    assert rgb_for_tag(int(TetrominoType.I)) == (0x1F, 0xB8, 0xCD)
    assert rgb_for_tag(0) is None
