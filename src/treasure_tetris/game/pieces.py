from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


def _frozen(rows: List[List[int]]) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


def rotate_cw(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise (reverse rows, then transpose)."""
    rotated = np.ascontiguousarray(shape[::-1].T)
    rotated.setflags(write=False)
    return rotated


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
    TetrominoType.J: _frozen([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.L: _frozen([[0, 0, 1], [1, 1, 1]]),
}

COLORS: Dict[TetrominoType, str] = {
    TetrominoType.I: "#1FB8CD",
    TetrominoType.O: "#FFC185",
    TetrominoType.T: "#B4413C",
    TetrominoType.S: "#5D878F",
    TetrominoType.Z: "#DB4545",
    TetrominoType.J: "#D2BA4C",
    TetrominoType.L: "#964325",
}


def color_for_tag(tag: int) -> str | None:
    """Map a board cell value to its color; 0 (empty) maps to None."""
    if tag == 0:
        return None
    return COLORS[TetrominoType(abs(int(tag)))]


@dataclass(frozen=True)
class Piece:
    kind: TetrominoType
    shape: Shape
    x: int
    y: int

    @classmethod
    def spawn(cls, kind: TetrominoType, x: int, y: int) -> "Piece":
        return cls(kind=kind, shape=BASE_SHAPES[kind], x=x, y=y)

    @property
    def color(self) -> str:
        return COLORS[self.kind]

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self) -> "Piece":
        return replace(self, shape=rotate_cw(self.shape))

    def cells(self) -> List[Tuple[int, int]]:
        return cells_at(self.shape, self.x, self.y)


def cells_at(shape: Shape, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
    """Absolute (x, y) board coordinates of every occupied cell of ``shape``."""
    h, w = shape.shape
    cells: List[Tuple[int, int]] = []
    for dy in range(h):
        for dx in range(w):
            if shape[dy, dx]:
                cells.append((origin_x + dx, origin_y + dy))
    return cells


def rgb_for_tag(tag: int) -> Tuple[int, int, int] | None:
    color = color_for_tag(tag)
    if color is None:
        return None
    return int(color[1:3], 16), int(color[3:5], 16), int(color[5:7], 16)
