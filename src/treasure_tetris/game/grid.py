from __future__ import annotations

from typing import Iterable, List, Tuple

import numpy as np

from .pieces import Shape, cells_at


Coordinate = Tuple[int, int]


class GameGrid:
    """Fixed-size board for falling tetrominoes.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are the ``TetrominoType`` of the piece that filled the
    cell, so the renderer can recover its color. Row 0 is the top.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def collides(self, x: int, y: int, shape: Shape) -> bool:
        """True if ``shape`` placed with its top-left at (x, y) hits a wall, the floor or a block.

        Cells above the top edge (negative rows) are only checked against the
        side walls, so pieces may hang above the board while entering it.
        """
        for cx, cy in cells_at(shape, x, y):
            if cx < 0 or cx >= self.width or cy >= self.height:
                return True
            if cy >= 0 and self.grid[cy, cx] != 0:
                return True
        return False

    def place(self, cells: Iterable[Coordinate], value: int) -> int:
        """Write ``value`` into every on-board cell and return how many were written.

        Cells with a negative row are dropped.
        """
        written = 0
        for x, y in cells:
            if y < 0:
                continue
            self.grid[y, x] = value
            written += 1
        return written

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row] != 0))

    def clear_full_lines(self) -> int:
        """Remove full rows bottom-up, inserting an empty row at the top for each one.

        After a removal the same row index is examined again, since the row
        that shifted into it has not been checked yet.
        """
        cleared = 0
        row = self.height - 1
        while row >= 0:
            if self.is_row_full(row):
                self.grid[1 : row + 1] = self.grid[0:row].copy()
                self.grid[0] = 0
                cleared += 1
            else:
                row -= 1
        return cleared

    def filled_rows(self) -> List[int]:
        return [int(r) for r in np.where(np.any(self.grid != 0, axis=1))[0]]

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        rows = self.filled_rows()
        if not rows:
            return 0
        return self.height - rows[0]

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
