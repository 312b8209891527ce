from __future__ import annotations

from treasure_tetris.game import TetrisEngine, TetrominoType


FILLER = int(TetrominoType.O)


def fill_row_except(engine: TetrisEngine, row: int, *gaps: int) -> None:
    engine.grid.grid[row, :] = FILLER
    for col in gaps:
        engine.grid.grid[row, col] = 0
