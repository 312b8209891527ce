from __future__ import annotations

import pytest

from treasure_tetris.game import GameConfig, TetrisEngine


@pytest.fixture
def engine() -> TetrisEngine:
    return TetrisEngine(GameConfig(random_seed=1234))
