from __future__ import annotations

import pytest

from treasure_tetris.game import GameConfig, GameSession, SessionStatus, TetrisEngine, TetrominoType

from .helpers import FILLER


@pytest.fixture
def session() -> GameSession:
    return GameSession(TetrisEngine(GameConfig(random_seed=5)))


def test_not_started_ignores_commands(session):
    assert session.status is SessionStatus.NOT_STARTED
    assert session.move(1, 0) is False
    assert session.rotate() is False
    assert session.hard_drop() == 0
    assert session.tick(5000) is False
    session.toggle_pause()
    assert session.status is SessionStatus.NOT_STARTED


def test_start_spawns_piece(session):
    session.start()
    assert session.is_running
    assert session.engine.current_piece is not None


def test_tick_follows_drop_interval(session):
    session.start()
    y0 = session.engine.current_piece.y
    assert session.tick(0) is False
    assert session.tick(1000) is False
    assert session.tick(1001) is True
    assert session.engine.current_piece.y == y0 + 1
    assert session.tick(1500) is False
    assert session.tick(2002) is True


def test_pause_gates_commands_and_gravity(session):
    session.start()
    session.tick(0)
    session.toggle_pause()
    assert session.is_paused
    assert session.move(1, 0) is False
    assert session.tick(10_000) is False

    session.toggle_pause()
    assert session.is_running
    # Resuming re-anchors gravity
    assert session.tick(20_000) is False
    assert session.tick(21_001) is True


def test_start_while_paused_resumes(session):
    session.start()
    session.hard_drop()
    score = session.engine.score
    session.toggle_pause()
    session.start()
    assert session.is_running
    assert session.engine.score == score


def test_start_while_running_restarts(session):
    session.start()
    session.hard_drop()
    assert session.engine.score > 0
    session.start()
    assert session.is_running
    assert session.engine.score == 0
    assert not session.engine.board_snapshot().any()


def _top_out(session: GameSession) -> None:
    session.start()
    session.engine.grid.grid[2:20, 0:9] = FILLER
    session.engine.spawn(TetrominoType.O)
    assert session.move(0, 1) is False


def test_top_out_ends_session(session):
    _top_out(session)
    assert session.is_game_over
    assert session.engine.game_over
    assert session.move(-1, 0) is False
    assert session.tick(100_000) is False
    session.toggle_pause()
    assert session.is_game_over


def test_start_after_game_over_resets(session):
    _top_out(session)
    session.start()
    assert session.is_running
    assert not session.engine.game_over
    assert not session.engine.board_snapshot().any()


def test_reset_returns_to_not_started(session):
    session.start()
    session.hard_drop()
    session.reset()
    assert session.status is SessionStatus.NOT_STARTED
    assert session.engine.current_piece is None
    assert session.engine.score == 0
