from __future__ import annotations

import logging
from enum import Enum
from typing import Optional

from .core import TetrisEngine


logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class GameSession:
    """Lifecycle wrapper around a ``TetrisEngine``.

    Gates player commands on the session status and turns caller-supplied
    timestamps into gravity steps. The session never reads a clock itself;
    ``tick`` takes whatever time unit the driver uses, in the same unit as
    the engine's drop interval (milliseconds by default).
    """

    def __init__(self, engine: Optional[TetrisEngine] = None) -> None:
        self.engine = engine or TetrisEngine()
        self.status = SessionStatus.NOT_STARTED
        self.last_drop_time: Optional[float] = None

    @property
    def is_running(self) -> bool:
        return self.status is SessionStatus.RUNNING

    @property
    def is_paused(self) -> bool:
        return self.status is SessionStatus.PAUSED

    @property
    def is_game_over(self) -> bool:
        return self.status is SessionStatus.GAME_OVER

    def reset(self) -> None:
        self.engine.reset()
        self.status = SessionStatus.NOT_STARTED
        self.last_drop_time = None

    def start(self) -> None:
        """Begin a session, or restart one that is running or finished.

        Starting while paused resumes the current game.
        """
        if self.status in (SessionStatus.RUNNING, SessionStatus.GAME_OVER):
            self.engine.reset()
        self.status = SessionStatus.RUNNING
        self.last_drop_time = None
        if self.engine.current_piece is None:
            self.engine.spawn()
        self._sync_status()
        logger.debug("Session started")

    def toggle_pause(self) -> None:
        if self.status is SessionStatus.RUNNING:
            self.status = SessionStatus.PAUSED
        elif self.status is SessionStatus.PAUSED:
            self.status = SessionStatus.RUNNING
            self.last_drop_time = None

    def move(self, dx: int, dy: int) -> bool:
        if not self.is_running:
            return False
        moved = self.engine.move(dx, dy)
        self._sync_status()
        return moved

    def rotate(self) -> bool:
        if not self.is_running:
            return False
        return self.engine.rotate()

    def hard_drop(self) -> int:
        if not self.is_running:
            return 0
        distance = self.engine.hard_drop()
        self._sync_status()
        return distance

    def tick(self, now: float) -> bool:
        """Advance gravity to time ``now``; return True if a downward step was issued."""
        if not self.is_running:
            return False
        if self.last_drop_time is None:
            self.last_drop_time = now
            return False
        if now - self.last_drop_time <= self.engine.drop_interval:
            return False
        self.engine.move(0, 1)
        self.last_drop_time = now
        self._sync_status()
        return True

    def _sync_status(self) -> None:
        if self.engine.game_over and self.status is not SessionStatus.GAME_OVER:
            self.status = SessionStatus.GAME_OVER
            logger.info("Game over with score %d", self.engine.score)
