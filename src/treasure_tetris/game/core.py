from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import COLORS, Piece, Shape, TetrominoType, color_for_tag
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NONE = 5


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0


@dataclass(frozen=True)
class PieceSnapshot:
    kind: TetrominoType
    shape: Shape
    color: str
    x: int
    y: int


@dataclass(frozen=True)
class Progress:
    score: int
    level: int
    energy: int
    energy_threshold: int
    drop_interval: int
    treasure_unlocked: bool
    treasure_code: Optional[str]
    lines_cleared_total: int


class TetrisEngine:
    """Falling-block engine: board, active piece and score/energy progression.

    All state changes go through the command methods (``move``, ``rotate``,
    ``hard_drop``, ``spawn``, ``reset``). Readers use the snapshot methods,
    which always return copies.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.current_piece: Optional[Piece] = None
        self.reset()

    def reset(self) -> None:
        self.grid.reset()
        self.score = 0
        self.energy = 0
        self.level = 1
        self.drop_interval = self.rules.initial_drop_interval
        self.treasure_unlocked = False
        self.treasure_code: Optional[str] = None
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.game_over = False
        self.current_piece = None

    @property
    def spawn_x(self) -> int:
        return self.grid.width // 2 - 1

    def spawn(self, kind: Optional[TetrominoType] = None) -> Piece:
        """Put a new piece at the top of the board, replacing any active one.

        Overlap at the spawn position ends the game; the piece stays set so
        the final position can still be drawn.
        """
        if kind is None:
            kind = self.rng.choice(list(TetrominoType))
        piece = Piece.spawn(TetrominoType(kind), self.spawn_x, self.config.spawn_y)
        self.current_piece = piece
        if self.collides(piece.x, piece.y, piece.shape):
            self.game_over = True
            logger.info("Top-out: %s cannot spawn, final score %d", piece.kind.name, self.score)
        return piece

    def collides(self, x: int, y: int, shape: Shape) -> bool:
        return self.grid.collides(x, y, shape)

    def _can_act(self) -> bool:
        return self.current_piece is not None and not self.game_over

    def move(self, dx: int, dy: int) -> bool:
        if not self._can_act():
            return False
        piece = self.current_piece
        if not self.collides(piece.x + dx, piece.y + dy, piece.shape):
            self.current_piece = piece.moved(dx, dy)
            if dy > 0:
                self.score += self.rules.soft_drop_points
                self.energy += self.rules.soft_drop_points
            return True
        # Only a blocked downward step locks; blocked sideways moves do nothing
        if dy > 0:
            self.lock()
        return False

    def rotate(self) -> bool:
        if not self._can_act():
            return False
        rotated = self.current_piece.rotated()
        if self.collides(rotated.x, rotated.y, rotated.shape):
            return False
        self.current_piece = rotated
        return True

    def hard_drop(self) -> int:
        """Drop the piece until it locks and return the number of rows it fell."""
        if not self._can_act():
            return 0
        distance = 0
        while self.move(0, 1):
            distance += 1
        bonus = distance * self.rules.hard_drop_bonus
        self.score += bonus
        self.energy += bonus
        return distance

    def lock(self) -> int:
        """Commit the active piece to the board, clear lines and spawn the next piece.

        Returns the number of lines cleared.
        """
        if self.current_piece is None:
            return 0
        piece = self.current_piece
        written = self.grid.place(piece.cells(), int(piece.kind))
        self.current_piece = None
        self.pieces_locked += 1
        logger.debug("Locked %s at (%d, %d), %d cells on board", piece.kind.name, piece.x, piece.y, written)
        lines = self.clear_lines()
        self.spawn()
        return lines

    def clear_lines(self) -> int:
        lines = self.grid.clear_full_lines()
        if lines == 0:
            return 0
        points = self.rules.score_for_lines(lines, self.level)
        self.score += points
        self.energy += points
        self.lines_cleared_total += lines
        self.level = self.rules.level_for_score(self.score)
        self.drop_interval = self.rules.drop_interval_for_level(self.level)
        logger.debug("Cleared %d line(s) for %d points, level %d", lines, points, self.level)
        # Energy from movement alone is only noticed here, on the next clear
        if self.energy >= self.rules.energy_threshold and not self.treasure_unlocked:
            self.unlock_treasure()
        return lines

    def unlock_treasure(self) -> str:
        self.treasure_unlocked = True
        self.treasure_code = self.rules.treasure_code(self.rng)
        logger.info("Treasure unlocked at %d energy", self.energy)
        return self.treasure_code

    def board_snapshot(self) -> np.ndarray:
        board = self.grid.clone_state()
        board.setflags(write=False)
        return board

    def color_board(self) -> Tuple[Tuple[Optional[str], ...], ...]:
        return tuple(tuple(color_for_tag(v) for v in row) for row in self.grid.grid)

    def piece_snapshot(self) -> Optional[PieceSnapshot]:
        piece = self.current_piece
        if piece is None:
            return None
        shape = piece.shape.copy()
        shape.setflags(write=False)
        return PieceSnapshot(kind=piece.kind, shape=shape, color=COLORS[piece.kind], x=piece.x, y=piece.y)

    def progress_snapshot(self) -> Progress:
        return Progress(
            score=self.score,
            level=self.level,
            energy=self.energy,
            energy_threshold=self.rules.energy_threshold,
            drop_interval=self.drop_interval,
            treasure_unlocked=self.treasure_unlocked,
            treasure_code=self.treasure_code,
            lines_cleared_total=self.lines_cleared_total,
        )

    def step(self, action: Action) -> Tuple[np.ndarray, int, bool, dict]:
        if self.game_over:
            return self.get_state(), 0, True, {}
        if self.current_piece is None:
            self.spawn()

        score_before = self.score
        if action == Action.LEFT:
            self.move(-1, 0)
        elif action == Action.RIGHT:
            self.move(1, 0)
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.SOFT_DROP:
            self.move(0, 1)
        elif action == Action.HARD_DROP:
            self.hard_drop()
        elif action == Action.NONE:
            pass

        info = {
            "score": self.score,
            "energy": self.energy,
            "level": self.level,
            "lines_cleared_total": self.lines_cleared_total,
            "treasure_unlocked": self.treasure_unlocked,
        }
        return self.get_state(), self.score - score_before, self.game_over, info

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for observation
        state = self.grid.clone_state()
        if self.current_piece is not None and not self.game_over:
            for x, y in self.current_piece.cells():
                if 0 <= y < self.grid.height and 0 <= x < self.grid.width:
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.current_piece.kind)
        return state
