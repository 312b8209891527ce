"""Game module for Treasure Tetris.

Exports the core game engine and supporting classes:
- GameGrid: Board representation, collision and line clearing
- Piece: Falling tetromino with clockwise rotation
- TetrominoType: Enum of available piece types
- ScoringRules: Scoring, leveling, energy and treasure configuration
- TetrisEngine: Commands and snapshots for one game
- GameSession: Start/pause/game-over lifecycle and gravity ticks
"""

from .grid import GameGrid
from .pieces import BASE_SHAPES, COLORS, Piece, TetrominoType, rotate_cw
from .rules import ScoringRules
from .core import Action, GameConfig, PieceSnapshot, Progress, TetrisEngine
from .session import GameSession, SessionStatus

__all__ = [
    "GameGrid",
    "BASE_SHAPES",
    "COLORS",
    "Piece",
    "TetrominoType",
    "rotate_cw",
    "ScoringRules",
    "Action",
    "GameConfig",
    "PieceSnapshot",
    "Progress",
    "TetrisEngine",
    "GameSession",
    "SessionStatus",
]
