"""Gymnasium environments for Treasure Tetris."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default falling-block environment
register(
    id="TreasureTetris-v0",
    entry_point="treasure_tetris.env.tetris_env:TreasureTetrisEnv",
)

__all__ = ["TreasureTetris-v0"]
