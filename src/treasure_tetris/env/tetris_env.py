from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from treasure_tetris.game import Action, GameConfig, ScoringRules, TetrisEngine
from treasure_tetris.game.pieces import rgb_for_tag


class TreasureTetrisEnv(gym.Env):
    """Single-player falling-block environment driven one action per step.

    Observation is the board with the falling piece overlaid (negative
    tags), plus the energy meter. Reward is the score gained during the
    step. Gravity is not simulated; agents descend with SOFT_DROP or
    HARD_DROP.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        render_mode: Optional[str] = None,
        max_episode_steps: int = 5000,
    ) -> None:
        super().__init__()
        self.engine = TetrisEngine(config, rules)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.engine.grid.height, self.engine.grid.width
        n_kinds = 7
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=-n_kinds, high=n_kinds, shape=(h, w), dtype=np.int8),
                "energy": spaces.Box(low=0, high=np.inf, shape=(1,), dtype=np.float32),
            }
        )
        self.action_space = spaces.Discrete(len(Action))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        return {
            "board": self.engine.get_state(),
            "energy": np.array([self.engine.energy], dtype=np.float32),
        }

    def _get_info(self) -> Dict[str, Any]:
        progress = self.engine.progress_snapshot()
        return {
            "score": progress.score,
            "level": progress.level,
            "energy": progress.energy,
            "lines_cleared_total": progress.lines_cleared_total,
            "max_height": self.engine.grid.get_max_height(),
            "treasure_unlocked": progress.treasure_unlocked,
            "treasure_code": progress.treasure_code,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.engine.rng.seed(seed)
        self.engine.reset()
        self.engine.spawn()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        _, gained, terminated, _ = self.engine.step(Action(int(action)))
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps and not terminated
        return self._get_obs(), float(gained), bool(terminated), truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.engine.get_state()
        cell = 12
        h, w = state.shape
        img = np.full((h * cell, w * cell, 3), 30, dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v == 0:
                    continue
                color = rgb_for_tag(v)
                img[y * cell : (y + 1) * cell - 1, x * cell : (x + 1) * cell - 1, :] = color
        return img

    def close(self) -> None:
        pass
