from __future__ import annotations

import random
import string
from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_clear_scores: tuple[int, int, int, int] = (100, 300, 500, 800)
    soft_drop_points: int = 1
    hard_drop_bonus: int = 2
    points_per_level: int = 1000
    initial_drop_interval: int = 1000
    drop_interval_step: int = 100
    min_drop_interval: int = 100
    energy_threshold: int = 5000
    treasure_code_length: int = 8
    treasure_alphabet: str = string.ascii_uppercase + string.digits

    def score_for_lines(self, lines: int, level: int = 1) -> int:
        if lines <= 0:
            return 0
        if 1 <= lines <= 4:
            return self.line_clear_scores[lines - 1] * level
        # Exaggerate beyond 4 just in case of variants
        return (self.line_clear_scores[-1] + (lines - 4) * 400) * level

    def level_for_score(self, score: int) -> int:
        return score // self.points_per_level + 1

    def drop_interval_for_level(self, level: int) -> int:
        interval = self.initial_drop_interval - (level - 1) * self.drop_interval_step
        return max(self.min_drop_interval, interval)

    def treasure_code(self, rng: random.Random) -> str:
        return "".join(rng.choice(self.treasure_alphabet) for _ in range(self.treasure_code_length))
