"""Scoring and timing constants shared by the board and the session loop."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    """Points awarded by the board and the session loop."""

    line_clear: int = 200
    combo_bonus: int = 200
    gravity_lock: int = 10
    hard_drop: int = 12

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.line_clear + (lines - 1) * self.combo_bonus


@dataclass(frozen=True)
class TimingRules:
    """Timer settings for the session loop, all in seconds."""

    base_gravity: float = 0.8
    min_gravity: float = 0.2
    gravity_step: float = 0.1
    level_length: float = 60.0
    soft_drop_gravity: float = 0.08
    repeat_initial_delay: float = 0.5
    repeat_delay: float = 0.1
