from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    points_per_line: int = 100

    def __post_init__(self) -> None:
        value = self.points_per_line
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"points_per_line must be positive, got {self.points_per_line}")

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.points_per_line
