"""Maintainability index.

Three published variants, all computed from rolled-up Halstead volume,
cyclomatic complexity and line counts:

- original: 171 - 5.2 ln(V) - 0.23 CC - 16.2 ln(SLOC), clamped to [0, 171]
- sei: 171 - 5.2 log2(V) - 0.23 CC - 16.2 log2(SLOC)
  + 50 sin(sqrt(2.4 * cloc / sloc)), clamped at 0
- visual_studio: original rescaled to [0, 100]
"""

from __future__ import annotations

import math
from dataclasses import dataclass

MI_ORIGINAL_MAX = 171.0


def _ln(value: float) -> float:
    return math.log(value) if value > 0 else 0.0


def _log2(value: float) -> float:
    return math.log2(value) if value > 0 else 0.0


@dataclass(frozen=True, slots=True)
class MaintainabilityIndex:
    original: float = MI_ORIGINAL_MAX
    sei: float = MI_ORIGINAL_MAX
    visual_studio: float = 100.0

    @classmethod
    def compute(
        cls, volume: float, cyclomatic: float, sloc: int, cloc: int = 0
    ) -> MaintainabilityIndex:
        original = 171.0 - 5.2 * _ln(volume) - 0.23 * cyclomatic - 16.2 * _ln(sloc)
        original = min(max(original, 0.0), MI_ORIGINAL_MAX)

        comment_ratio = cloc / sloc if sloc else 0.0
        sei = (
            171.0
            - 5.2 * _log2(volume)
            - 0.23 * cyclomatic
            - 16.2 * _log2(sloc)
            + 50.0 * math.sin(math.sqrt(2.4 * comment_ratio))
        )
        sei = max(sei, 0.0)

        return cls(
            original=original,
            sei=sei,
            visual_studio=original * 100.0 / MI_ORIGINAL_MAX,
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "original": self.original,
            "sei": self.sei,
            "visual_studio": self.visual_studio,
        }
