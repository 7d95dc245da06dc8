"""Cognitive complexity.

Structural increments (if, loops, switch, catch, ternary) score
``1 + nesting`` and deepen the nesting of their subtree. ``else``,
``elif`` and ``else if`` score a flat 1 without deepening. Each new
sequence of a logical operator scores a flat 1. Nesting restarts at 0
in every space.
"""

from __future__ import annotations

from dataclasses import dataclass

from codegauge.core.categories import Category, NodeEvent


class CognitiveCollector:
    def __init__(self) -> None:
        self.score = 0
        self.max_nesting = 0

    def observe(self, event: NodeEvent) -> None:
        if event.has(Category.NESTING):
            self.score += 1 + event.nesting
            self.max_nesting = max(self.max_nesting, event.nesting + 1)
        elif event.has(Category.ELSE):
            self.score += 1
        elif event.has(Category.LOGICAL) and event.sequence:
            self.score += 1

    def finish(self) -> CognitiveStats:
        return CognitiveStats.for_space(self.score, self.max_nesting)


@dataclass(frozen=True, slots=True)
class CognitiveStats:
    sum: int = 0
    spaces: int = 1
    min: int = 0
    max: int = 0
    max_nesting: int = 0

    @classmethod
    def for_space(cls, score: int, max_nesting: int = 0) -> CognitiveStats:
        return cls(sum=score, spaces=1, min=score, max=score, max_nesting=max_nesting)

    @property
    def average(self) -> float:
        return self.sum / self.spaces if self.spaces else 0.0

    def combine(self, other: CognitiveStats) -> CognitiveStats:
        return CognitiveStats(
            sum=self.sum + other.sum,
            spaces=self.spaces + other.spaces,
            min=min(self.min, other.min),
            max=max(self.max, other.max),
            max_nesting=max(self.max_nesting, other.max_nesting),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "sum": self.sum,
            "average": self.average,
            "min": self.min,
            "max": self.max,
            "max_nesting": self.max_nesting,
        }
