"""Cyclomatic complexity (McCabe)."""

from __future__ import annotations

from dataclasses import dataclass

from codegauge.core.categories import Category, NodeEvent


class CyclomaticCollector:
    """Counts decision points in one space."""

    def __init__(self) -> None:
        self.decisions = 0

    def observe(self, event: NodeEvent) -> None:
        if event.has(Category.DECISION):
            self.decisions += 1

    def finish(self) -> int:
        return self.decisions


@dataclass(frozen=True, slots=True)
class CyclomaticStats:
    """Cyclomatic values of a space or a merged subtree.

    ``sum`` is the subtree complexity: every decision plus one entry path
    per callable (or per leaf space), so a container with two children of
    complexity 2 and 1 rolls up to 3. ``min``/``max`` range over the
    per-space values ``decisions + 1``.
    """

    decisions: int = 0
    sum: int = 1
    spaces: int = 1
    min: int = 1
    max: int = 1

    @classmethod
    def for_space(cls, decisions: int, *, entry: bool = True) -> CyclomaticStats:
        value = decisions + 1
        return cls(
            decisions=decisions,
            sum=decisions + (1 if entry else 0),
            spaces=1,
            min=value,
            max=value,
        )

    @property
    def average(self) -> float:
        return self.sum / self.spaces if self.spaces else 0.0

    def combine(self, other: CyclomaticStats) -> CyclomaticStats:
        return CyclomaticStats(
            decisions=self.decisions + other.decisions,
            sum=self.sum + other.sum,
            spaces=self.spaces + other.spaces,
            min=min(self.min, other.min),
            max=max(self.max, other.max),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "sum": self.sum,
            "average": self.average,
            "min": self.min,
            "max": self.max,
        }
