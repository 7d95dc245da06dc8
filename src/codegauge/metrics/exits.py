"""Number of exit points: return, raise/throw, Rust `?` and valued `break`."""

from __future__ import annotations

from dataclasses import dataclass

from codegauge.core.categories import Category, NodeEvent


class ExitCollector:
    def __init__(self) -> None:
        self.exits = 0

    def observe(self, event: NodeEvent) -> None:
        if event.has(Category.EXIT):
            self.exits += 1

    def finish(self) -> ExitStats:
        return ExitStats(sum=self.exits, spaces=1, max=self.exits)


@dataclass(frozen=True, slots=True)
class ExitStats:
    sum: int = 0
    spaces: int = 1
    max: int = 0

    @property
    def average(self) -> float:
        return self.sum / self.spaces if self.spaces else 0.0

    def combine(self, other: ExitStats) -> ExitStats:
        return ExitStats(
            sum=self.sum + other.sum,
            spaces=self.spaces + other.spaces,
            max=max(self.max, other.max),
        )

    def to_dict(self) -> dict[str, float]:
        return {"sum": self.sum, "average": self.average, "max": self.max}
