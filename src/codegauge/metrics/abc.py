"""ABC metric: assignments, branches (calls) and conditions."""

from __future__ import annotations

import math
from dataclasses import dataclass

from codegauge.core.categories import Category, NodeEvent


class AbcCollector:
    def __init__(self) -> None:
        self.assignments = 0
        self.branches = 0
        self.conditions = 0

    def observe(self, event: NodeEvent) -> None:
        if event.has(Category.ASSIGNMENT):
            self.assignments += 1
        if event.has(Category.CALL):
            self.branches += 1
        if event.has(Category.CONDITION):
            self.conditions += 1

    def finish(self) -> AbcStats:
        return AbcStats(self.assignments, self.branches, self.conditions)


@dataclass(frozen=True, slots=True)
class AbcStats:
    assignments: int = 0
    branches: int = 0
    conditions: int = 0

    @property
    def magnitude(self) -> float:
        return math.sqrt(self.assignments**2 + self.branches**2 + self.conditions**2)

    def combine(self, other: AbcStats) -> AbcStats:
        return AbcStats(
            self.assignments + other.assignments,
            self.branches + other.branches,
            self.conditions + other.conditions,
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "assignments": self.assignments,
            "branches": self.branches,
            "conditions": self.conditions,
            "magnitude": self.magnitude,
        }
