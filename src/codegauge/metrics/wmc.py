"""Weighted methods per class: the sum of a class's method complexities."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WmcStats:
    sum: int = 0
    classes: int = 0

    @classmethod
    def for_class(cls, method_complexities: Iterable[int]) -> WmcStats:
        return cls(sum=sum(method_complexities), classes=1)

    @property
    def average(self) -> float:
        return self.sum / self.classes if self.classes else 0.0

    def combine(self, other: WmcStats) -> WmcStats:
        return WmcStats(self.sum + other.sum, self.classes + other.classes)

    def to_dict(self) -> dict[str, float]:
        return {"sum": self.sum, "classes": self.classes, "average": self.average}
