"""Number of public attributes declared directly in class spaces."""

from __future__ import annotations

from dataclasses import dataclass

from codegauge.core.categories import Category, NodeEvent
from codegauge.metrics.npm import is_class_opener


class NpaCollector:
    def __init__(self) -> None:
        self.public = 0
        self.private = 0
        self.classes = 0

    def observe(self, event: NodeEvent) -> None:
        if is_class_opener(event):
            self.classes += 1
        elif event.public is not None and event.has(Category.ATTRIBUTE):
            if event.public:
                self.public += 1
            else:
                self.private += 1

    def finish(self) -> NpaStats:
        return NpaStats(self.public, self.private, self.classes)


@dataclass(frozen=True, slots=True)
class NpaStats:
    public: int = 0
    private: int = 0
    classes: int = 0

    @property
    def total(self) -> int:
        return self.public + self.private

    @property
    def cda(self) -> float:
        """Class data accessibility: share of attributes that are public."""
        return self.public / self.total if self.total else 0.0

    def combine(self, other: NpaStats) -> NpaStats:
        return NpaStats(
            self.public + other.public,
            self.private + other.private,
            self.classes + other.classes,
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "public": self.public,
            "private": self.private,
            "total": self.total,
            "classes": self.classes,
            "cda": self.cda,
        }
