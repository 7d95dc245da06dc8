"""Number of methods: functions and closures."""

from __future__ import annotations

from dataclasses import dataclass

from codegauge.core.categories import Category, NodeEvent


def is_opener(event: NodeEvent) -> bool:
    """A callable's own opener event (the one carrying its arity)."""
    return event.arity is not None and event.has(Category.FUNCTION | Category.CLOSURE)


class NomCollector:
    def __init__(self) -> None:
        self.functions = 0
        self.closures = 0

    def observe(self, event: NodeEvent) -> None:
        if not is_opener(event):
            return
        if event.has(Category.CLOSURE):
            self.closures += 1
        else:
            self.functions += 1

    def finish(self) -> NomStats:
        return NomStats(self.functions, self.closures)


@dataclass(frozen=True, slots=True)
class NomStats:
    functions: int = 0
    closures: int = 0

    @property
    def total(self) -> int:
        return self.functions + self.closures

    def combine(self, other: NomStats) -> NomStats:
        return NomStats(self.functions + other.functions, self.closures + other.closures)

    def to_dict(self) -> dict[str, int]:
        return {"functions": self.functions, "closures": self.closures, "total": self.total}
