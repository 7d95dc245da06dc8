"""Number of arguments of functions and closures."""

from __future__ import annotations

from dataclasses import dataclass

from codegauge.core.categories import Category, NodeEvent
from codegauge.metrics.nom import is_opener


class NargsCollector:
    def __init__(self) -> None:
        self.stats = NargsStats()

    def observe(self, event: NodeEvent) -> None:
        if not is_opener(event):
            return
        arity = event.arity or 0
        if event.has(Category.CLOSURE):
            own = NargsStats(closure_args=arity, closures=1, max=arity)
        else:
            own = NargsStats(function_args=arity, functions=1, max=arity)
        self.stats = self.stats.combine(own)

    def finish(self) -> NargsStats:
        return self.stats


@dataclass(frozen=True, slots=True)
class NargsStats:
    function_args: int = 0
    closure_args: int = 0
    functions: int = 0
    closures: int = 0
    max: int = 0

    @property
    def total(self) -> int:
        return self.function_args + self.closure_args

    @property
    def average_function_args(self) -> float:
        return self.function_args / self.functions if self.functions else 0.0

    @property
    def average_closure_args(self) -> float:
        return self.closure_args / self.closures if self.closures else 0.0

    def combine(self, other: NargsStats) -> NargsStats:
        return NargsStats(
            function_args=self.function_args + other.function_args,
            closure_args=self.closure_args + other.closure_args,
            functions=self.functions + other.functions,
            closures=self.closures + other.closures,
            max=max(self.max, other.max),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "function_args": self.function_args,
            "closure_args": self.closure_args,
            "total": self.total,
            "max": self.max,
            "average_function_args": self.average_function_args,
            "average_closure_args": self.average_closure_args,
        }
