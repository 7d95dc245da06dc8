"""Halstead software science metrics.

Operators and operands are kept as multisets so that merging two spaces
computes distinct counts over the merged vocabulary, never by adding
the spaces' distinct counts.

Reference: Halstead (1977), "Elements of Software Science".
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from codegauge.core.categories import Category, NodeEvent


def _log2(value: float) -> float:
    return math.log2(value) if value > 0 else 0.0


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator else 0.0


def _frozen(counts: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType({text: n for text, n in sorted(counts.items()) if n > 0})


class HalsteadCollector:
    def __init__(self) -> None:
        self.operators: Counter[str] = Counter()
        self.operands: Counter[str] = Counter()

    def observe(self, event: NodeEvent) -> None:
        if event.has(Category.OPERATOR):
            self.operators[event.text] += 1
        elif event.has(Category.OPERAND):
            self.operands[event.text] += 1

    def finish(self) -> HalsteadStats:
        return HalsteadStats(operators=self.operators, operands=self.operands)


@dataclass(frozen=True)
class HalsteadStats:
    """Operator/operand multisets and the measures derived from them.

    The multisets are read-only views; ``combine`` builds new stats.
    """

    operators: Mapping[str, int] = field(default_factory=dict)
    operands: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "operators", _frozen(self.operators))
        object.__setattr__(self, "operands", _frozen(self.operands))

    def __hash__(self) -> int:
        return hash((tuple(self.operators.items()), tuple(self.operands.items())))

    # -- base counts ----------------------------------------------------

    @property
    def n1(self) -> int:
        """Distinct operators."""
        return len(self.operators)

    @property
    def n2(self) -> int:
        """Distinct operands."""
        return len(self.operands)

    @property
    def N1(self) -> int:  # noqa: N802
        """Total operators."""
        return sum(self.operators.values())

    @property
    def N2(self) -> int:  # noqa: N802
        """Total operands."""
        return sum(self.operands.values())

    # -- derived --------------------------------------------------------

    @property
    def length(self) -> int:
        return self.N1 + self.N2

    @property
    def vocabulary(self) -> int:
        return self.n1 + self.n2

    @property
    def volume(self) -> float:
        return self.length * _log2(self.vocabulary)

    @property
    def difficulty(self) -> float:
        return _ratio(self.n1, 2) * _ratio(self.N2, self.n2)

    @property
    def level(self) -> float:
        return _ratio(1.0, self.difficulty)

    @property
    def effort(self) -> float:
        return self.difficulty * self.volume

    @property
    def time(self) -> float:
        """Implementation time in seconds (Stroud number 18)."""
        return self.effort / 18.0

    @property
    def bugs(self) -> float:
        return self.effort ** (2.0 / 3.0) / 3000.0

    @property
    def estimated_program_length(self) -> float:
        return self.n1 * _log2(self.n1) + self.n2 * _log2(self.n2)

    @property
    def purity_ratio(self) -> float:
        return _ratio(self.estimated_program_length, self.length)

    def combine(self, other: HalsteadStats) -> HalsteadStats:
        return HalsteadStats(
            operators=Counter(self.operators) + Counter(other.operators),
            operands=Counter(self.operands) + Counter(other.operands),
        )

    def to_dict(self) -> dict[str, float]:
        return {
            "n1": self.n1,
            "n2": self.n2,
            "N1": self.N1,
            "N2": self.N2,
            "length": self.length,
            "vocabulary": self.vocabulary,
            "volume": self.volume,
            "difficulty": self.difficulty,
            "level": self.level,
            "effort": self.effort,
            "time": self.time,
            "bugs": self.bugs,
            "estimated_program_length": self.estimated_program_length,
            "purity_ratio": self.purity_ratio,
        }
