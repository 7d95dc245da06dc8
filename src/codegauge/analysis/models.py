"""Output data model: the space tree and its metrics bundles."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from codegauge.core.languages import Language
from codegauge.metrics import (
    AbcStats,
    CognitiveStats,
    CyclomaticStats,
    ExitStats,
    HalsteadStats,
    LocStats,
    MaintainabilityIndex,
    NargsStats,
    NomStats,
    NpaStats,
    NpmStats,
    WmcStats,
)


class SpaceKind(str, Enum):
    """Kind of lexical scope a space represents."""

    UNIT = "unit"
    MODULE = "module"
    CLASS = "class"
    FUNCTION = "function"
    CLOSURE = "closure"


@dataclass(frozen=True)
class MetricsBundle:
    """Every metric of one space, either its own or rolled up over its subtree."""

    cyclomatic: CyclomaticStats = field(default_factory=CyclomaticStats)
    cognitive: CognitiveStats = field(default_factory=CognitiveStats)
    halstead: HalsteadStats = field(default_factory=HalsteadStats)
    abc: AbcStats = field(default_factory=AbcStats)
    loc: LocStats = field(default_factory=LocStats)
    nom: NomStats = field(default_factory=NomStats)
    nargs: NargsStats = field(default_factory=NargsStats)
    nexits: ExitStats = field(default_factory=ExitStats)
    npm: NpmStats = field(default_factory=NpmStats)
    npa: NpaStats = field(default_factory=NpaStats)
    wmc: WmcStats = field(default_factory=WmcStats)
    mi: MaintainabilityIndex = field(default_factory=MaintainabilityIndex)

    def combine(self, other: MetricsBundle) -> MetricsBundle:
        """Merge the cumulative metrics of two bundles.

        The maintainability index is derived, not merged: call
        ``with_derived`` on the result.
        """
        return MetricsBundle(
            cyclomatic=self.cyclomatic.combine(other.cyclomatic),
            cognitive=self.cognitive.combine(other.cognitive),
            halstead=self.halstead.combine(other.halstead),
            abc=self.abc.combine(other.abc),
            loc=self.loc.combine(other.loc),
            nom=self.nom.combine(other.nom),
            nargs=self.nargs.combine(other.nargs),
            nexits=self.nexits.combine(other.nexits),
            npm=self.npm.combine(other.npm),
            npa=self.npa.combine(other.npa),
            wmc=self.wmc.combine(other.wmc),
            mi=self.mi,
        )

    def with_derived(self) -> MetricsBundle:
        """Recompute the maintainability index from this bundle's base metrics."""
        mi = MaintainabilityIndex.compute(
            volume=self.halstead.volume,
            cyclomatic=self.cyclomatic.sum,
            sloc=self.loc.sloc,
            cloc=self.loc.cloc,
        )
        return dataclasses.replace(self, mi=mi)

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {
            "cyclomatic": self.cyclomatic.to_dict(),
            "cognitive": self.cognitive.to_dict(),
            "halstead": self.halstead.to_dict(),
            "abc": self.abc.to_dict(),
            "loc": self.loc.to_dict(),
            "nom": self.nom.to_dict(),
            "nargs": self.nargs.to_dict(),
            "nexits": self.nexits.to_dict(),
            "npm": self.npm.to_dict(),
            "npa": self.npa.to_dict(),
            "wmc": self.wmc.to_dict(),
            "mi": self.mi.to_dict(),
        }


@dataclass(frozen=True)
class Space:
    """One lexical scope of the analyzed unit.

    Attributes:
        kind: Scope kind
        name: Declared name, ``<anonymous>`` for unnamed scopes, or the
            unit path (possibly None) for the root
        start_line: 1-based first line
        end_line: 1-based last line
        start_byte: Byte offset of the scope's first byte
        end_byte: Byte offset one past the scope's last byte
        spaces: Child spaces in source order
        own: Metrics of this space alone
        metrics: Metrics rolled up over this space and all descendants
    """

    kind: SpaceKind
    name: str | None
    start_line: int
    end_line: int
    start_byte: int
    end_byte: int
    spaces: tuple[Space, ...] = ()
    own: MetricsBundle = field(default_factory=MetricsBundle)
    metrics: MetricsBundle = field(default_factory=MetricsBundle)

    @property
    def is_leaf(self) -> bool:
        return not self.spaces


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of analyzing one source unit.

    ``root`` is None for the absent result (empty or whitespace-only
    source), which is not an error.
    """

    language: Language
    root: Space | None
    path: str | None = None
    error_count: int = 0
    total_nodes: int = 0

    @property
    def is_absent(self) -> bool:
        return self.root is None

    def to_dict(self, max_depth: int | None = None) -> dict[str, Any]:
        from codegauge.enrichment import space_to_dict

        return {
            "path": self.path,
            "language": self.language.value,
            "error_count": self.error_count,
            "total_nodes": self.total_nodes,
            "root": None if self.root is None else space_to_dict(self.root, max_depth=max_depth),
        }
