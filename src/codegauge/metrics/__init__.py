"""Metric collectors and their mergeable statistics.

Each metric family has a collector that consumes the classified node
stream of one space, and a frozen stats type whose ``combine`` is
associative and commutative.
"""

from __future__ import annotations

from dataclasses import dataclass

from codegauge.core.categories import NodeEvent
from codegauge.metrics.abc import AbcCollector, AbcStats
from codegauge.metrics.cognitive import CognitiveCollector, CognitiveStats
from codegauge.metrics.cyclomatic import CyclomaticCollector, CyclomaticStats
from codegauge.metrics.exits import ExitCollector, ExitStats
from codegauge.metrics.halstead import HalsteadCollector, HalsteadStats
from codegauge.metrics.loc import LineTally, LocCollector, LocStats
from codegauge.metrics.mi import MaintainabilityIndex
from codegauge.metrics.nargs import NargsCollector, NargsStats
from codegauge.metrics.nom import NomCollector, NomStats
from codegauge.metrics.npa import NpaCollector, NpaStats
from codegauge.metrics.npm import NpmCollector, NpmStats
from codegauge.metrics.wmc import WmcStats


@dataclass(frozen=True, slots=True)
class SpaceTally:
    """Finalized own-collector outputs of one space."""

    decisions: int
    cognitive: CognitiveStats
    halstead: HalsteadStats
    abc: AbcStats
    lines: LineTally
    nom: NomStats
    nargs: NargsStats
    nexits: ExitStats
    npm: NpmStats
    npa: NpaStats


class CollectorSet:
    """One instance of every collector, fed the events of a single space."""

    __slots__ = (
        "abc",
        "cognitive",
        "cyclomatic",
        "exits",
        "halstead",
        "loc",
        "nargs",
        "nom",
        "npa",
        "npm",
    )

    def __init__(self) -> None:
        self.cyclomatic = CyclomaticCollector()
        self.cognitive = CognitiveCollector()
        self.halstead = HalsteadCollector()
        self.abc = AbcCollector()
        self.loc = LocCollector()
        self.nom = NomCollector()
        self.nargs = NargsCollector()
        self.exits = ExitCollector()
        self.npm = NpmCollector()
        self.npa = NpaCollector()

    def observe(self, event: NodeEvent) -> None:
        self.cyclomatic.observe(event)
        self.cognitive.observe(event)
        self.halstead.observe(event)
        self.abc.observe(event)
        self.loc.observe(event)
        self.nom.observe(event)
        self.nargs.observe(event)
        self.exits.observe(event)
        self.npm.observe(event)
        self.npa.observe(event)

    def finish(self) -> SpaceTally:
        return SpaceTally(
            decisions=self.cyclomatic.finish(),
            cognitive=self.cognitive.finish(),
            halstead=self.halstead.finish(),
            abc=self.abc.finish(),
            lines=self.loc.finish(),
            nom=self.nom.finish(),
            nargs=self.nargs.finish(),
            nexits=self.exits.finish(),
            npm=self.npm.finish(),
            npa=self.npa.finish(),
        )


__all__ = [
    "AbcCollector",
    "AbcStats",
    "CognitiveCollector",
    "CognitiveStats",
    "CollectorSet",
    "CyclomaticCollector",
    "CyclomaticStats",
    "ExitCollector",
    "ExitStats",
    "HalsteadCollector",
    "HalsteadStats",
    "LineTally",
    "LocCollector",
    "LocStats",
    "MaintainabilityIndex",
    "NargsCollector",
    "NargsStats",
    "NomCollector",
    "NomStats",
    "NpaCollector",
    "NpaStats",
    "NpmCollector",
    "NpmStats",
    "SpaceTally",
    "WmcStats",
]
