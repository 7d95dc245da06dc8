"""Read-only export of analysis results for enrichment layers.

Enrichment integrations (databases, vector search, LLM scoring) consume
the space tree through the narrow ``SpaceConsumer`` capability. Spaces
are frozen, so nothing a consumer does can feed back into the metrics.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any, Protocol, runtime_checkable

import structlog

from codegauge.analysis.models import AnalysisResult, Space

log = structlog.get_logger(__name__)


@runtime_checkable
class SpaceConsumer(Protocol):
    """Anything that accepts finished analysis results."""

    def consume(self, result: AnalysisResult) -> None: ...


def iter_spaces(space: Space) -> Iterator[tuple[int, Space]]:
    """Yield ``(depth, space)`` pairs in source (pre-)order, root at depth 0."""
    stack = [(0, space)]
    while stack:
        depth, current = stack.pop()
        yield depth, current
        stack.extend((depth + 1, child) for child in reversed(current.spaces))


def space_to_dict(space: Space, *, max_depth: int | None = None) -> dict[str, Any]:
    """Plain-data view of a space tree (JSON-serializable).

    Children deeper than ``max_depth`` are omitted; their metrics remain
    included in every ancestor's rolled-up values.
    """

    def convert(node: Space, depth: int) -> dict[str, Any]:
        data: dict[str, Any] = {
            "kind": node.kind.value,
            "name": node.name,
            "start_line": node.start_line,
            "end_line": node.end_line,
            "metrics": node.metrics.to_dict(),
        }
        if max_depth is None or depth < max_depth:
            data["spaces"] = [convert(child, depth + 1) for child in node.spaces]
        else:
            data["spaces"] = []
        return data

    return convert(space, 0)


def publish(result: AnalysisResult, consumers: Iterable[SpaceConsumer]) -> int:
    """Hand a result to every consumer; returns how many received it."""
    delivered = 0
    for consumer in consumers:
        consumer.consume(result)
        delivered += 1
    log.debug("enrichment.published", path=result.path, consumers=delivered)
    return delivered


__all__ = ["SpaceConsumer", "iter_spaces", "publish", "space_to_dict"]
