"""Aggregator: turns the draft frame tree into immutable spaces.

Two passes over the frames:

1. Top-down line territories. Every physical line of the unit is owned
   by exactly one space: the innermost space covering it, or the earlier
   of two siblings that share a line.
2. Bottom-up rollup. A space's own bundle comes from its collectors and
   its own territory; its rolled bundle is own combined with every
   child's rolled bundle, then derived metrics are recomputed.
"""

from __future__ import annotations

from codegauge.analysis._internal.builder import Frame
from codegauge.analysis.models import MetricsBundle, Space, SpaceKind
from codegauge.core.errors import InternalError
from codegauge.metrics import CyclomaticStats, LocStats, SpaceTally, WmcStats

_CALLABLE_KINDS = (SpaceKind.FUNCTION, SpaceKind.CLOSURE)


def _preorder(root: Frame) -> list[Frame]:
    order: list[Frame] = []
    stack = [root]
    while stack:
        frame = stack.pop()
        order.append(frame)
        stack.extend(reversed(frame.children))
    return order


def assign_territories(root: Frame) -> dict[int, tuple[int, int]]:
    """Inclusive owned line range per frame (keyed by ``id``); empty when end < start."""
    territories = {id(root): (root.start_line, root.end_line)}
    for frame in _preorder(root):
        low, high = territories[id(frame)]
        cursor = low
        for child in frame.children:
            start = max(child.start_line, cursor)
            end = min(child.end_line, high)
            territories[id(child)] = (start, end)
            if start <= end:
                cursor = end + 1
    return territories


def _own_lines(frame: Frame, territories: dict[int, tuple[int, int]]) -> set[int]:
    low, high = territories[id(frame)]
    lines = set(range(low, high + 1))
    for child in frame.children:
        child_low, child_high = territories[id(child)]
        lines.difference_update(range(child_low, child_high + 1))
    return lines


def build_spaces(root: Frame) -> Space:
    """Finalize a closed frame tree into a ``Space`` tree with rolled-up metrics."""
    frames = _preorder(root)
    territories = assign_territories(root)

    tallies: dict[int, SpaceTally] = {}
    code_lines: set[int] = set()
    comment_lines: set[int] = set()
    for frame in frames:
        if frame.tally is None:
            raise InternalError.unexpected("frame was never closed", kind=frame.kind.value)
        tallies[id(frame)] = frame.tally
        code_lines |= frame.tally.lines.code_lines
        comment_lines |= frame.tally.lines.comment_lines
    code = frozenset(code_lines)
    comments = frozenset(comment_lines)

    built: dict[int, Space] = {}
    for frame in reversed(frames):
        children = tuple(built[id(child)] for child in frame.children)
        owned = _own_lines(frame, territories)
        own = _own_bundle(
            frame, tallies[id(frame)], children, owned, code, comments, root.blank_lines
        )
        rolled = own
        for child in children:
            rolled = rolled.combine(child.metrics)
        built[id(frame)] = Space(
            kind=frame.kind,
            name=frame.name,
            start_line=frame.start_line,
            end_line=frame.end_line,
            start_byte=frame.start_byte,
            end_byte=frame.end_byte,
            spaces=children,
            own=own,
            metrics=rolled.with_derived(),
        )
    return built[id(root)]


def _own_bundle(
    frame: Frame,
    tally: SpaceTally,
    children: tuple[Space, ...],
    owned: set[int],
    code_lines: frozenset[int],
    comment_lines: frozenset[int],
    blank_lines: frozenset[int],
) -> MetricsBundle:
    entry = frame.kind in _CALLABLE_KINDS or not children
    wmc = WmcStats()
    if frame.kind is SpaceKind.CLASS:
        wmc = WmcStats.for_class(
            child.metrics.cyclomatic.sum for child in children if child.kind is SpaceKind.FUNCTION
        )

    return MetricsBundle(
        cyclomatic=CyclomaticStats.for_space(tally.decisions, entry=entry),
        cognitive=tally.cognitive,
        halstead=tally.halstead,
        abc=tally.abc,
        loc=LocStats.from_lines(
            sorted(owned), code_lines, comment_lines, tally.lines.lloc, blank_lines
        ),
        nom=tally.nom,
        nargs=tally.nargs,
        nexits=tally.nexits,
        npm=tally.npm,
        npa=tally.npa,
        wmc=wmc,
    ).with_derived()
