"""Space Builder.

Walks the node view depth-first and opens a frame for every scope
opener. Each classified node becomes one ``NodeEvent`` routed to the
collectors of exactly one frame: the innermost frame whose opener
contains it. The opener node itself and its whole subtree belong to the
new frame.

Traversal uses an explicit stack, so deep expression trees never hit
the interpreter's recursion limit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from codegauge.analysis._internal.nodes import NodeView
from codegauge.analysis._internal.parsing.registry import ClassificationTable
from codegauge.analysis._internal.preproc import PreprocResults
from codegauge.analysis.models import SpaceKind
from codegauge.core.categories import CALLABLE, SCOPE, Category, NodeEvent
from codegauge.metrics import CollectorSet, SpaceTally

_HALSTEAD = Category.OPERATOR | Category.OPERAND

_KIND_FOR: tuple[tuple[Category, SpaceKind], ...] = (
    (Category.FUNCTION, SpaceKind.FUNCTION),
    (Category.CLOSURE, SpaceKind.CLOSURE),
    (Category.CLASS, SpaceKind.CLASS),
    (Category.MODULE, SpaceKind.MODULE),
)


def space_kind(category: Category) -> SpaceKind:
    for flag, kind in _KIND_FOR:
        if category & flag:
            return kind
    return SpaceKind.UNIT


@dataclass(eq=False)
class Frame:
    """Draft space, mutable while the tree is being built."""

    kind: SpaceKind
    name: str | None
    node: NodeView
    start_line: int
    end_line: int
    start_byte: int
    end_byte: int
    collectors: CollectorSet = field(default_factory=CollectorSet)
    children: list[Frame] = field(default_factory=list)
    access: bool | None = None
    tally: SpaceTally | None = None
    # Whitespace-only lines of the whole unit, set on the unit frame only
    blank_lines: frozenset[int] = frozenset()

    def close(self) -> None:
        self.tally = self.collectors.finish()


@dataclass(frozen=True, slots=True)
class _Close:
    frame: Frame


@dataclass(frozen=True, slots=True)
class _Visit:
    node: NodeView
    frame: Frame
    nesting: int
    in_operand: bool


class SpaceBuilder:
    """Builds the draft frame tree of one source unit.

    A builder is single-use and owned by one analysis call.
    """

    def __init__(
        self,
        table: ClassificationTable,
        source: bytes,
        *,
        name: str | None = None,
        preproc: PreprocResults | None = None,
    ) -> None:
        self._table = table
        self._source = memoryview(source)
        self._line_count = _line_count(source)
        self._blank_lines = _blank_lines(source)
        self._name = name
        self._macros = preproc.macros if preproc is not None else frozenset()
        self.skipped_errors = 0
        self.visited = 0

    def build(self, root_node: Any) -> Frame:
        root = NodeView(root_node, self._source)
        unit = Frame(
            kind=SpaceKind.UNIT,
            name=self._name,
            node=root,
            start_line=1,
            end_line=max(root.end_line, self._line_count),
            start_byte=0,
            end_byte=len(self._source),
            blank_lines=self._blank_lines,
        )

        stack: list[_Visit | _Close] = [_Visit(root, unit, 0, False)]
        while stack:
            item = stack.pop()
            if isinstance(item, _Close):
                item.frame.close()
                continue
            self._visit(item, stack)

        unit.close()
        return unit

    def _visit(self, item: _Visit, stack: list[_Visit | _Close]) -> None:
        node, frame = item.node, item.frame
        self.visited += 1
        if node.is_error:
            self.skipped_errors += 1
            return

        table = self._table
        category = table.classify(node, self._macros)
        if item.in_operand:
            category &= ~_HALSTEAD

        if frame.kind is SpaceKind.CLASS:
            access = table.access_change(node)
            if access is not None:
                frame.access = access

        if category & SCOPE:
            child = self._open(node, category, frame)
            stack.append(_Close(child))
            self._push_children(stack, node, child, 0, item.in_operand)
            return

        if category:
            frame.collectors.observe(self._event(node, category, frame, item.nesting))
        if category & Category.COMMENT:
            return

        nesting = item.nesting + 1 if category & Category.NESTING else item.nesting
        in_operand = item.in_operand or table.is_composite_operand(node)
        self._push_children(stack, node, frame, nesting, in_operand)

    def _open(self, node: NodeView, category: Category, parent: Frame) -> Frame:
        table = self._table
        kind = space_kind(category)
        child = Frame(
            kind=kind,
            name=table.space_name(node, category),
            node=node,
            start_line=node.start_line,
            end_line=node.end_line,
            start_byte=node.start_byte,
            end_byte=node.end_byte,
        )
        if kind is SpaceKind.CLASS:
            child.access = table.default_access(node)
        parent.children.append(child)

        arity = table.arity(node) if category & CALLABLE else None
        child.collectors.observe(
            NodeEvent(
                kind=node.kind,
                category=category & SCOPE,
                start_line=node.start_line,
                end_line=node.end_line,
                arity=arity,
            )
        )
        if parent.kind is SpaceKind.CLASS and category & Category.FUNCTION:
            parent.collectors.observe(
                NodeEvent(
                    kind=node.kind,
                    category=Category.FUNCTION,
                    text=child.name or "",
                    start_line=node.start_line,
                    end_line=node.start_line,
                    public=table.is_public(node, parent.node, parent.access),
                )
            )
        return child

    def _event(self, node: NodeView, category: Category, frame: Frame, nesting: int) -> NodeEvent:
        table = self._table
        public = None
        if category & Category.ATTRIBUTE and frame.kind is SpaceKind.CLASS:
            public = table.is_public(node, frame.node, frame.access)
        return NodeEvent(
            kind=node.kind,
            category=category,
            text=node.text if category & _HALSTEAD else "",
            start_line=node.start_line,
            end_line=node.end_line,
            nesting=nesting,
            sequence=table.starts_sequence(node) if category & Category.LOGICAL else True,
            public=public,
        )

    @staticmethod
    def _push_children(
        stack: list[_Visit | _Close],
        node: NodeView,
        frame: Frame,
        nesting: int,
        in_operand: bool,
    ) -> None:
        for child in reversed(node.children):
            stack.append(_Visit(child, frame, nesting, in_operand))


def _line_count(source: bytes) -> int:
    if not source:
        return 0
    return source.count(b"\n") + (0 if source.endswith(b"\n") else 1)


def _blank_lines(source: bytes) -> frozenset[int]:
    lines = source.split(b"\n")
    return frozenset(number for number, line in enumerate(lines, start=1) if not line.strip())
