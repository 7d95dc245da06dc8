"""Node View Adapter over tree-sitter nodes.

``NodeView`` is a read-only projection of one parser node: kind, span,
children and a borrowed slice of the source buffer. It owns nothing; a
view is only valid while the tree and the source it was built from are
alive.
"""

from __future__ import annotations

from typing import Any


class NodeView:
    """Uniform view of a concrete syntax tree node."""

    __slots__ = ("_node", "_source")

    def __init__(self, node: Any, source: memoryview) -> None:
        self._node = node
        self._source = source

    def __repr__(self) -> str:
        return f"NodeView(kind={self.kind!r}, lines={self.start_line}-{self.end_line})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeView):
            return NotImplemented
        return self._node == other._node

    def __hash__(self) -> int:
        return hash((self.kind, self.start_byte, self.end_byte))

    def _wrap(self, node: Any) -> NodeView | None:
        if node is None:
            return None
        return NodeView(node, self._source)

    # -- kind -----------------------------------------------------------

    @property
    def kind(self) -> str:
        return self._node.type

    @property
    def is_named(self) -> bool:
        return self._node.is_named

    @property
    def is_error(self) -> bool:
        """ERROR and MISSING nodes emitted by the parser on malformed input."""
        return self._node.type == "ERROR" or self._node.is_missing

    # -- span -----------------------------------------------------------

    @property
    def start_byte(self) -> int:
        return self._node.start_byte

    @property
    def end_byte(self) -> int:
        return self._node.end_byte

    @property
    def start_line(self) -> int:
        return self._node.start_point[0] + 1

    @property
    def end_line(self) -> int:
        # An end point at column 0 means the node stops before that line.
        row, column = self._node.end_point[0], self._node.end_point[1]
        if column == 0 and row > self._node.start_point[0]:
            return row
        return row + 1

    # -- structure ------------------------------------------------------

    @property
    def children(self) -> list[NodeView]:
        return [NodeView(child, self._source) for child in self._node.children]

    @property
    def named_children(self) -> list[NodeView]:
        return [NodeView(child, self._source) for child in self._node.named_children]

    @property
    def child_count(self) -> int:
        return self._node.child_count

    @property
    def is_leaf(self) -> bool:
        return self._node.child_count == 0

    @property
    def parent(self) -> NodeView | None:
        return self._wrap(self._node.parent)

    @property
    def prev_sibling(self) -> NodeView | None:
        return self._wrap(self._node.prev_sibling)

    @property
    def next_sibling(self) -> NodeView | None:
        return self._wrap(self._node.next_sibling)

    def field(self, name: str) -> NodeView | None:
        """Child stored under a grammar field name, if any."""
        return self._wrap(self._node.child_by_field_name(name))

    def fields(self, name: str) -> list[NodeView]:
        return [NodeView(child, self._source) for child in self._node.children_by_field_name(name)]

    # -- text -----------------------------------------------------------

    @property
    def raw(self) -> memoryview:
        """Borrowed view of the node's bytes in the source buffer."""
        return self._source[self._node.start_byte : self._node.end_byte]

    @property
    def text(self) -> str:
        return bytes(self.raw).decode("utf-8", errors="replace")
