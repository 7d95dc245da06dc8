"""Closed semantic vocabulary shared by every classification table.

A classification table maps a grammar's node kinds onto ``Category`` flags;
collectors only ever see flags, never grammar-specific kinds.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Flag, auto


class Category(Flag):
    """Semantic categories. A node may carry several at once."""

    UNKNOWN = 0

    # Scope openers
    FUNCTION = auto()
    CLOSURE = auto()
    CLASS = auto()
    MODULE = auto()

    # Control flow
    BRANCH = auto()  # if-like construct (if, elif); anchors else / else-if handling
    LOOP = auto()
    DECISION = auto()  # +1 cyclomatic
    NESTING = auto()  # cognitive structural increment, nests its subtree
    ELSE = auto()  # cognitive flat increment
    LOGICAL = auto()  # short-circuit operator token
    EXIT = auto()

    # Halstead
    OPERATOR = auto()
    OPERAND = auto()

    # Lines and statements
    COMMENT = auto()
    STATEMENT = auto()
    TERMINATOR = auto()
    DELIMITER = auto()

    # Declarations
    PARAMETER = auto()
    ATTRIBUTE = auto()

    # ABC
    ASSIGNMENT = auto()
    CALL = auto()
    CONDITION = auto()


SCOPE = Category.FUNCTION | Category.CLOSURE | Category.CLASS | Category.MODULE
CALLABLE = Category.FUNCTION | Category.CLOSURE
NOT_HALSTEAD = Category.TERMINATOR | Category.DELIMITER | Category.COMMENT


@dataclass(frozen=True, slots=True)
class NodeEvent:
    """One classified node, as routed to the collectors of a single space.

    Attributes:
        kind: Grammar node kind (``if_statement``, ``&&``, ...)
        category: Semantic flags for the node
        text: Source text, filled for operands, operators and declarations
        start_line: 1-based first line of the node
        end_line: 1-based last line of the node
        nesting: Cognitive nesting depth at the node
        sequence: For LOGICAL tokens, whether the token starts a new
            operator sequence
        arity: Parameter count, for FUNCTION/CLOSURE opener events
        public: Visibility, for method and attribute declaration events
    """

    kind: str
    category: Category
    text: str = ""
    start_line: int = 0
    end_line: int = 0
    nesting: int = 0
    sequence: bool = True
    arity: int | None = None
    public: bool | None = None

    def has(self, flags: Category) -> bool:
        return bool(self.category & flags)
