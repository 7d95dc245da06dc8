"""Lines of code.

Collectors only record which lines carry code or comments and how many
logical statements a space has. Physical lines are attributed to spaces
after the tree is built: every line of the unit is owned by exactly one
space, so rolled-up counters are plain sums.

- sloc: physical lines owned
- ploc: owned lines with at least one code token
- lloc: logical statements
- cloc: owned lines with a comment (a line may be both code and comment)
- blank: owned whitespace-only lines with neither code nor comment

Lines that hold only malformed code (skipped error subtrees) are counted
in sloc and nowhere else.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from codegauge.core.categories import Category, NodeEvent

_CODE = Category.OPERATOR | Category.OPERAND | Category.TERMINATOR | Category.DELIMITER


@dataclass(frozen=True, slots=True)
class LineTally:
    """Raw line observations of one space."""

    code_lines: frozenset[int] = frozenset()
    comment_lines: frozenset[int] = frozenset()
    lloc: int = 0


class LocCollector:
    def __init__(self) -> None:
        self.code_lines: set[int] = set()
        self.comment_lines: set[int] = set()
        self.lloc = 0

    def observe(self, event: NodeEvent) -> None:
        if event.has(Category.COMMENT):
            self.comment_lines.update(range(event.start_line, event.end_line + 1))
        elif event.has(_CODE):
            self.code_lines.update(range(event.start_line, event.end_line + 1))
        if event.has(Category.STATEMENT):
            self.lloc += 1

    def finish(self) -> LineTally:
        return LineTally(frozenset(self.code_lines), frozenset(self.comment_lines), self.lloc)


@dataclass(frozen=True, slots=True)
class LocStats:
    sloc: int = 0
    ploc: int = 0
    lloc: int = 0
    cloc: int = 0
    blank: int = 0

    @classmethod
    def from_lines(
        cls,
        owned: Iterable[int],
        code_lines: frozenset[int],
        comment_lines: frozenset[int],
        lloc: int,
        blank_lines: frozenset[int] = frozenset(),
    ) -> LocStats:
        sloc = ploc = cloc = blank = 0
        for line in owned:
            sloc += 1
            is_code = line in code_lines
            is_comment = line in comment_lines
            ploc += is_code
            cloc += is_comment
            blank += line in blank_lines and not (is_code or is_comment)
        return cls(sloc=sloc, ploc=ploc, lloc=lloc, cloc=cloc, blank=blank)

    def combine(self, other: LocStats) -> LocStats:
        return LocStats(
            sloc=self.sloc + other.sloc,
            ploc=self.ploc + other.ploc,
            lloc=self.lloc + other.lloc,
            cloc=self.cloc + other.cloc,
            blank=self.blank + other.blank,
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "sloc": self.sloc,
            "ploc": self.ploc,
            "lloc": self.lloc,
            "cloc": self.cloc,
            "blank": self.blank,
        }
