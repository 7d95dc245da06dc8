"""Tests for line attribution across spaces."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from codegauge.analysis import Space
from codegauge.analysis._internal.aggregate import assign_territories, build_spaces
from codegauge.analysis._internal.builder import Frame
from codegauge.analysis.models import SpaceKind
from codegauge.core.errors import InternalError
from codegauge.enrichment import iter_spaces

Analyze = Callable[..., Space]
Find = Callable[[Space, str], Space]

COMMENTED = (
    "# header\n"
    "\n"
    "def f(x):\n"
    "    # explain\n"
    "    y = x  # trailing\n"
    "    return y\n"
)


class TestLocAttribution:
    def test_given_function_with_comments_when_analyzed_then_own_lines(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # When
        root = analyze(COMMENTED, "python")
        f = find_space(root, "f")

        # Then
        assert f.own.loc.to_dict() == {"sloc": 4, "ploc": 3, "lloc": 2, "cloc": 2, "blank": 0}
        assert (root.own.loc.sloc, root.own.loc.cloc, root.own.loc.blank) == (2, 1, 1)
        assert root.own.loc.ploc == 0

    def test_given_function_with_comments_when_rolled_then_whole_unit(
        self, analyze: Analyze
    ) -> None:
        # When
        loc = analyze(COMMENTED, "python").metrics.loc

        # Then
        assert (loc.sloc, loc.ploc, loc.cloc, loc.blank, loc.lloc) == (6, 3, 3, 1, 2)

    def test_given_any_tree_when_rolled_then_own_plus_children(self, analyze: Analyze) -> None:
        # Given
        source = (
            "class A:\n"
            "    '''Docs.'''\n"
            "\n"
            "    def m(self):\n"
            "        f = lambda v: v  # inline\n"
            "        return f(1)\n"
            "\n"
            "\n"
            "def g():\n"
            "    pass\n"
        )

        # When
        root = analyze(source, "python")

        # Then
        for _, space in iter_spaces(root):
            expected = space.own.loc
            for child in space.spaces:
                expected = expected.combine(child.metrics.loc)
            assert space.metrics.loc == expected
        assert root.metrics.loc.sloc == 10

    def test_given_sloc_when_rolled_then_matches_unit_lines(self, analyze: Analyze) -> None:
        root = analyze("int a;\n\nint main() {\n  return a;\n}\n", "cpp")
        assert root.metrics.loc.sloc == 5
        assert root.metrics.loc.blank == 1


def _frame(kind: SpaceKind, start: int, end: int) -> Frame:
    return Frame(
        kind=kind,
        name=None,
        node=None,  # type: ignore[arg-type]
        start_line=start,
        end_line=end,
        start_byte=start * 10,
        end_byte=end * 10,
    )


class TestTerritories:
    def test_given_overlapping_siblings_when_assigned_then_earlier_wins(self) -> None:
        # Given
        root = _frame(SpaceKind.UNIT, 1, 10)
        first = _frame(SpaceKind.FUNCTION, 2, 5)
        second = _frame(SpaceKind.FUNCTION, 5, 8)
        nested = _frame(SpaceKind.CLOSURE, 4, 7)
        root.children = [first, second]
        first.children = [nested]

        # When
        territories = assign_territories(root)

        # Then
        assert territories[id(first)] == (2, 5)
        assert territories[id(second)] == (6, 8)
        assert territories[id(nested)] == (4, 5)

    def test_given_unclosed_frame_when_built_then_internal_error(self) -> None:
        # Given
        root = _frame(SpaceKind.UNIT, 1, 1)

        # When / Then
        with pytest.raises(InternalError, match="never closed"):
            build_spaces(root)
