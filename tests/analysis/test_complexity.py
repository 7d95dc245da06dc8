"""Tests for control-flow and Halstead metrics on real grammars."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from codegauge.analysis import Space

Analyze = Callable[..., Space]
Find = Callable[[Space, str], Space]


class TestCognitive:
    """Cognitive complexity increments."""

    def test_given_js_else_if_chain_when_analyzed_then_flat_increments(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "function grade(n) {\n"
            "  if (n > 90) {\n"
            "    return 'A';\n"
            "  } else if (n > 80) {\n"
            "    return 'B';\n"
            "  } else {\n"
            "    return 'C';\n"
            "  }\n"
            "}\n"
        )

        # When
        grade = find_space(analyze(source, "javascript"), "grade")

        # Then
        assert grade.metrics.cognitive.sum == 3
        assert grade.metrics.cyclomatic.sum == 3
        assert grade.metrics.nexits.sum == 3

    def test_given_python_elif_chain_when_analyzed_then_flat_increments(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "def grade(n):\n"
            "    if n > 90:\n"
            "        return 'A'\n"
            "    elif n > 80:\n"
            "        return 'B'\n"
            "    else:\n"
            "        return 'C'\n"
        )

        # When
        grade = find_space(analyze(source, "python"), "grade")

        # Then
        assert grade.metrics.cognitive.sum == 3
        assert grade.metrics.cyclomatic.sum == 3

    def test_given_nested_structures_when_analyzed_then_nesting_weighted(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "def drain(queues):\n"
            "    for q in queues:\n"
            "        if q:\n"
            "            while q:\n"
            "                q.pop()\n"
        )

        # When
        drain = find_space(analyze(source, "python"), "drain")

        # Then
        assert drain.metrics.cognitive.sum == 1 + 2 + 3
        assert drain.metrics.cognitive.max_nesting == 3
        assert drain.metrics.cyclomatic.sum == 4

    def test_given_mixed_boolean_sequences_when_analyzed_then_one_per_sequence(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # When
        check = find_space(
            analyze("def check(a, b, c, d):\n    return a and b and c or d\n", "python"),
            "check",
        )

        # Then
        assert check.metrics.cognitive.sum == 2
        assert check.metrics.cyclomatic.sum == 4

    def test_given_nested_function_when_analyzed_then_nesting_restarts(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "def outer(x):\n"
            "    if x:\n"
            "        def inner(y):\n"
            "            if y:\n"
            "                return 1\n"
            "        return inner\n"
        )

        # When
        root = analyze(source, "python")

        # Then
        assert find_space(root, "inner").own.cognitive.sum == 1
        assert find_space(root, "outer").own.cognitive.sum == 1
        assert find_space(root, "outer").metrics.cognitive.sum == 2


class TestCyclomaticSwitch:
    @pytest.mark.parametrize(
        ("source", "language"),
        [
            (
                "class S {\n  int f(int k) {\n    switch (k) {\n      case 1: return 1;\n"
                "      case 2: return 2;\n      default: return 0;\n    }\n  }\n}\n",
                "java",
            ),
            (
                "int f(int k) {\n  switch (k) {\n    case 1: return 1;\n"
                "    case 2: return 2;\n    default: return 0;\n  }\n}\n",
                "cpp",
            ),
        ],
    )
    def test_given_switch_with_default_when_analyzed_then_default_not_a_decision(
        self, analyze: Analyze, find_space: Find, source: str, language: str
    ) -> None:
        # When
        f = find_space(analyze(source, language), "f")

        # Then
        assert f.metrics.cyclomatic.sum == 3


ONE_CASE_AND_DEFAULT = [
    (
        "python",
        "def f(k):\n    match k:\n        case 1:\n            return 10\n"
        "        case _:\n            return 0\n",
        "f",
    ),
    (
        "rust",
        "fn f(k: i32) -> i32 {\n    match k {\n        1 => 10,\n        _ => 0,\n    }\n}\n",
        "f",
    ),
    (
        "go",
        "package main\n\nfunc f(k int) int {\n\tswitch k {\n\tcase 1:\n\t\treturn 10\n"
        "\tdefault:\n\t\treturn 0\n\t}\n}\n",
        "f",
    ),
    (
        "javascript",
        "function f(k) {\n  switch (k) {\n    case 1:\n      return 10;\n"
        "    default:\n      return 0;\n  }\n}\n",
        "f",
    ),
    (
        "typescript",
        "function f(k: number): number {\n  switch (k) {\n    case 1:\n      return 10;\n"
        "    default:\n      return 0;\n  }\n}\n",
        "f",
    ),
    (
        "cpp",
        "int f(int k) {\n  switch (k) {\n    case 1: return 10;\n    default: return 0;\n  }\n}\n",
        "f",
    ),
    (
        "java",
        "class S {\n  int f(int k) {\n    switch (k) {\n      case 1: return 10;\n"
        "      default: return 0;\n    }\n  }\n}\n",
        "f",
    ),
    (
        "csharp",
        "class S {\n  int F(int k) {\n    switch (k) {\n      case 1: return 10;\n"
        "      default: return 0;\n    }\n  }\n}\n",
        "F",
    ),
    ("csharp", "class S {\n  int F(int k) => k switch { 1 => 10, _ => 0 };\n}\n", "F"),
]


class TestDefaultArms:
    """Default labels and `_` arms: a condition, never a decision."""

    @pytest.mark.parametrize(("language", "source", "name"), ONE_CASE_AND_DEFAULT)
    def test_given_one_case_and_default_when_analyzed_then_same_counts_everywhere(
        self, analyze: Analyze, find_space: Find, language: str, source: str, name: str
    ) -> None:
        # When
        f = find_space(analyze(source, language), name)

        # Then
        assert f.metrics.cyclomatic.sum == 2
        assert f.metrics.abc.conditions == 2

    def test_given_guarded_wildcard_arm_when_analyzed_then_decision(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "fn f(k: i32, on: bool) -> i32 {\n"
            "    match k {\n        _ if on => 1,\n        _ => 0,\n    }\n}\n"
        )

        # When
        f = find_space(analyze(source, "rust"), "f")

        # Then
        assert f.metrics.cyclomatic.sum == 2

    @pytest.mark.parametrize(
        ("language", "source"),
        [
            ("javascript", "export default function main() {\n  return 1;\n}\n"),
            ("cpp", "struct P {\n  P() = default;\n};\n"),
            ("java", "interface Shape {\n  default int sides() { return 0; }\n}\n"),
        ],
    )
    def test_given_default_keyword_outside_switch_when_analyzed_then_no_condition(
        self, analyze: Analyze, language: str, source: str
    ) -> None:
        # When
        root = analyze(source, language)

        # Then
        assert root.metrics.abc.conditions == 0


class TestHalstead:
    def test_given_assignment_when_analyzed_then_operators_and_operands(
        self, analyze: Analyze
    ) -> None:
        # When
        halstead = analyze("x = a + 1\n", "python").metrics.halstead

        # Then
        assert (halstead.n1, halstead.N1) == (2, 2)
        assert (halstead.n2, halstead.N2) == (3, 3)

    def test_given_string_literal_when_analyzed_then_single_operand(
        self, analyze: Analyze
    ) -> None:
        # When
        halstead = analyze('greeting = "hello world"\n', "python").metrics.halstead

        # Then
        assert halstead.operands == {"greeting": 1, '"hello world"': 1}
        assert dict(halstead.operators) == {"=": 1}

    def test_given_two_functions_when_rolled_then_distinct_counts_merged(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given: both functions use the operand "x"
        root = analyze("def f(x):\n    return x\n\ndef g(x):\n    return x\n", "python")

        # When
        f = find_space(root, "f").metrics.halstead
        g = find_space(root, "g").metrics.halstead
        merged = root.metrics.halstead

        # Then
        assert merged.operands["x"] == f.operands["x"] + g.operands["x"]
        assert merged.n2 < f.n2 + g.n2
        assert merged.N2 == f.N2 + g.N2


class TestExitsAndAbc:
    def test_given_rust_exits_when_analyzed_then_try_and_valued_break_count(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "fn f(v: Option<i32>) -> Option<i32> {\n"
            "    let x = v?;\n"
            "    let y = loop { break 5; };\n"
            "    loop { break; }\n"
            "    return Some(x + y);\n"
            "}\n"
        )

        # When
        f = find_space(analyze(source, "rust"), "f")

        # Then
        assert f.metrics.nexits.sum == 3

    def test_given_python_statements_when_analyzed_then_abc_components(
        self, analyze: Analyze
    ) -> None:
        # Given
        source = "total = 0\ntotal += compute()\nif total == 3:\n    report(total)\n"

        # When
        abc = analyze(source, "python").metrics.abc

        # Then
        assert abc.assignments == 2
        assert abc.branches == 2
        assert abc.conditions == 1
