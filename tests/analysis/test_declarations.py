"""Tests for declaration metrics: nargs, nom, npm, npa and wmc."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from codegauge.analysis import Space, SpaceKind

Analyze = Callable[..., Space]
Find = Callable[[Space, str], Space]


class TestNargs:
    @pytest.mark.parametrize(
        ("source", "language", "expected"),
        [
            ("def f(a, *, b):\n    pass\n", "python", 2),
            ("def f(a, b=1, *args, c, **kw):\n    pass\n", "python", 5),
            ("int f(void) { return 0; }\n", "cpp", 0),
            ("int f(int a, char *b) { return a; }\n", "cpp", 2),
            ("package main\n\nfunc f(a, b int, c string) {}\n", "go", 3),
            ("function f(a, b = 2, ...rest) {}\n", "javascript", 3),
            ("fn f(a: i32, b: &str) {}\n", "rust", 2),
        ],
    )
    def test_given_function_when_analyzed_then_declared_parameters_counted(
        self, analyze: Analyze, find_space: Find, source: str, language: str, expected: int
    ) -> None:
        # When
        f = find_space(analyze(source, language), "f")

        # Then
        assert f.metrics.nargs.function_args == expected
        assert f.metrics.nargs.max == expected

    def test_given_bare_arrow_parameter_when_analyzed_then_closure_argument(
        self, analyze: Analyze
    ) -> None:
        # When
        root = analyze("const double = x => x * 2;\n", "javascript")

        # Then
        (closure,) = root.spaces
        assert closure.kind is SpaceKind.CLOSURE
        assert root.metrics.nargs.closure_args == 1
        assert root.metrics.nom.closures == 1
        assert root.metrics.nom.functions == 0


class TestVisibility:
    """Public and private members declared directly in classes."""

    def test_given_python_class_when_analyzed_then_underscore_marks_private(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "class Account:\n"
            "    rate = 1\n"
            "    _secret = 2\n"
            "\n"
            "    def __init__(self):\n"
            "        self.balance = 0\n"
            "\n"
            "    def deposit(self, amount):\n"
            "        self.balance += amount\n"
            "\n"
            "    def _audit(self):\n"
            "        pass\n"
        )

        # When
        account = find_space(analyze(source, "python"), "Account")

        # Then
        assert (account.metrics.npm.public, account.metrics.npm.private) == (2, 1)
        assert (account.metrics.npa.public, account.metrics.npa.private) == (1, 1)
        assert account.metrics.npm.classes == 1

    def test_given_java_class_when_analyzed_then_modifiers_decide(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "class Account {\n"
            "    public int balance;\n"
            "    private int secret;\n"
            "\n"
            "    public void deposit(int amount) { balance += amount; }\n"
            "    private void audit() {}\n"
            "    void helper() {}\n"
            "}\n"
        )

        # When
        account = find_space(analyze(source, "java"), "Account")

        # Then
        assert (account.metrics.npm.public, account.metrics.npm.private) == (1, 2)
        assert (account.metrics.npa.public, account.metrics.npa.private) == (1, 1)

    def test_given_java_interface_when_analyzed_then_members_public(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # When
        shape = find_space(
            analyze("interface Shape {\n    default int sides() { return 0; }\n}\n", "java"),
            "Shape",
        )

        # Then
        assert (shape.metrics.npm.public, shape.metrics.npm.private) == (1, 0)

    def test_given_rust_impl_when_analyzed_then_pub_marks_public(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "struct Counter { n: i32 }\n"
            "\n"
            "impl Counter {\n"
            "    pub fn get(&self) -> i32 { self.n }\n"
            "    fn bump(&mut self) { self.n += 1; }\n"
            "}\n"
        )

        # When
        root = analyze(source, "rust")

        # Then
        counter = find_space(root, "Counter")
        assert (counter.metrics.npm.public, counter.metrics.npm.private) == (1, 1)
        assert find_space(root, "bump").metrics.nargs.function_args == 1

    def test_given_cpp_access_sections_when_analyzed_then_sections_decide(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "class Widget {\n"
            "public:\n"
            "    int size;\n"
            "    void draw() {}\n"
            "private:\n"
            "    int secret;\n"
            "    void helper() {}\n"
            "};\n"
            "\n"
            "struct Point {\n"
            "    int x;\n"
            "    int norm() { return x; }\n"
            "};\n"
        )

        # When
        root = analyze(source, "cpp")

        # Then
        widget = find_space(root, "Widget")
        point = find_space(root, "Point")
        assert (widget.metrics.npm.public, widget.metrics.npm.private) == (1, 1)
        assert (widget.metrics.npa.public, widget.metrics.npa.private) == (1, 1)
        assert (point.metrics.npm.public, point.metrics.npa.public) == (1, 1)
        assert (point.metrics.npm.private, point.metrics.npa.private) == (0, 0)

    def test_given_js_hash_names_when_analyzed_then_hash_marks_private(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "class Account {\n"
            "  #secret = 1;\n"
            "  balance = 0;\n"
            "  deposit(amount) { this.balance += amount; }\n"
            "  #audit() {}\n"
            "}\n"
        )

        # When
        account = find_space(analyze(source, "javascript"), "Account")

        # Then
        assert (account.metrics.npm.public, account.metrics.npm.private) == (1, 1)
        assert (account.metrics.npa.public, account.metrics.npa.private) == (1, 1)

    def test_given_typescript_accessibility_when_analyzed_then_modifiers_decide(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "class Account {\n"
            "  private secret = 1;\n"
            "  balance = 0;\n"
            "  deposit(amount: number): void { this.balance += amount; }\n"
            "  private audit(): void {}\n"
            "}\n"
        )

        # When
        account = find_space(analyze(source, "typescript"), "Account")

        # Then
        assert (account.metrics.npm.public, account.metrics.npm.private) == (1, 1)
        assert (account.metrics.npa.public, account.metrics.npa.private) == (1, 1)


class TestWmc:
    def test_given_class_methods_when_analyzed_then_complexities_summed(
        self, analyze: Analyze, find_space: Find
    ) -> None:
        # Given
        source = (
            "class Shape:\n"
            "    def one(self):\n"
            "        return 1\n"
            "\n"
            "    def two(self, x):\n"
            "        if x:\n"
            "            return 2\n"
            "        return 0\n"
            "\n"
            "    def four(self, a, b, c):\n"
            "        if a:\n"
            "            pass\n"
            "        if b:\n"
            "            pass\n"
            "        if c:\n"
            "            pass\n"
            "        return 4\n"
        )

        # When
        root = analyze(source, "python")

        # Then
        shape = find_space(root, "Shape")
        assert shape.own.wmc.sum == 7
        assert shape.metrics.wmc.sum == 7
        assert root.metrics.wmc.classes == 1
        assert shape.metrics.npm.public == 3
