"""Shared fixtures for analysis tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from codegauge.analysis import Space, analyze_source
from codegauge.enrichment import iter_spaces


@pytest.fixture
def analyze() -> Callable[..., Space]:
    """Analyze a snippet and return its root space."""

    def _analyze(source: str, language: str, **kwargs: object) -> Space:
        result = analyze_source(source, language, **kwargs)
        assert result.root is not None
        return result.root

    return _analyze


@pytest.fixture
def find_space() -> Callable[[Space, str], Space]:
    """Look up a space by declared name anywhere in a tree."""

    def _find(root: Space, name: str) -> Space:
        for _, space in iter_spaces(root):
            if space.name == name:
                return space
        raise AssertionError(f"no space named {name!r}")

    return _find
