"""Pytest configuration and shared fixtures for segment-bidi tests."""

from __future__ import annotations

from collections.abc import Callable, Generator, Mapping, Sequence
from pathlib import Path

import pytest
from click.testing import CliRunner

from segment_bidi.core import (
    BidiClass,
    IsolatingRunSequence,
    Level,
    build_sequences,
    compute_levels,
    resolve_explicit,
    resolve_neutral,
    resolve_weak,
)
from segment_bidi.core.classes import coerce_classes
from segment_bidi.text import bracket_lookup_for


@pytest.fixture
def runner() -> CliRunner:
    """Create a CliRunner instance for testing CLI commands."""
    return CliRunner()


@pytest.fixture
def levels_of() -> Callable[..., list[int]]:
    """Resolve class names to plain integer levels.

    Usage: levels_of(["L", "R"], paragraph_level=0, brackets={1: "("})
    """

    def _levels_of(
        classes: Sequence[str],
        paragraph_level: int = 0,
        brackets: Mapping[int, str] | None = None,
    ) -> list[int]:
        lookup = bracket_lookup_for(brackets) if brackets else None
        return [level.number for level in compute_levels(paragraph_level, classes, lookup)]

    return _levels_of


@pytest.fixture
def prepared() -> Callable[..., tuple]:
    """Run the explicit pass and build sequences for a list of class names.

    Returns (classes, levels, processing_classes, sequences).
    """

    def _prepared(
        classes: Sequence[str], paragraph_level: int = 0
    ) -> tuple[list[BidiClass], list[Level], list[BidiClass], list[IsolatingRunSequence]]:
        original = coerce_classes(classes)
        para = Level(paragraph_level)
        levels, processing = resolve_explicit(para, original)
        sequences = build_sequences(para, original, levels)
        return original, levels, processing, sequences

    return _prepared


@pytest.fixture
def weak_classes(prepared) -> Callable[..., list[str]]:
    """Processing classes after rules W1-W7, as strings."""

    def _weak_classes(classes: Sequence[str], paragraph_level: int = 0) -> list[str]:
        _, _, processing, sequences = prepared(classes, paragraph_level)
        for sequence in sequences:
            resolve_weak(sequence, processing)
        return [str(c) for c in processing]

    return _weak_classes


@pytest.fixture
def neutral_classes(prepared) -> Callable[..., list[str]]:
    """Processing classes after rules W1-W7 and N0-N2, as strings."""

    def _neutral_classes(
        classes: Sequence[str],
        paragraph_level: int = 0,
        brackets: Mapping[int, str] | None = None,
    ) -> list[str]:
        original, levels, processing, sequences = prepared(classes, paragraph_level)
        lookup = bracket_lookup_for(brackets) if brackets else None
        for sequence in sequences:
            resolve_weak(sequence, processing)
            resolve_neutral(sequence, levels, original, processing, lookup)
        return [str(c) for c in processing]

    return _neutral_classes


@pytest.fixture
def config_file(tmp_path: Path) -> Callable[[str], Path]:
    """Write a YAML config file into tmp_path and return its path."""

    def _config_file(content: str) -> Path:
        path = tmp_path / "config.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _config_file


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep tests away from the user's config file and environment."""
    monkeypatch.delenv("SEGMENT_BIDI_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    yield
