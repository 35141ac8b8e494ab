"""Unit tests for segment_bidi.core.reorder (rules L1, L2).

Coverage: whitespace reset before separators and at line end, same-level
runs, run reversal from the highest level down, and index mapping.
"""

from __future__ import annotations

import pytest

from segment_bidi.core.classes import coerce_classes
from segment_bidi.core.level import Level
from segment_bidi.core.reorder import (
    reorder_runs,
    reset_whitespace_levels,
    same_level_runs,
    sort_map,
)
from segment_bidi.exceptions import InputLengthError


def as_levels(numbers: list[int]) -> list[Level]:
    return [Level(n) for n in numbers]


class TestResetWhitespace:
    """Test L1."""

    def test_trailing_whitespace_reset(self) -> None:
        """Whitespace at the end of a line goes back to the paragraph level."""
        levels = as_levels([1, 1, 1])
        reset_whitespace_levels(coerce_classes(["R", "R", "WS"]), levels, Level(0))
        assert levels == as_levels([1, 1, 0])

    def test_whitespace_before_separator(self) -> None:
        """Whitespace before a segment separator is reset with it."""
        levels = as_levels([1, 1, 1, 1])
        reset_whitespace_levels(coerce_classes(["R", "WS", "S", "R"]), levels, Level(0))
        assert levels == as_levels([1, 0, 0, 1])

    def test_inner_whitespace_kept(self) -> None:
        """Whitespace followed by a strong segment keeps its level."""
        levels = as_levels([1, 1, 1])
        reset_whitespace_levels(coerce_classes(["R", "WS", "R"]), levels, Level(0))
        assert levels == as_levels([1, 1, 1])

    def test_removed_controls_join_trailing_whitespace(self) -> None:
        """X9-removed segments take the previous level, then reset with trailing whitespace."""
        levels = as_levels([1, 1, 1, 0])
        classes = coerce_classes(["RLE", "R", "WS", "PDF"])
        reset_whitespace_levels(classes, levels, Level(0))
        assert levels == as_levels([0, 1, 0, 0])

    def test_length_mismatch(self) -> None:
        """Classes and levels must match."""
        with pytest.raises(InputLengthError):
            reset_whitespace_levels(coerce_classes(["L"]), [], Level(0))


class TestReorderRuns:
    """Test L2."""

    def test_same_level_runs(self) -> None:
        """Runs split wherever the level changes."""
        assert same_level_runs(as_levels([0, 0, 1, 1, 2, 0])) == [
            range(0, 2),
            range(2, 4),
            range(4, 5),
            range(5, 6),
        ]
        assert same_level_runs([]) == []

    def test_ltr_line_unchanged(self) -> None:
        """A line with only even levels is not reordered."""
        assert reorder_runs(as_levels([0, 0, 2, 2])) == [range(0, 2), range(2, 4)]

    def test_rtl_run_in_ltr_line(self) -> None:
        """A single odd run stays in place, only its contents reverse."""
        levels = as_levels([0, 1, 1, 0])
        runs = reorder_runs(levels)
        assert runs == [range(0, 1), range(1, 3), range(3, 4)]
        assert sort_map(runs, levels) == [0, 2, 1, 3]

    def test_numbers_in_rtl_line(self) -> None:
        """Digits at level 2 inside an RTL line keep their internal order."""
        levels = as_levels([1, 1, 2, 2])
        runs = reorder_runs(levels)
        assert runs == [range(2, 4), range(0, 2)]
        assert sort_map(runs, levels) == [2, 3, 1, 0]

    def test_nested_levels(self) -> None:
        """Runs are reversed level by level from the highest."""
        levels = as_levels([0, 1, 2, 3, 2, 1, 0])
        runs = reorder_runs(levels)
        assert sort_map(runs, levels) == [0, 5, 2, 3, 4, 1, 6]

    def test_offset(self) -> None:
        """sort_map shifts indices by the line offset."""
        levels = as_levels([1, 1])
        assert sort_map(reorder_runs(levels), levels, offset=10) == [11, 10]

    def test_empty_line(self) -> None:
        """No levels, no runs."""
        assert reorder_runs([]) == []
