"""Unit tests for segment_bidi.core.explicit (rules X1-X8).

Coverage: embeddings, overrides, isolates, unmatched PDF/PDI, overflow
counters at the maximum depth, and the directional status stack.
"""

from __future__ import annotations

import pytest

from segment_bidi.core.classes import coerce_classes
from segment_bidi.core.explicit import (
    DirectionalStatusStack,
    OverrideStatus,
    explicit_compute,
    resolve_explicit,
)
from segment_bidi.core.level import Level
from segment_bidi.exceptions import InputLengthError, InvariantError


def explicit(classes: list[str], paragraph_level: int = 0) -> tuple[list[int], list[str]]:
    levels, processing = resolve_explicit(Level(paragraph_level), coerce_classes(classes))
    return [level.number for level in levels], [str(c) for c in processing]


def counters_for(classes: list[str], paragraph_level: int = 0):
    original = coerce_classes(classes)
    levels = [Level(paragraph_level)] * len(original)
    processing = list(original)
    counters = explicit_compute(Level(paragraph_level), original, levels, processing)
    return counters, levels


# 125 valid embeddings alternating RTL and LTR, reaching level 125.
DEEPEST = ["RLE", "LRE"] * 62 + ["RLE"]


class TestEmbeddings:
    """Test X2-X5 and X7 for embeddings and overrides."""

    def test_plain_text_keeps_paragraph_level(self) -> None:
        """Without controls every segment stays at the paragraph level."""
        assert explicit(["L", "R", "EN"], 1) == ([1, 1, 1], ["L", "R", "EN"])

    def test_embedding_control_carries_new_level(self) -> None:
        """RLE opens level 1 and becomes BN; PDF closes it."""
        levels, classes = explicit(["L", "RLE", "L", "PDF", "L"])
        assert levels == [0, 1, 1, 0, 0]
        assert classes == ["L", "BN", "L", "BN", "L"]

    def test_override_rewrites_classes(self) -> None:
        """RLO turns every following class into R until PDF."""
        levels, classes = explicit(["RLO", "L", "EN", "PDF", "L"])
        assert levels == [1, 1, 1, 0, 0]
        assert classes == ["BN", "R", "R", "BN", "L"]

    def test_bn_not_overridden(self) -> None:
        """BN keeps its class inside an override.

        Pinned behaviour that departs from the published X6 text, which under
        the retaining-formatting variant would rewrite BN to R here. The segment
        engine this package follows skips BN the same way.
        """
        levels, classes = explicit(["RLO", "BN", "L", "PDF"])
        assert levels == [1, 1, 1, 0]
        assert classes == ["BN", "BN", "R", "BN"]

    def test_unmatched_pdf_ignored(self) -> None:
        """A PDF with nothing to close does not pop the paragraph entry."""
        levels, classes = explicit(["PDF", "L"], 1)
        assert levels == [1, 1]
        assert classes == ["BN", "L"]


class TestIsolates:
    """Test X5a-X5c and X6a."""

    def test_isolate_controls_keep_outer_level(self) -> None:
        """LRI and PDI sit at the outer level, content one even level up."""
        levels, classes = explicit(["L", "LRI", "R", "PDI", "L"])
        assert levels == [0, 0, 2, 0, 0]
        assert classes == ["L", "LRI", "R", "PDI", "L"]

    def test_isolate_initiator_takes_enclosing_override(self) -> None:
        """Isolate controls inside an override take the override class."""
        levels, classes = explicit(["RLO", "LRI", "L", "PDI", "PDF"])
        assert levels == [1, 1, 2, 1, 0]
        assert classes == ["BN", "R", "L", "R", "BN"]

    def test_pdi_closes_open_embeddings(self) -> None:
        """PDI pops embeddings opened inside the isolate."""
        levels, _ = explicit(["RLI", "LRE", "R", "PDI", "R"])
        assert levels == [0, 2, 2, 0, 0]

    def test_unmatched_pdi_ignored(self) -> None:
        """A PDI without an open isolate changes nothing."""
        levels, classes = explicit(["PDI", "L"], 1)
        assert levels == [1, 1]
        assert classes == ["PDI", "L"]


class TestOverflow:
    """Test overflow counters at the maximum explicit depth."""

    def test_ltr_embeddings_overflow(self) -> None:
        """130 LREs reach level 124, the remaining 68 overflow."""
        counters, levels = counters_for(["LRE"] * 130 + ["L"])
        assert levels[-1] == Level(124)
        assert counters.overflow_embedding_count == 68
        assert counters.overflow_isolate_count == 0

    def test_pdf_consumes_overflow_first(self) -> None:
        """PDFs decrement the overflow count before popping real entries."""
        _, levels = counters_for(["LRE"] * 130 + ["PDF"] * 69 + ["L"])
        assert levels[-1] == Level(122)

    def test_alternating_embeddings_reach_125(self) -> None:
        """Alternating RLE/LRE reaches the maximum explicit depth."""
        counters, levels = counters_for(["RLE", "LRE"] * 65 + ["L"])
        assert levels[-1] == Level(125)
        assert counters.overflow_embedding_count == 5

    def test_isolate_overflow(self) -> None:
        """An isolate past the maximum depth is counted and keeps its level."""
        counters, levels = counters_for(DEEPEST + ["LRI", "L"])
        assert counters.overflow_isolate_count == 1
        assert counters.valid_isolate_count == 0
        assert levels[-2] == Level(125)
        assert levels[-1] == Level(125)

    def test_embedding_after_isolate_overflow_not_counted(self) -> None:
        """Embeddings after an overflowed isolate do not count as overflow."""
        counters, _ = counters_for(DEEPEST + ["LRI", "LRE"])
        assert counters.overflow_isolate_count == 1
        assert counters.overflow_embedding_count == 0

    def test_pdi_closes_overflowed_isolate(self) -> None:
        """A PDI matching an overflowed isolate only decrements the counter."""
        counters, levels = counters_for(DEEPEST + ["LRI", "PDI", "L"])
        assert counters.overflow_isolate_count == 0
        assert levels[-1] == Level(125)


class TestDirectionalStatusStack:
    """Test the bounded stack and input checks."""

    def test_capacity(self) -> None:
        """The stack holds 127 entries and refuses more."""
        stack = DirectionalStatusStack()
        for _ in range(DirectionalStatusStack.CAPACITY):
            stack.push(Level(0), OverrideStatus.NEUTRAL)
        with pytest.raises(InvariantError) as excinfo:
            stack.push(Level(0), OverrideStatus.NEUTRAL, 7)
        assert excinfo.value.rule == "X1-X8"
        assert excinfo.value.index == 7

    def test_empty_stack(self) -> None:
        """pop() on an empty stack returns None, last() raises."""
        stack = DirectionalStatusStack()
        assert stack.pop() is None
        with pytest.raises(InvariantError) as excinfo:
            stack.last(3)
        assert excinfo.value.index == 3

    def test_length_mismatch(self) -> None:
        """Arrays of different length are rejected."""
        original = coerce_classes(["L", "R"])
        with pytest.raises(InputLengthError):
            explicit_compute(Level(0), original, [Level(0)], list(original))
