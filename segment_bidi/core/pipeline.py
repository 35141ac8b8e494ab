"""Entry points running the resolution stages over one paragraph or line.

Each call owns its arrays: inputs are copied, stages mutate the copies in
strict order, and either a complete result is returned or an exception
propagates with nothing partial left behind.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from segment_bidi.core.classes import BidiClass, coerce_classes
from segment_bidi.core.explicit import explicit_compute
from segment_bidi.core.implicit import assign_levels_to_removed, resolve_implicit_levels
from segment_bidi.core.level import Level
from segment_bidi.core.neutral import BracketLookup, resolve_neutral
from segment_bidi.core.reorder import reorder_runs, reset_whitespace_levels, sort_map
from segment_bidi.core.sequences import LevelRun, build_sequences
from segment_bidi.core.weak import resolve_weak
from segment_bidi.exceptions import InputLengthError, InvariantError

logger = logging.getLogger(__name__)


def compute_levels(
    paragraph_level: Level | int,
    original_classes: Sequence[BidiClass | str],
    bracket_lookup: BracketLookup | None = None,
) -> list[Level]:
    """Resolve the embedding level of every segment of a paragraph.

    Args:
        paragraph_level: Paragraph embedding level (0 for LTR, 1 for RTL).
        original_classes: Bidi class of each segment.
        bracket_lookup: Returns paired-bracket data for a segment index, or
            None when the segment is not a bracket. Without it no bracket
            pairs are resolved (N0 is skipped).

    Returns:
        One level per segment, X9-removed segments included.

    Raises:
        InvariantError: On contract breaches or internal inconsistencies.
        UnknownBidiClassError: If a class name is not recognized.
    """
    para_level = Level.coerce(paragraph_level)
    classes = coerce_classes(original_classes)

    levels = [para_level] * len(classes)
    if not classes:
        return levels

    processing_classes = list(classes)
    explicit_compute(para_level, classes, levels, processing_classes)

    sequences = build_sequences(para_level, classes, levels)
    for sequence in sequences:
        resolve_weak(sequence, processing_classes)
        resolve_neutral(sequence, levels, classes, processing_classes, bracket_lookup)

    max_level = resolve_implicit_levels(processing_classes, levels)
    assign_levels_to_removed(para_level, classes, levels)

    logger.debug(
        "Resolved %d segments in %d sequences, max level %d",
        len(classes),
        len(sequences),
        max_level.number,
    )
    return levels


def visual_runs(
    paragraph_level: Level | int,
    line_classes: Sequence[BidiClass | str],
    levels: Sequence[Level | int],
    reset_whitespace: bool = False,
) -> tuple[list[Level], list[LevelRun]]:
    """Order the level runs of one line for display.

    Args:
        paragraph_level: Paragraph embedding level.
        line_classes: Original classes of the line's segments.
        levels: Resolved levels of the line's segments.
        reset_whitespace: Apply rule L1 before reordering.

    Returns:
        The line's final levels and its runs in left-to-right visual order.
    """
    para_level = Level.coerce(paragraph_level)
    classes = coerce_classes(line_classes)
    line_levels = [Level.coerce(level) for level in levels]
    if len(line_levels) != len(classes):
        raise InputLengthError(len(classes), len(line_levels))

    if reset_whitespace:
        reset_whitespace_levels(classes, line_levels, para_level)
    else:
        assign_levels_to_removed(para_level, classes, line_levels)

    return line_levels, reorder_runs(line_levels)


def reorder_line(
    paragraph_level: Level | int,
    line_classes: Sequence[BidiClass | str],
    levels: Sequence[Level | int],
    offset: int = 0,
    reset_whitespace: bool = False,
) -> list[int]:
    """Map a line's segments to their left-to-right display order.

    Returns:
        Segment indices (shifted by ``offset``) in visual order.
    """
    line_levels, runs = visual_runs(
        paragraph_level, line_classes, levels, reset_whitespace=reset_whitespace
    )
    return sort_map(runs, line_levels, offset)


@dataclass
class BidiParagraph:
    """Resolved levels of a paragraph, reorderable line by line."""

    paragraph_level: Level
    classes: list[BidiClass]
    levels: list[Level]
    runs: list[LevelRun] = field(default_factory=list)
    """Visual runs of the whole paragraph treated as one line."""

    def visual_runs(
        self, line: range | None = None, reset_whitespace: bool = False
    ) -> list[LevelRun]:
        """Visual runs of ``line`` (a range of segment indices), in paragraph indices."""
        line = self._line(line)
        _, runs = visual_runs(
            self.paragraph_level,
            self.classes[line.start : line.stop],
            self.levels[line.start : line.stop],
            reset_whitespace=reset_whitespace,
        )
        return [range(run.start + line.start, run.stop + line.start) for run in runs]

    def reorder_line(
        self, line: range | None = None, reset_whitespace: bool = False
    ) -> list[int]:
        """Paragraph segment indices of ``line`` in visual order."""
        line = self._line(line)
        return reorder_line(
            self.paragraph_level,
            self.classes[line.start : line.stop],
            self.levels[line.start : line.stop],
            offset=line.start,
            reset_whitespace=reset_whitespace,
        )

    def _line(self, line: range | None) -> range:
        if line is None:
            return range(0, len(self.levels))
        if line.step != 1 or not 0 <= line.start <= line.stop <= len(self.levels):
            raise InvariantError("L1-L2", line.start, "Line range outside the paragraph")
        return line


def process_paragraph(
    paragraph_level: Level | int,
    original_classes: Sequence[BidiClass | str],
    bracket_lookup: BracketLookup | None = None,
    reset_whitespace: bool = False,
) -> BidiParagraph:
    """Resolve levels and visual runs of a paragraph laid out as a single line."""
    para_level = Level.coerce(paragraph_level)
    classes = coerce_classes(original_classes)
    levels = compute_levels(para_level, classes, bracket_lookup)
    final_levels, runs = visual_runs(
        para_level, classes, levels, reset_whitespace=reset_whitespace
    )
    return BidiParagraph(para_level, classes, final_levels, runs)
