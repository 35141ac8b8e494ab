"""3.4 Reordering Resolved Levels (rules L1, L2).

<http://www.unicode.org/reports/tr9/#Reordering_Resolved_Levels>
"""

from __future__ import annotations

from segment_bidi.core.classes import NEUTRAL_OR_ISOLATE, BidiClass, removed_by_x9
from segment_bidi.core.level import Level
from segment_bidi.core.sequences import LevelRun
from segment_bidi.exceptions import InputLengthError, InvariantError, LevelError

_SEPARATORS = frozenset({BidiClass.B, BidiClass.S})
# Whitespace and isolate formatting segments that trail into a reset.
_TRAILING = NEUTRAL_OR_ISOLATE - {BidiClass.B, BidiClass.S, BidiClass.ON}


def reset_whitespace_levels(
    line_classes: list[BidiClass], levels: list[Level], paragraph_level: Level
) -> None:
    """Apply rule L1 to one line in place.

    Segment and paragraph separators, and any whitespace, isolate formatting
    or X9-removed segments right before them or at the end of the line, go
    back to the paragraph level. X9-removed segments first take the level of
    the segment before them.

    <http://www.unicode.org/reports/tr9/#L1>
    """
    if len(line_classes) != len(levels):
        raise InputLengthError(len(line_classes), len(levels))

    reset_from: int | None = 0
    reset_to: int | None = None
    prev_level = paragraph_level
    for i, bidi_class in enumerate(line_classes):
        if bidi_class in _SEPARATORS:
            reset_to = i + 1
            if reset_from is None:
                reset_from = i
        elif bidi_class in _TRAILING:
            if reset_from is None:
                reset_from = i
        elif removed_by_x9(bidi_class):
            if reset_from is None:
                reset_from = i
            levels[i] = prev_level
        else:
            reset_from = None

        if reset_from is not None and reset_to is not None:
            for j in range(reset_from, reset_to):
                levels[j] = paragraph_level
            reset_from = None
            reset_to = None
        prev_level = levels[i]

    if reset_from is not None:
        for j in range(reset_from, len(levels)):
            levels[j] = paragraph_level


def same_level_runs(levels: list[Level]) -> list[LevelRun]:
    """Split a line into maximal runs of equal level."""
    runs: list[LevelRun] = []
    if not levels:
        return runs
    start = 0
    for i in range(1, len(levels)):
        if levels[i] != levels[start]:
            runs.append(range(start, i))
            start = i
    runs.append(range(start, len(levels)))
    return runs


def reorder_runs(levels: list[Level]) -> list[LevelRun]:
    """Return the level runs of a line in left-to-right visual order.

    From the highest level down to the lowest odd level, every maximal
    sequence of runs at that level or above is reversed. Segments inside a
    run keep their logical order; reversing odd runs is left to the caller.

    <http://www.unicode.org/reports/tr9/#L2>
    """
    runs = same_level_runs(levels)
    if not runs:
        return runs

    run_levels = [levels[run.start] for run in runs]
    max_level = max(run_levels)
    try:
        # Stop at the lowest odd level.
        min_level = min(run_levels).new_lowest_ge_rtl()
    except LevelError as e:
        raise InvariantError("L2", None, str(e)) from e

    run_count = len(runs)
    while max_level >= min_level:
        seq_start = 0
        while seq_start < run_count:
            if levels[runs[seq_start].start] < max_level:
                seq_start += 1
                continue
            seq_end = seq_start + 1
            while seq_end < run_count and levels[runs[seq_end].start] >= max_level:
                seq_end += 1
            runs[seq_start:seq_end] = runs[seq_start:seq_end][::-1]
            seq_start = seq_end
        max_level = max_level.lowered(1)

    return runs


def sort_map(runs: list[LevelRun], levels: list[Level], offset: int = 0) -> list[int]:
    """Flatten visual runs into segment indices, reversing right-to-left runs."""
    order: list[int] = []
    for run in runs:
        indices = reversed(run) if levels[run.start].is_rtl else run
        order.extend(offset + i for i in indices)
    return order
