"""Level runs and isolating run sequences (BD7, BD13, X10).

A level run is a half-open ``range`` of segment indices. Isolating run
sequences chain level runs across matched isolate initiator / PDI pairs.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass

from segment_bidi.core.classes import ISOLATE_INITIATORS, BidiClass, removed_by_x9
from segment_bidi.core.level import Level
from segment_bidi.exceptions import InputLengthError, InvariantError

logger = logging.getLogger(__name__)

LevelRun = range


@dataclass
class IsolatingRunSequence:
    """Level runs in text order plus the start and end of sequence types."""

    runs: list[LevelRun]
    sos: BidiClass = BidiClass.L
    eos: BidiClass = BidiClass.L

    def indices(self) -> Iterator[int]:
        """Every segment index of the sequence in text order."""
        for run in self.runs:
            yield from run

    def iter_forwards_from(self, pos: int, run_index: int) -> Iterator[int]:
        """Indices from ``pos`` (inclusive) to the end of the sequence.

        ``pos`` must lie inside ``runs[run_index]`` or equal its end.
        """
        runs = self.runs[run_index:]
        if not runs[0].start <= pos <= runs[0].stop:
            raise InvariantError(
                "BD13", pos, f"Position outside level run {run_index} of sequence"
            )
        yield from range(pos, runs[0].stop)
        for run in runs[1:]:
            yield from run

    def iter_backwards_from(self, pos: int, run_index: int) -> Iterator[int]:
        """Indices before ``pos`` (exclusive) back to the start of the sequence."""
        current = self.runs[run_index]
        if not current.start <= pos <= current.stop:
            raise InvariantError(
                "BD13", pos, f"Position outside level run {run_index} of sequence"
            )
        yield from range(pos - 1, current.start - 1, -1)
        for run in reversed(self.runs[:run_index]):
            yield from reversed(run)


def level_runs(levels: list[Level], original_classes: list[BidiClass]) -> list[LevelRun]:
    """Find the level runs of a paragraph.

    Segments removed by X9 never start a new run, they stay with the run in
    progress.

    <http://www.unicode.org/reports/tr9/#BD7>
    """
    if len(levels) != len(original_classes):
        raise InputLengthError(len(original_classes), len(levels))

    runs: list[LevelRun] = []
    if not levels:
        return runs

    current_level = levels[0]
    current_start = 0
    for i in range(1, len(levels)):
        if not removed_by_x9(original_classes[i]) and levels[i] != current_level:
            runs.append(range(current_start, i))
            current_level = levels[i]
            current_start = i
    runs.append(range(current_start, len(levels)))
    return runs


def _first_kept_class(run: LevelRun, classes: list[BidiClass]) -> BidiClass:
    for i in run:
        if not removed_by_x9(classes[i]):
            return classes[i]
    return classes[run.start]


def _last_kept_class(run: LevelRun, classes: list[BidiClass]) -> BidiClass:
    for i in reversed(run):
        if not removed_by_x9(classes[i]):
            return classes[i]
    return classes[run.stop - 1]


def build_sequences(
    paragraph_level: Level,
    original_classes: list[BidiClass],
    levels: list[Level],
) -> list[IsolatingRunSequence]:
    """Compute the isolating run sequences of a paragraph with their sos/eos.

    <http://www.unicode.org/reports/tr9/#BD13>
    <http://www.unicode.org/reports/tr9/#X10>
    """
    runs = level_runs(levels, original_classes)

    sequences: list[list[LevelRun]] = []
    # A sequence ending in an isolate initiator waits here for its matching PDI.
    stack: list[list[LevelRun]] = [[]]

    for run in runs:
        if len(run) == 0:
            raise InvariantError("BD7", run.start, "Empty level run")

        if _first_kept_class(run, original_classes) is BidiClass.PDI and len(stack) > 1:
            sequence = stack.pop()
        else:
            sequence = []

        sequence.append(run)

        if _last_kept_class(run, original_classes) in ISOLATE_INITIATORS:
            stack.append(sequence)
        else:
            sequences.append(sequence)

    # Unmatched isolate initiators leave their sequences open.
    sequences.extend(seq for seq in reversed(stack) if seq)

    result = [
        _with_boundaries(paragraph_level, original_classes, levels, seq_runs)
        for seq_runs in sequences
    ]
    logger.debug(
        "Built %d isolating run sequences from %d level runs", len(result), len(runs)
    )
    return result


def _with_boundaries(
    paragraph_level: Level,
    original_classes: list[BidiClass],
    levels: list[Level],
    runs: list[LevelRun],
) -> IsolatingRunSequence:
    sequence = IsolatingRunSequence(runs)
    start_of_seq = runs[0].start
    end_of_seq = runs[-1].stop

    seq_level = next(
        (
            levels[i]
            for i in sequence.iter_forwards_from(start_of_seq, 0)
            if not removed_by_x9(original_classes[i])
        ),
        levels[start_of_seq],
    )
    end_level = next(
        (
            levels[i]
            for i in sequence.iter_backwards_from(end_of_seq, len(runs) - 1)
            if not removed_by_x9(original_classes[i])
        ),
        levels[end_of_seq - 1],
    )

    # Level of the last non-removed segment before the sequence.
    pred_level = next(
        (
            levels[i]
            for i in range(start_of_seq - 1, -1, -1)
            if not removed_by_x9(original_classes[i])
        ),
        paragraph_level,
    )

    last_kept = next(
        (
            original_classes[i]
            for i in range(end_of_seq - 1, -1, -1)
            if not removed_by_x9(original_classes[i])
        ),
        BidiClass.BN,
    )
    if last_kept in ISOLATE_INITIATORS:
        # An unmatched isolate initiator compares against the paragraph level.
        succ_level = paragraph_level
    else:
        succ_level = next(
            (
                levels[i]
                for i in range(end_of_seq, len(levels))
                if not removed_by_x9(original_classes[i])
            ),
            paragraph_level,
        )

    sequence.sos = max(seq_level, pred_level).bidi_class()
    sequence.eos = max(end_level, succ_level).bidi_class()
    return sequence
