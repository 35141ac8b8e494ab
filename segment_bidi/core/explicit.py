"""3.3.2 Explicit Levels and Directions (rules X1-X8).

Follows the "Retaining Explicit Formatting Characters" variant: embedding and
isolate controls keep a real level instead of being dropped, and controls that
rule X9 would remove get the processing class BN.

<http://www.unicode.org/reports/tr9/#Explicit_Levels_and_Directions>
<https://www.unicode.org/reports/tr9/#Retaining_Explicit_Formatting_Characters>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from segment_bidi.core.classes import (
    EMBEDDING_INITIATORS,
    ISOLATE_INITIATORS,
    BidiClass,
    is_rtl_initiator,
)
from segment_bidi.core.level import MAX_EXPLICIT_DEPTH, Level
from segment_bidi.exceptions import InputLengthError, InvariantError, LevelError

logger = logging.getLogger(__name__)

RULE = "X1-X8"


class OverrideStatus(Enum):
    NEUTRAL = "neutral"
    LTR = "ltr"
    RTL = "rtl"
    ISOLATE = "isolate"


@dataclass
class Status:
    """Entry of the directional status stack."""

    level: Level
    status: OverrideStatus


@dataclass
class OverflowCounters:
    """Counters left over after the explicit pass over a paragraph."""

    overflow_isolate_count: int = 0
    overflow_embedding_count: int = 0
    valid_isolate_count: int = 0


class DirectionalStatusStack:
    """Directional status stack bounded to the maximum explicit depth plus two entries."""

    CAPACITY = MAX_EXPLICIT_DEPTH + 2

    def __init__(self) -> None:
        self.entries: list[Status] = []

    def __len__(self) -> int:
        return len(self.entries)

    def push(
        self, level: Level, status: OverrideStatus, index: int | None = None
    ) -> None:
        if len(self.entries) >= self.CAPACITY:
            raise InvariantError(
                RULE, index, "Directional status stack exceeded its maximum depth"
            )
        self.entries.append(Status(level, status))

    def pop(self) -> Status | None:
        if not self.entries:
            return None
        return self.entries.pop()

    def last(self, index: int | None = None) -> Status:
        if not self.entries:
            raise InvariantError(RULE, index, "Directional status stack is empty")
        return self.entries[-1]


def _override_class(status: OverrideStatus) -> BidiClass | None:
    if status is OverrideStatus.RTL:
        return BidiClass.R
    if status is OverrideStatus.LTR:
        return BidiClass.L
    return None


def _pushed_status(bidi_class: BidiClass) -> OverrideStatus:
    if bidi_class is BidiClass.RLO:
        return OverrideStatus.RTL
    if bidi_class is BidiClass.LRO:
        return OverrideStatus.LTR
    if bidi_class in ISOLATE_INITIATORS:
        return OverrideStatus.ISOLATE
    return OverrideStatus.NEUTRAL


def explicit_compute(
    paragraph_level: Level,
    original_classes: list[BidiClass],
    levels: list[Level],
    processing_classes: list[BidiClass],
) -> OverflowCounters:
    """Assign explicit levels, updating ``levels`` and ``processing_classes`` in place.

    Args:
        paragraph_level: Embedding level of the paragraph.
        original_classes: Bidi class of each segment, never modified.
        levels: Per-segment levels, overwritten.
        processing_classes: Per-segment classes, rewritten for overrides and X9.

    Returns:
        The overflow and isolate counters at the end of the paragraph.

    Raises:
        InputLengthError: If the arrays differ in length.
    """
    if len(levels) != len(original_classes):
        raise InputLengthError(len(original_classes), len(levels))
    if len(processing_classes) != len(original_classes):
        raise InputLengthError(
            len(original_classes), len(processing_classes), "processing classes"
        )

    # <http://www.unicode.org/reports/tr9/#X1>
    stack = DirectionalStatusStack()
    stack.push(paragraph_level, OverrideStatus.NEUTRAL)
    counters = OverflowCounters()

    for i, original in enumerate(original_classes):
        # Rules X2-X5c
        if original in EMBEDDING_INITIATORS or original in ISOLATE_INITIATORS:
            last_level = stack.last(i).level
            levels[i] = last_level

            is_isolate = original in ISOLATE_INITIATORS
            if is_isolate:
                override = _override_class(stack.last(i).status)
                if override is not None:
                    processing_classes[i] = override

            try:
                if is_rtl_initiator(original):
                    new_level: Level | None = last_level.new_explicit_next_rtl()
                else:
                    new_level = last_level.new_explicit_next_ltr()
            except LevelError:
                new_level = None

            if (
                new_level is not None
                and counters.overflow_isolate_count == 0
                and counters.overflow_embedding_count == 0
            ):
                stack.push(new_level, _pushed_status(original), i)
                if is_isolate:
                    counters.valid_isolate_count += 1
                else:
                    # Embedding controls carry the level they open.
                    levels[i] = new_level
            elif is_isolate:
                counters.overflow_isolate_count += 1
            elif counters.overflow_isolate_count == 0:
                counters.overflow_embedding_count += 1

            if not is_isolate:
                processing_classes[i] = BidiClass.BN

        # <http://www.unicode.org/reports/tr9/#X6a>
        elif original is BidiClass.PDI:
            if counters.overflow_isolate_count > 0:
                counters.overflow_isolate_count -= 1
            elif counters.valid_isolate_count > 0:
                counters.overflow_embedding_count = 0
                # Pop everything up to and including the last isolate entry.
                while True:
                    popped = stack.pop()
                    if popped is None or popped.status is OverrideStatus.ISOLATE:
                        break
                counters.valid_isolate_count -= 1
            last = stack.last(i)
            levels[i] = last.level
            override = _override_class(last.status)
            if override is not None:
                processing_classes[i] = override

        # <http://www.unicode.org/reports/tr9/#X7>
        elif original is BidiClass.PDF:
            if counters.overflow_isolate_count > 0:
                pass
            elif counters.overflow_embedding_count > 0:
                counters.overflow_embedding_count -= 1
            elif (
                stack.last(i).status is not OverrideStatus.ISOLATE and len(stack) >= 2
            ):
                stack.pop()
            levels[i] = stack.last(i).level
            processing_classes[i] = BidiClass.BN

        elif original is BidiClass.B:
            # Paragraph separators are handled by the caller.
            pass

        # <http://www.unicode.org/reports/tr9/#X6>
        else:
            last = stack.last(i)
            levels[i] = last.level
            # BN keeps its class under an override, matching the reference
            # implementations rather than the published X6 text.
            if original is not BidiClass.BN:
                override = _override_class(last.status)
                if override is not None:
                    processing_classes[i] = override

    if counters.overflow_embedding_count or counters.overflow_isolate_count:
        logger.debug(
            "Explicit overflow: %d embeddings, %d isolates",
            counters.overflow_embedding_count,
            counters.overflow_isolate_count,
        )
    return counters


def resolve_explicit(
    paragraph_level: Level, original_classes: list[BidiClass]
) -> tuple[list[Level], list[BidiClass]]:
    """Compute explicit levels and the initial processing classes for a paragraph.

    Returns:
        A ``(levels, processing_classes)`` pair, both new lists.
    """
    levels = [paragraph_level] * len(original_classes)
    processing_classes = list(original_classes)
    explicit_compute(paragraph_level, original_classes, levels, processing_classes)
    return levels, processing_classes
