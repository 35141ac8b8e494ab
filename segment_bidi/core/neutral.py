"""3.3.5 Resolving Neutral and Isolate Formatting Types (BD16, N0-N2).

<http://www.unicode.org/reports/tr9/#Resolving_Neutral_Types>
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import NamedTuple

from segment_bidi.core.classes import R_LIKE, BidiClass, is_ni
from segment_bidi.core.level import Level
from segment_bidi.core.sequences import IsolatingRunSequence
from segment_bidi.exceptions import InvariantError

logger = logging.getLogger(__name__)

# Maximum depth of the BD16 bracket stack.
MAX_BRACKET_STACK = 63

BN = BidiClass.BN


class BracketMatch(NamedTuple):
    """Bidi_Paired_Bracket data of one bracket character."""

    opening: str
    """The opening bracket of the pair, after canonical normalization."""
    is_open: bool


# Lookup capability: segment index -> bracket data, None for non-brackets.
BracketLookup = Callable[[int], BracketMatch | None]


@dataclass(frozen=True)
class BracketPair:
    """A matched opening/closing bracket inside one isolating run sequence."""

    start: int
    """Segment index of the opening bracket."""
    end: int
    """Segment index of the closing bracket."""
    start_run: int
    """Index in the sequence's runs of the run holding the opening bracket."""
    end_run: int
    """Index in the sequence's runs of the run holding the closing bracket."""


def identify_bracket_pairs(
    sequence: IsolatingRunSequence,
    processing_classes: list[BidiClass],
    bracket_lookup: BracketLookup | None,
) -> list[BracketPair]:
    """Find the bracket pairs of a sequence, sorted by opening position.

    Only segments whose current class is ON can be brackets, so brackets
    under a directional override are ignored (BD14, BD15).

    <https://www.unicode.org/reports/tr9/#BD16>
    """
    pairs: list[BracketPair] = []
    if bracket_lookup is None:
        return pairs

    stack: list[tuple[str, int, int]] = []

    for run_index, level_run in enumerate(sequence.runs):
        for i in level_run:
            if processing_classes[i] is not BidiClass.ON:
                continue
            matched = bracket_lookup(i)
            if matched is None:
                continue

            if matched.is_open:
                if len(stack) >= MAX_BRACKET_STACK:
                    # Stop processing BD16 for the rest of the sequence.
                    logger.debug("Bracket stack full at segment %d", i)
                    pairs.sort(key=lambda pair: pair.start)
                    return pairs
                stack.append((matched.opening, i, run_index))
            else:
                for stack_index in range(len(stack) - 1, -1, -1):
                    opening, start, start_run = stack[stack_index]
                    if opening == matched.opening:
                        pairs.append(BracketPair(start, i, start_run, run_index))
                        # Pop through the matched element, dropping unmatched openers.
                        del stack[stack_index:]
                        break

    pairs.sort(key=lambda pair: pair.start)
    return pairs


def resolve_neutral(
    sequence: IsolatingRunSequence,
    levels: list[Level],
    original_classes: list[BidiClass],
    processing_classes: list[BidiClass],
    bracket_lookup: BracketLookup | None = None,
) -> None:
    """Resolve bracket pairs (N0) then neutral runs (N1, N2) of one sequence in place."""
    # Embedding direction
    e = levels[sequence.runs[0].start].bidi_class()
    not_e = BidiClass.R if e is BidiClass.L else BidiClass.L

    pairs = identify_bracket_pairs(sequence, processing_classes, bracket_lookup)
    if pairs:
        logger.debug("Resolving %d bracket pairs", len(pairs))

    for pair in pairs:
        if not (0 <= pair.start < pair.end < len(processing_classes)):
            raise InvariantError("N0", pair.start, "Bracket pair out of bounds")

        class_to_set = _bracket_class(sequence, processing_classes, pair, e, not_e)
        if class_to_set is None:
            # No strong type inside the pair, leave it to N1/N2.
            continue

        processing_classes[pair.start] = class_to_set
        processing_classes[pair.end] = class_to_set

        for idx in sequence.iter_backwards_from(pair.start, pair.start_run):
            if processing_classes[idx] is not BN:
                break
            processing_classes[idx] = class_to_set

        # NSMs (before W1) right after a bracket follow the bracket's new type.
        for position, run_index in ((pair.start, pair.start_run), (pair.end, pair.end_run)):
            for idx in sequence.iter_forwards_from(position + 1, run_index):
                if (
                    original_classes[idx] is BidiClass.NSM
                    or processing_classes[idx] is BN
                ):
                    processing_classes[idx] = class_to_set
                else:
                    break

    _resolve_neutral_runs(sequence, processing_classes, e)


def _bracket_class(
    sequence: IsolatingRunSequence,
    processing_classes: list[BidiClass],
    pair: BracketPair,
    e: BidiClass,
    not_e: BidiClass,
) -> BidiClass | None:
    found_e = False
    found_not_e = False

    for idx in sequence.iter_forwards_from(pair.start + 1, pair.start_run):
        if idx >= pair.end:
            break
        bidi_class = processing_classes[idx]
        if bidi_class is e:
            found_e = True
        elif bidi_class is not_e:
            found_not_e = True
        elif bidi_class in (BidiClass.EN, BidiClass.AN):
            # EN and AN count as R inside the pair.
            if e is BidiClass.L:
                found_not_e = True
            else:
                found_e = True
        if found_e:
            break

    if found_e:
        return e
    if not found_not_e:
        return None

    # The preceding strong type (or sos) decides between context and embedding
    # direction; either way the brackets take that type.
    previous_strong = next(
        (
            processing_classes[idx]
            for idx in sequence.iter_backwards_from(pair.start, pair.start_run)
            if processing_classes[idx]
            in (BidiClass.L, BidiClass.R, BidiClass.EN, BidiClass.AN)
        ),
        sequence.sos,
    )
    if previous_strong in (BidiClass.EN, BidiClass.AN):
        previous_strong = BidiClass.R
    return previous_strong


def _resolve_neutral_runs(
    sequence: IsolatingRunSequence, processing_classes: list[BidiClass], e: BidiClass
) -> None:
    # <http://www.unicode.org/reports/tr9/#N1>
    # <http://www.unicode.org/reports/tr9/#N2>
    indices = sequence.indices()
    prev_class = sequence.sos
    for i in indices:
        if is_ni(processing_classes[i]) or processing_classes[i] is BN:
            ni_run = [i]
            next_class = sequence.eos
            for j in indices:
                i = j
                if is_ni(processing_classes[j]) or processing_classes[j] is BN:
                    ni_run.append(j)
                else:
                    next_class = processing_classes[j]
                    break

            if prev_class is BidiClass.L and next_class is BidiClass.L:
                new_class = BidiClass.L
            elif prev_class in R_LIKE and next_class in R_LIKE:
                new_class = BidiClass.R
            else:
                new_class = e
            for j in ni_run:
                processing_classes[j] = new_class
        prev_class = processing_classes[i]
