"""Bidi level resolution and visual reordering for segmented text.

This subpackage provides:
- Explicit level resolution with the directional status stack (X1-X8)
- Level runs and isolating run sequences (BD7, BD13, X10)
- Weak, bracket-pair and neutral type resolution (W1-W7, BD16, N0-N2)
- Implicit levels (I1-I2) and visual reordering of runs (L1-L2)
"""

from segment_bidi.core.classes import BidiClass
from segment_bidi.core.explicit import OverflowCounters, explicit_compute, resolve_explicit
from segment_bidi.core.implicit import assign_levels_to_removed, resolve_implicit_levels
from segment_bidi.core.level import MAX_EXPLICIT_DEPTH, MAX_IMPLICIT_DEPTH, Level
from segment_bidi.core.neutral import (
    BracketLookup,
    BracketMatch,
    BracketPair,
    identify_bracket_pairs,
    resolve_neutral,
)
from segment_bidi.core.pipeline import (
    BidiParagraph,
    compute_levels,
    process_paragraph,
    reorder_line,
    visual_runs,
)
from segment_bidi.core.reorder import reorder_runs, reset_whitespace_levels, sort_map
from segment_bidi.core.sequences import IsolatingRunSequence, LevelRun, build_sequences, level_runs
from segment_bidi.core.weak import resolve_weak

__all__ = [
    "BidiClass",
    "Level",
    "MAX_EXPLICIT_DEPTH",
    "MAX_IMPLICIT_DEPTH",
    "OverflowCounters",
    "explicit_compute",
    "resolve_explicit",
    "LevelRun",
    "IsolatingRunSequence",
    "level_runs",
    "build_sequences",
    "resolve_weak",
    "BracketLookup",
    "BracketMatch",
    "BracketPair",
    "identify_bracket_pairs",
    "resolve_neutral",
    "resolve_implicit_levels",
    "assign_levels_to_removed",
    "reset_whitespace_levels",
    "reorder_runs",
    "sort_map",
    "BidiParagraph",
    "compute_levels",
    "visual_runs",
    "reorder_line",
    "process_paragraph",
]
