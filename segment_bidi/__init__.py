"""segment-bidi: Unicode Bidirectional Algorithm over pre-segmented text.

This library resolves embedding levels and visual order for text that has
already been split into segments (code points, clusters or shaping runs):
- Explicit embeddings, overrides and isolates with overflow handling
- Weak, bracket-pair and neutral type resolution
- Implicit levels and line reordering into visual runs

Example:
    >>> from segment_bidi import process_paragraph
    >>> paragraph = process_paragraph(0, ["L", "R", "R", "L"])
    >>> [level.number for level in paragraph.levels]
    [0, 1, 1, 0]
"""

from segment_bidi.api import BidiResolver, ResolveResult
from segment_bidi.config import Config
from segment_bidi.core import (
    BidiClass,
    BidiParagraph,
    BracketMatch,
    Level,
    compute_levels,
    process_paragraph,
    reorder_line,
    visual_runs,
)
from segment_bidi.exceptions import (
    ConfigError,
    InputLengthError,
    InvariantError,
    LevelError,
    SegmentBidiError,
    UnknownBidiClassError,
)
from segment_bidi.text import classify_text, paragraph_level_for

__version__ = "0.1.0"

__all__ = [
    # Main API
    "BidiResolver",
    "ResolveResult",
    "Config",
    # Engine
    "BidiClass",
    "Level",
    "BracketMatch",
    "BidiParagraph",
    "compute_levels",
    "visual_runs",
    "reorder_line",
    "process_paragraph",
    # Text
    "classify_text",
    "paragraph_level_for",
    # Exceptions
    "SegmentBidiError",
    "LevelError",
    "InvariantError",
    "InputLengthError",
    "UnknownBidiClassError",
    "ConfigError",
    # Metadata
    "__version__",
]
