"""Text-level collaborators of the bidi engine.

This subpackage provides:
- Unicode paired-bracket lookup (BidiBrackets.txt)
- Code point classification into bidi segments
- Paragraph level from an explicit direction
"""

from segment_bidi.text.brackets import bracket_lookup_for, is_bracket, matched_opening_bracket
from segment_bidi.text.segments import (
    TextSegments,
    bidi_class_of,
    classify_text,
    paragraph_level_for,
)

__all__ = [
    "matched_opening_bracket",
    "is_bracket",
    "bracket_lookup_for",
    "TextSegments",
    "bidi_class_of",
    "classify_text",
    "paragraph_level_for",
]
