"""Split text into bidi segments.

Each code point becomes one segment carrying its Unicode Bidi_Class. Callers
that segment by grapheme cluster or shaping run can build the class list
themselves and only use the engine in ``segment_bidi.core``.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field

from segment_bidi.core.classes import BidiClass
from segment_bidi.core.level import Level
from segment_bidi.core.neutral import BracketLookup
from segment_bidi.exceptions import ConfigError
from segment_bidi.text.brackets import bracket_lookup_for, is_bracket

DIRECTIONS = ("ltr", "rtl")


@dataclass
class TextSegments:
    """Per-segment classes of a text, plus the positions of paired brackets."""

    text: str
    classes: list[BidiClass] = field(default_factory=list)
    brackets: dict[int, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.classes)

    @property
    def bracket_lookup(self) -> BracketLookup:
        return bracket_lookup_for(self.brackets)

    def reorder(self, order: list[int]) -> str:
        """Concatenate segments in the given order."""
        return "".join(self.text[i] for i in order)


def bidi_class_of(char: str) -> BidiClass:
    """Unicode Bidi_Class of a character; unassigned code points default to L."""
    value = unicodedata.bidirectional(char)
    if not value:
        return BidiClass.L
    return BidiClass(value)


def classify_text(text: str) -> TextSegments:
    """Classify every code point of ``text``."""
    segments = TextSegments(text)
    for index, char in enumerate(text):
        bidi_class = bidi_class_of(char)
        segments.classes.append(bidi_class)
        # Bracket pairs only form between ON characters.
        if bidi_class is BidiClass.ON and is_bracket(char):
            segments.brackets[index] = char
    return segments


def paragraph_level_for(direction: str) -> Level:
    """Paragraph level for an explicit direction name ("ltr" or "rtl").

    Raises:
        ConfigError: If the direction is not recognized.
    """
    normalized = direction.strip().lower()
    if normalized not in DIRECTIONS:
        raise ConfigError(
            f"direction: expected one of {', '.join(DIRECTIONS)}, got {direction!r}"
        )
    return Level.rtl() if normalized == "rtl" else Level.ltr()
