"""High level API: resolve and reorder text or class sequences."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from segment_bidi.config import Config
from segment_bidi.core.classes import BidiClass, coerce_classes
from segment_bidi.core.level import Level
from segment_bidi.core.pipeline import BidiParagraph, process_paragraph
from segment_bidi.core.sequences import LevelRun
from segment_bidi.text.brackets import bracket_lookup_for
from segment_bidi.text.segments import TextSegments, classify_text, paragraph_level_for

logger = logging.getLogger(__name__)


@dataclass
class ResolveResult:
    """Levels, visual runs and display order of one resolved paragraph."""

    paragraph: BidiParagraph
    order: list[int] = field(default_factory=list)
    segments: TextSegments | None = None

    @property
    def text(self) -> str | None:
        return self.segments.text if self.segments is not None else None

    @property
    def levels(self) -> list[Level]:
        return self.paragraph.levels

    @property
    def runs(self) -> list[LevelRun]:
        return self.paragraph.runs

    @property
    def classes(self) -> list[BidiClass]:
        return self.paragraph.classes

    @property
    def display(self) -> str | None:
        """Text in visual order, when resolved from text."""
        if self.segments is None:
            return None
        return self.segments.reorder(self.order)

    def to_dict(self) -> dict:
        data = {
            "paragraph_level": self.paragraph.paragraph_level.number,
            "classes": [str(c) for c in self.classes],
            "levels": [level.number for level in self.levels],
            "runs": [[run.start, run.stop] for run in self.runs],
            "order": self.order,
        }
        if self.text is not None:
            data["display"] = self.display
        return data


class BidiResolver:
    """Resolve bidi levels with settings taken from a Config.

    Args:
        config: Settings; loaded with Config.load() when omitted.
        log_level: Overrides the configured log level of the package logger.
    """

    def __init__(self, config: Config | None = None, log_level: str | None = None) -> None:
        self.config = config or Config.load()
        level_name = (log_level or self.config.log_level).upper()
        logging.getLogger("segment_bidi").setLevel(level_name)

    def _paragraph_level(self, direction: str | None) -> Level:
        return paragraph_level_for(direction or self.config.direction)

    def resolve_text(self, text: str, direction: str | None = None) -> ResolveResult:
        """Classify ``text`` per code point and resolve it as one line."""
        segments = classify_text(text)
        paragraph = process_paragraph(
            self._paragraph_level(direction),
            segments.classes,
            segments.bracket_lookup,
            reset_whitespace=self.config.reset_whitespace,
        )
        order = paragraph.reorder_line(reset_whitespace=self.config.reset_whitespace)
        logger.debug("Resolved %d segments of text", len(segments))
        return ResolveResult(paragraph, order, segments)

    def resolve_classes(
        self,
        classes: Sequence[BidiClass | str],
        paragraph_level: Level | int | None = None,
        brackets: Mapping[int, str] | None = None,
    ) -> ResolveResult:
        """Resolve a sequence of bidi classes as one line.

        Args:
            classes: Bidi class of each segment.
            paragraph_level: Paragraph level; the configured direction when omitted.
            brackets: Segment index -> bracket character for paired brackets.
        """
        if paragraph_level is None:
            paragraph_level = self._paragraph_level(None)
        lookup = bracket_lookup_for(brackets) if brackets else None
        paragraph = process_paragraph(
            paragraph_level,
            coerce_classes(classes),
            lookup,
            reset_whitespace=self.config.reset_whitespace,
        )
        order = paragraph.reorder_line(reset_whitespace=self.config.reset_whitespace)
        return ResolveResult(paragraph, order)
