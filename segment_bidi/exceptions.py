"""Exception hierarchy for segment-bidi.

Every error raised by the package derives from SegmentBidiError so callers can
catch a single type. Rule-defined fallbacks of the algorithm (overflowing
embeddings, unmatched brackets or isolates) are not errors and never raise.
"""

from __future__ import annotations

from typing import Any


class SegmentBidiError(Exception):
    """Base class for all segment-bidi errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        extra = ", ".join(f"{key}={value!r}" for key, value in self.details.items())
        return f"{self.message} ({extra})"


class LevelError(SegmentBidiError):
    """Embedding level outside 0..=126 or level arithmetic past the maximum."""


class InvariantError(SegmentBidiError):
    """A caller contract breach or internal bug detected while resolving a paragraph.

    Args:
        rule: Name of the UAX#9 rule group being applied (e.g. "X1-X8").
        index: Segment index where the violation was detected, if any.
        message: Human readable description.
    """

    def __init__(self, rule: str, index: int | None, message: str) -> None:
        self.rule = rule
        self.index = index
        super().__init__(message, details={"rule": rule, "index": index})


class InputLengthError(InvariantError):
    """Per-segment input arrays do not have the same length."""

    def __init__(self, expected: int, actual: int, what: str = "levels") -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            "input",
            None,
            f"Length of {what} ({actual}) does not match number of classes ({expected})",
        )


class UnknownBidiClassError(SegmentBidiError):
    """An input class value is not the name of a bidi class."""

    def __init__(self, value: Any, index: int | None = None) -> None:
        self.value = value
        self.index = index
        super().__init__(
            f"Unknown bidi class: {value!r}", details={"index": index}
        )


class ConfigError(SegmentBidiError):
    """Invalid configuration file or value."""
