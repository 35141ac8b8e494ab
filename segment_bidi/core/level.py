"""Bidi embedding levels.

<http://www.unicode.org/reports/tr9/#BD2>
"""

from __future__ import annotations

from dataclasses import dataclass

from segment_bidi.core.classes import BidiClass
from segment_bidi.exceptions import LevelError

MAX_EXPLICIT_DEPTH = 125
MAX_IMPLICIT_DEPTH = MAX_EXPLICIT_DEPTH + 1


@dataclass(frozen=True, order=True)
class Level:
    """An embedding level; even levels are left-to-right, odd levels right-to-left.

    Levels are immutable, every arithmetic operation returns a new Level and
    raises LevelError instead of clamping.
    """

    number: int

    def __post_init__(self) -> None:
        if not isinstance(self.number, int) or isinstance(self.number, bool):
            raise LevelError(f"Level must be an integer, got {self.number!r}")
        if not 0 <= self.number <= MAX_IMPLICIT_DEPTH:
            raise LevelError(
                f"Level {self.number} out of range",
                details={"max": MAX_IMPLICIT_DEPTH},
            )

    @classmethod
    def ltr(cls) -> Level:
        return cls(0)

    @classmethod
    def rtl(cls) -> Level:
        return cls(1)

    @classmethod
    def coerce(cls, value: Level | int) -> Level:
        if isinstance(value, Level):
            return value
        return cls(value)

    def __int__(self) -> int:
        return self.number

    def __repr__(self) -> str:
        return f"Level({self.number})"

    @property
    def is_ltr(self) -> bool:
        return self.number % 2 == 0

    @property
    def is_rtl(self) -> bool:
        return self.number % 2 == 1

    def bidi_class(self) -> BidiClass:
        """The strong class matching this level's direction (L or R)."""
        return BidiClass.R if self.is_rtl else BidiClass.L

    def raised(self, amount: int) -> Level:
        """Return the level raised by ``amount``.

        Raises:
            LevelError: If the result is above the maximum implicit depth.
        """
        number = self.number + amount
        if number > MAX_IMPLICIT_DEPTH:
            raise LevelError(f"Cannot raise level {self.number} by {amount}")
        return Level(number)

    def lowered(self, amount: int) -> Level:
        number = self.number - amount
        if number < 0:
            raise LevelError(f"Cannot lower level {self.number} by {amount}")
        return Level(number)

    def new_explicit_next_ltr(self) -> Level:
        """Least even level greater than this one (rules X3, X5, X5a).

        Raises:
            LevelError: If that level is above the maximum explicit depth.
        """
        return self._explicit((self.number + 2) & ~1)

    def new_explicit_next_rtl(self) -> Level:
        """Least odd level greater than this one (rules X2, X4, X5b)."""
        return self._explicit((self.number + 1) | 1)

    def new_lowest_ge_rtl(self) -> Level:
        """Lowest odd level greater than or equal to this one."""
        return Level(self.number | 1)

    def _explicit(self, number: int) -> Level:
        if number > MAX_EXPLICIT_DEPTH:
            raise LevelError(
                f"Explicit level {number} exceeds maximum depth",
                details={"max": MAX_EXPLICIT_DEPTH},
            )
        return Level(number)
