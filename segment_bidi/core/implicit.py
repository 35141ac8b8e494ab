"""3.3.6 Resolving Implicit Levels (rules I1, I2).

<http://www.unicode.org/reports/tr9/#Resolving_Implicit_Levels>
"""

from __future__ import annotations

from segment_bidi.core.classes import BidiClass, removed_by_x9
from segment_bidi.core.level import Level
from segment_bidi.exceptions import InputLengthError, InvariantError, LevelError


def resolve_implicit_levels(
    processing_classes: list[BidiClass], levels: list[Level]
) -> Level:
    """Raise each level according to its resolved class, in place.

    Returns:
        The maximum level in the paragraph.

    Raises:
        InvariantError: If a level would go past the maximum implicit depth.
    """
    if len(processing_classes) != len(levels):
        raise InputLengthError(len(processing_classes), len(levels))

    max_level = Level.ltr()
    for i, bidi_class in enumerate(processing_classes):
        level = levels[i]
        if level.is_ltr:
            if bidi_class is BidiClass.R:
                amount = 1
            elif bidi_class in (BidiClass.AN, BidiClass.EN):
                amount = 2
            else:
                amount = 0
        elif bidi_class in (BidiClass.L, BidiClass.EN, BidiClass.AN):
            amount = 1
        else:
            amount = 0

        if amount:
            try:
                levels[i] = level.raised(amount)
            except LevelError as e:
                raise InvariantError("I1-I2", i, str(e)) from e
        max_level = max(max_level, levels[i])

    return max_level


def assign_levels_to_removed(
    paragraph_level: Level, original_classes: list[BidiClass], levels: list[Level]
) -> None:
    """Give segments removed by X9 the level of the segment before them.

    The algorithm leaves these levels unspecified; copying the previous one
    keeps level runs unbroken.
    """
    if len(original_classes) != len(levels):
        raise InputLengthError(len(original_classes), len(levels))

    for i, bidi_class in enumerate(original_classes):
        if removed_by_x9(bidi_class):
            levels[i] = levels[i - 1] if i > 0 else paragraph_level
