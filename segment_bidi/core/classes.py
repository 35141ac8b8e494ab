"""Bidi character classes and the class sets the resolution rules test against.

<http://www.unicode.org/reports/tr9/#Bidirectional_Character_Types>
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from segment_bidi.exceptions import UnknownBidiClassError


class BidiClass(str, Enum):
    """Unicode Bidi_Class property values."""

    # Strong
    L = "L"
    R = "R"
    AL = "AL"
    # Weak
    EN = "EN"
    ES = "ES"
    ET = "ET"
    AN = "AN"
    CS = "CS"
    NSM = "NSM"
    BN = "BN"
    # Neutral
    B = "B"
    S = "S"
    WS = "WS"
    ON = "ON"
    # Explicit formatting
    LRE = "LRE"
    LRO = "LRO"
    RLE = "RLE"
    RLO = "RLO"
    PDF = "PDF"
    LRI = "LRI"
    RLI = "RLI"
    FSI = "FSI"
    PDI = "PDI"

    def __str__(self) -> str:
        return self.value


STRONG = frozenset({BidiClass.L, BidiClass.R, BidiClass.AL})

EMBEDDING_INITIATORS = frozenset(
    {BidiClass.LRE, BidiClass.RLE, BidiClass.LRO, BidiClass.RLO}
)

ISOLATE_INITIATORS = frozenset({BidiClass.LRI, BidiClass.RLI, BidiClass.FSI})

ISOLATE_CONTROLS = ISOLATE_INITIATORS | {BidiClass.PDI}

# Classes ignored by the rules after X9.
REMOVED_BY_X9 = EMBEDDING_INITIATORS | {BidiClass.PDF, BidiClass.BN}

# Neutral or isolate formatting character.
NEUTRAL_OR_ISOLATE = frozenset(
    {BidiClass.B, BidiClass.S, BidiClass.WS, BidiClass.ON} | ISOLATE_CONTROLS
)

# Classes that count as R when resolving neutrals (N1).
R_LIKE = frozenset({BidiClass.R, BidiClass.AN, BidiClass.EN})


def removed_by_x9(bidi_class: BidiClass) -> bool:
    """Should this segment be ignored in steps after X9?

    <http://www.unicode.org/reports/tr9/#X9>
    """
    return bidi_class in REMOVED_BY_X9


def is_ni(bidi_class: BidiClass) -> bool:
    """Neutral or Isolate formatting character (B, S, WS, ON, FSI, LRI, RLI, PDI).

    <http://www.unicode.org/reports/tr9/#NI>
    """
    return bidi_class in NEUTRAL_OR_ISOLATE


def is_rtl_initiator(bidi_class: BidiClass) -> bool:
    return bidi_class in (BidiClass.RLE, BidiClass.RLO, BidiClass.RLI)


def coerce_classes(values: Iterable[BidiClass | str]) -> list[BidiClass]:
    """Convert class names to BidiClass members.

    Raises:
        UnknownBidiClassError: If a value is not a bidi class name.
    """
    classes: list[BidiClass] = []
    for index, value in enumerate(values):
        if isinstance(value, BidiClass):
            classes.append(value)
            continue
        try:
            classes.append(BidiClass(str(value).upper()))
        except ValueError as e:
            raise UnknownBidiClassError(value, index) from e
    return classes
