"""3.3.4 Resolving Weak Types (rules W1-W7).

<http://www.unicode.org/reports/tr9/#Resolving_Weak_Types>
"""

from __future__ import annotations

from segment_bidi.core.classes import ISOLATE_CONTROLS, BidiClass, removed_by_x9
from segment_bidi.core.sequences import IsolatingRunSequence

BN = BidiClass.BN


def resolve_weak(
    sequence: IsolatingRunSequence, processing_classes: list[BidiClass]
) -> None:
    """Resolve NSM, EN, AN, ET, ES and CS classes of one sequence in place.

    The rules are applied in a single pass instead of one pass per rule, so
    the classes seen before W1, W4 and W5 rewrote them are tracked separately.
    BN segments are skipped and later absorbed by the class their neighbours
    resolve to.
    """
    # Previous class for W1, ignoring changes made by any other rule.
    prev_class_before_w1 = sequence.sos
    # Previous class for W4, ignoring changes made by W4-W6.
    prev_class_before_w4 = sequence.sos
    # Previous class for W5.
    prev_class_before_w5 = sequence.sos
    last_strong_is_al = False
    et_run_indices: list[int] = []
    bn_run_indices: list[int] = []

    for run_index, level_run in enumerate(sequence.runs):
        for i in level_run:
            if processing_classes[i] is BN:
                # A BN run before an ET joins the ET run for W5.
                bn_run_indices.append(i)
                continue

            # Class before W1-W3, tracks the last strong class for W2.
            w2_class = processing_classes[i]

            # W1
            if processing_classes[i] is BidiClass.NSM:
                if prev_class_before_w1 in ISOLATE_CONTROLS:
                    processing_classes[i] = BidiClass.ON
                else:
                    processing_classes[i] = prev_class_before_w1
                w2_class = processing_classes[i]

            prev_class_before_w1 = processing_classes[i]

            # W2 and W3
            if processing_classes[i] is BidiClass.EN:
                if last_strong_is_al:
                    processing_classes[i] = BidiClass.AN
            elif processing_classes[i] is BidiClass.AL:
                processing_classes[i] = BidiClass.R

            if w2_class in (BidiClass.L, BidiClass.R):
                last_strong_is_al = False
            elif w2_class is BidiClass.AL:
                last_strong_is_al = True

            class_before_w456 = processing_classes[i]

            current = processing_classes[i]
            if current is BidiClass.EN:
                # W5: a run of ETs before an EN becomes EN.
                for j in et_run_indices:
                    processing_classes[j] = BidiClass.EN
                et_run_indices.clear()

            elif current in (BidiClass.ES, BidiClass.CS):
                next_class = next(
                    (
                        processing_classes[j]
                        for j in sequence.iter_forwards_from(i + 1, run_index)
                        if not removed_by_x9(processing_classes[j])
                    ),
                    sequence.eos,
                )
                if next_class is BidiClass.EN and last_strong_is_al:
                    # W2 has not reached the next segment yet.
                    next_class = BidiClass.AN

                # W4
                if prev_class_before_w4 is BidiClass.EN and next_class is BidiClass.EN:
                    processing_classes[i] = BidiClass.EN
                elif (
                    current is BidiClass.CS
                    and prev_class_before_w4 is BidiClass.AN
                    and next_class is BidiClass.AN
                ):
                    processing_classes[i] = BidiClass.AN
                else:
                    # W6, separators only.
                    processing_classes[i] = BidiClass.ON
                    _absorb_bn(sequence, processing_classes, i, run_index, BidiClass.ON)

            elif current is BidiClass.ET:
                # W5: an ET after an EN becomes EN.
                if prev_class_before_w5 is BidiClass.EN:
                    processing_classes[i] = BidiClass.EN
                else:
                    et_run_indices.extend(bn_run_indices)
                    et_run_indices.append(i)

            bn_run_indices.clear()

            prev_class_before_w5 = processing_classes[i]

            # W6, terminators only: no adjacent EN was found.
            if prev_class_before_w5 is not BidiClass.ET:
                for j in et_run_indices:
                    processing_classes[j] = BidiClass.ON
                et_run_indices.clear()

            prev_class_before_w4 = class_before_w456

    # The sequence may end in ETs followed only by BNs.
    for j in et_run_indices:
        processing_classes[j] = BidiClass.ON

    # W7
    last_strong_is_l = sequence.sos is BidiClass.L
    for i in sequence.indices():
        current = processing_classes[i]
        if current is BidiClass.EN and last_strong_is_l:
            processing_classes[i] = BidiClass.L
        elif current is BidiClass.L:
            last_strong_is_l = True
        elif current in (BidiClass.R, BidiClass.AL):
            last_strong_is_l = False


def _absorb_bn(
    sequence: IsolatingRunSequence,
    processing_classes: list[BidiClass],
    index: int,
    run_index: int,
    bidi_class: BidiClass,
) -> None:
    """Set the BN runs touching ``index`` on either side to ``bidi_class``."""
    for j in sequence.iter_backwards_from(index, run_index):
        if processing_classes[j] is not BN:
            break
        processing_classes[j] = bidi_class
    for j in sequence.iter_forwards_from(index + 1, run_index):
        if processing_classes[j] is not BN:
            break
        processing_classes[j] = bidi_class
