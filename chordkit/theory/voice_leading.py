"""
Voice Leading - Choose Inversions That Keep the Hands Still

humanize_progression() walks a progression left to right and gives every
chord after the first the inversion whose voicing sits closest to the
previous chord's voicing, the way a keyboardist favours small hand
movements over jumps:

    humanize_progression(["C", "F", "G", "C"])
        → ["C", "F", "G", "C (2nd inv.)"]

Cost of moving from voicing A to voicing B (see voicing_distance):
    |bass(B) - bass(A)|
    + for every note of B, the distance to the nearest note of A

Rules:
    - The first chord is played in root position and becomes the anchor.
    - Ties go to the lowest inversion.
    - Slash chords keep their explicit bass and are emitted unchanged.
    - Unparseable symbols pass through and do not move the anchor.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from chordkit.core.logging import get_logger
from chordkit.data.schema import ChordUpdate
from chordkit.theory.mutator import update_chord
from chordkit.theory.parser import parse_chord
from chordkit.theory.realizer import voice_chord


logger = get_logger(__name__)

# Every candidate and anchor is voiced around the same octave
NOMINAL_OCTAVE_OFFSET = 0


def voicing_distance(candidate: Sequence[int], anchor: Sequence[int]) -> int:
    """
    Movement cost between two voicings given as MIDI numbers.

    Both voicings must be non-empty and ascending.
    """
    c = np.asarray(candidate, dtype=np.int64)
    a = np.asarray(anchor, dtype=np.int64)

    bass_move = abs(int(c[0]) - int(a[0]))
    nearest = np.abs(c[:, None] - a[None, :]).min(axis=1)
    return bass_move + int(nearest.sum())


def rank_inversions(symbol: str, anchor: Sequence[int]) -> List[Tuple[int, int, List[int]]]:
    """
    Score every inversion of a chord against an anchor voicing.

    Returns (inversion, cost, voicing) tuples in inversion order; empty for
    an unparseable symbol.
    """
    parsed = parse_chord(symbol)
    if parsed is None:
        return []

    ranked = []
    for inversion in range(parsed.size):
        candidate = parsed.model_copy(update={"inversion": inversion})
        voicing = voice_chord(candidate, NOMINAL_OCTAVE_OFFSET)
        ranked.append((inversion, voicing_distance(voicing, anchor), voicing))
    return ranked


def humanize_progression(symbols: List[str]) -> List[str]:
    """
    Rewrite a progression so each chord carries the inversion nearest the
    chord before it. Output has the same length and order as the input.
    """
    result = []
    anchor: Optional[List[int]] = None

    for symbol in symbols:
        parsed = parse_chord(symbol)
        if parsed is None:
            result.append(symbol)
            continue

        if parsed.explicit_bass is not None:
            # Explicit bass wins over inversion, every candidate sounds the same
            result.append(symbol)
            anchor = voice_chord(parsed, NOMINAL_OCTAVE_OFFSET)
            continue

        if anchor is None:
            chosen = update_chord(symbol, ChordUpdate(inversion=0))
            anchor = voice_chord(parsed.model_copy(update={"inversion": 0}), NOMINAL_OCTAVE_OFFSET)
            result.append(chosen)
            continue

        best_inversion, best_cost, best_voicing = None, None, None
        for inversion, cost, voicing in rank_inversions(symbol, anchor):
            if best_cost is None or cost < best_cost:
                best_inversion, best_cost, best_voicing = inversion, cost, voicing

        logger.debug("%s: inversion %d chosen (cost %d)", symbol, best_inversion, best_cost)
        result.append(update_chord(symbol, ChordUpdate(inversion=best_inversion)))
        anchor = best_voicing

    return result
