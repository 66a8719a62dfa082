"""
Chord Mutator - Apply Voicing Changes to Chord Symbols

    update_chord("C", {"inversion": 1})       → "C (1st inv.)"
    update_chord("C (1st inv.)", {"inversion": 0}) → "C"
    update_chord("G7", {"bass": "B"})         → "G7/B"
    update_chord("G7/B", {"bass": None})      → "G7"
"""

from typing import Mapping, Union

from pydantic import ValidationError

from chordkit.core.logging import get_logger
from chordkit.data.schema import ChordUpdate
from chordkit.theory.parser import format_chord, parse_chord, strip_inversion
from chordkit.theory.pitch import parse_note, pitch_class_name, prefers_flats


logger = get_logger(__name__)


def update_chord(symbol: str, update: Union[ChordUpdate, Mapping]) -> str:
    """
    Return `symbol` with the given inversion and/or bass applied.

    Fields missing from `update` are kept. An inversion of 0 removes the
    annotation and a bass of None removes slash notation. The inversion's
    magnitude is used, reduced modulo the chord size. An unparseable symbol
    or a malformed update (e.g. bass "X") returns `symbol` unchanged.
    """
    parsed = parse_chord(symbol)
    if parsed is None:
        return symbol

    if not isinstance(update, ChordUpdate):
        try:
            update = ChordUpdate.model_validate(update)
        except ValidationError as e:
            logger.debug("Ignoring invalid update %r for %r: %s", update, symbol, e)
            return symbol

    changes = {}
    if update.sets_inversion:
        changes["inversion"] = abs(update.inversion) % parsed.size

    if update.sets_bass:
        if update.bass is None:
            changes["explicit_bass"] = None
            changes["bass_name"] = None
        elif isinstance(update.bass, str):
            changes["explicit_bass"] = parse_note(update.bass)
            changes["bass_name"] = update.bass
        else:
            changes["explicit_bass"] = update.bass
            changes["bass_name"] = pitch_class_name(update.bass, not prefers_flats(parsed.root_name))

    return format_chord(parsed.model_copy(update=changes))


def max_inversion(symbol: str) -> int:
    """
    Highest legal inversion: the chord size minus one, 0 if unparseable.

    This goes by note count, not by has_seventh(), so four-note chords
    without a 7th (C6, Cdim7) still allow a 3rd inversion.
    """
    parsed = parse_chord(symbol)
    return parsed.size - 1 if parsed else 0


def cap_inversion(symbol: str, level: int) -> str:
    """Apply |level| as an inversion, clamped to max_inversion(symbol)."""
    return update_chord(symbol, ChordUpdate(inversion=min(abs(level), max_inversion(symbol))))


def base_chord_name(symbol: str) -> str:
    """
    Root and quality only: "Dm (2nd inv.)" → "Dm", "G7/B" → "G7".

    Unparseable symbols just lose any inversion annotation.
    """
    parsed = parse_chord(symbol)
    if parsed is None:
        return strip_inversion(symbol) if isinstance(symbol, str) else symbol
    return parsed.root_name + parsed.quality

