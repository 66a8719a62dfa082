"""
Chord Realizer - Chord Symbols to Octave-Placed Notes

Turns a chord symbol into the concrete notes an audio layer can trigger:

    realize_chord_notes("C")                → ["C4", "E4", "G4"]
    realize_chord_notes("C (1st inv.)")     → ["E4", "G4", "C5"]
    realize_chord_notes("C/E")              → ["E3", "C4", "E4", "G4"]
    realize_chord_notes("Bb7", -1)          → ["Bb3", "D4", "F4", "Ab4"]

Voicing rules:
    - Root position starts at DEFAULT_OCTAVE plus the octave offset.
    - Inversion k raises the k lowest notes above the new bass.
    - An explicit (slash) bass sits one octave below the root-position
      chord and wins over any inversion on the same symbol.
"""

from typing import Dict, List, Optional

from chordkit.data.schema import ParsedChord
from chordkit.theory.parser import parse_chord
from chordkit.theory.pitch import (
    LETTERS,
    MIDI_C0,
    NATURAL_PITCH_CLASSES,
    midi_to_note_string,
    parse_note,
    pitch_class_name,
    prefers_flats,
    spell_midi,
    strip_octave,
)


DEFAULT_OCTAVE = 4

# Letter steps above the root for each interval (mod 12): 3 and 4 are both a
# third, 6 is a flat fifth, 8 a sharp fifth, 10 and 11 are sevenths
INTERVAL_LETTER_STEPS = {0: 0, 1: 1, 2: 1, 3: 2, 4: 2, 5: 3, 6: 4, 7: 4, 8: 4, 9: 5, 10: 6, 11: 6}


# =============================================================================
# VOICING
# =============================================================================

def root_position_midi(parsed: ParsedChord, octave_offset: int = 0) -> List[int]:
    """MIDI numbers of the chord in root position."""
    root_midi = MIDI_C0 + (DEFAULT_OCTAVE + octave_offset) * 12 + parsed.root
    return [root_midi + offset for offset in parsed.intervals]


def invert(notes: List[int], inversion: int) -> List[int]:
    """
    Apply an inversion to an ascending root-position voicing.

    The note at index `inversion` becomes the bass. Each note below it is
    raised by whole octaves until it sits above the bass; for chords that
    span less than an octave that is exactly one octave.
    """
    if not notes:
        return []

    k = inversion % len(notes)
    if k == 0:
        return list(notes)

    bass = notes[k]
    raised = []
    for note in notes[:k]:
        while note <= bass:
            note += 12
        raised.append(note)
    return sorted(notes[k:] + raised)


def voice_chord(parsed: ParsedChord, octave_offset: int = 0) -> List[int]:
    """
    Realize a parsed chord as ascending MIDI numbers.

    Explicit bass takes precedence over inversion: a slash chord is always
    voiced as its bass note under a root-position chord.
    """
    notes = root_position_midi(parsed, octave_offset)

    if parsed.explicit_bass is not None:
        root_midi = notes[0]
        # Bass pitch class in the octave just below the chord root
        bass_midi = root_midi - 12 + (parsed.explicit_bass - parsed.root) % 12
        return [bass_midi] + notes

    return invert(notes, parsed.inversion)


# =============================================================================
# SPELLING
# =============================================================================

def spell_tone(root_name: str, offset: int) -> str:
    """
    Name the chord tone `offset` semitones above `root_name`, using the
    letter its interval calls for: spell_tone("C", 10) → "Bb",
    spell_tone("E", 8) → "B#".

    Falls back to the sharp/flat table when the letter would need a double
    accidental (the 7th of Cdim7 comes out as "A", not "Bbb").
    """
    target_pc = (parse_note(root_name) + offset) % 12

    letter_index = (LETTERS.index(root_name[0]) + INTERVAL_LETTER_STEPS[offset % 12]) % 7
    letter = LETTERS[letter_index]
    accidental = (target_pc - NATURAL_PITCH_CLASSES[letter] + 6) % 12 - 6

    if accidental == 0:
        return letter
    if accidental == 1:
        return letter + "#"
    if accidental == -1:
        return letter + "b"
    return pitch_class_name(target_pc, not prefers_flats(root_name))


def spell_chord(parsed: ParsedChord) -> Dict[int, str]:
    """Pitch class → written name for every note of the chord."""
    names = {}
    for offset in parsed.intervals:
        names.setdefault((parsed.root + offset) % 12, spell_tone(parsed.root_name, offset))
    if parsed.bass_name is not None:
        names.setdefault(parsed.explicit_bass, parsed.bass_name)
    return names


# =============================================================================
# PUBLIC API
# =============================================================================

def realize_chord_midi(symbol: str, octave_offset: int = 0) -> List[int]:
    """MIDI numbers for a chord symbol; empty if it cannot be parsed."""
    parsed = parse_chord(symbol)
    if parsed is None:
        return []
    return voice_chord(parsed, octave_offset)


def realize_chord_notes(
    symbol: str,
    octave_offset: int = 0,
    use_sharps: Optional[bool] = None,
) -> List[str]:
    """
    Note strings ("C#4") for a chord symbol, ascending by pitch.

    By default each tone is spelled from its interval above the written root
    ("C7" gives Bb, not A#). Passing use_sharps spells every note from the
    sharp or flat table instead. Returns an empty list for an unparseable
    symbol.
    """
    parsed = parse_chord(symbol)
    if parsed is None:
        return []

    voicing = voice_chord(parsed, octave_offset)
    if use_sharps is not None:
        return [midi_to_note_string(m, use_sharps) for m in voicing]

    names = spell_chord(parsed)
    return [spell_midi(m, names[m % 12]) for m in voicing]


def chord_pitch_names(symbol: str) -> List[str]:
    """Note names without octaves, for display ("C E G")."""
    return strip_octave(realize_chord_notes(symbol))


def chord_pitch_classes(symbol: str) -> List[int]:
    """Distinct pitch classes sounded by a chord, in voicing order."""
    seen = []
    for midi in realize_chord_midi(symbol):
        if midi % 12 not in seen:
            seen.append(midi % 12)
    return seen
