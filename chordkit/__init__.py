"""
chordkit - Chord Symbol Engine

Parses chord symbols, realizes them as octave-placed notes, transposes them
between keys, applies inversions and slash basses, and voice-leads whole
progressions.

Subpackages:
    - chordkit.theory: The engine (pitch, intervals, parser, realizer,
                       transposer, mutator, voice_leading)
    - chordkit.data: Pydantic models (ParsedChord, ChordUpdate, VoicedChord)
    - chordkit.core: Configuration and logging
    - chordkit.app: Command-line interface

Example usage:
    from chordkit import realize_chord_notes, humanize_progression

    realize_chord_notes("Cmaj7")                 # ['C4', 'E4', 'G4', 'B4']
    humanize_progression(["C", "F", "G", "C"])   # ['C', 'F', 'G', 'C (2nd inv.)']
"""

__version__ = "0.1.0"

from chordkit.theory.pitch import KEY_SIGNATURES, parse_note, key_signature
from chordkit.theory.intervals import CHORD_INTERVALS, QUALITY_PRECEDENCE
from chordkit.theory.parser import (
    INVERSION_PATTERN,
    ChordParseError,
    format_chord,
    has_seventh,
    parse_chord,
    parse_chord_strict,
)
from chordkit.theory.realizer import realize_chord_midi, realize_chord_notes
from chordkit.theory.transposer import change_key, transpose_chord, transpose_progression
from chordkit.theory.mutator import base_chord_name, cap_inversion, update_chord
from chordkit.theory.voice_leading import humanize_progression
from chordkit.data.schema import ChordUpdate, ParsedChord

__all__ = [
    "KEY_SIGNATURES",
    "CHORD_INTERVALS",
    "QUALITY_PRECEDENCE",
    "INVERSION_PATTERN",
    "ChordParseError",
    "ChordUpdate",
    "ParsedChord",
    "parse_note",
    "key_signature",
    "parse_chord",
    "parse_chord_strict",
    "format_chord",
    "has_seventh",
    "realize_chord_notes",
    "realize_chord_midi",
    "transpose_chord",
    "transpose_progression",
    "change_key",
    "update_chord",
    "cap_inversion",
    "base_chord_name",
    "humanize_progression",
]
