"""
Pitch Model - Pitch Classes, Note Spelling and Key Signatures

This module is the lowest layer of the chord engine. It knows how to:
    1. Turn a note name ("C", "F#", "Bb", "Cb") into a pitch class (0-11)
    2. Spell a pitch class with sharps or flats
    3. Tell whether a key prefers sharps or flats
    4. Convert between MIDI numbers and note+octave strings ("C#4")

Everything here is a static lookup table or a pure function.
"""

from typing import Dict, List, Optional, Tuple
import re


# =============================================================================
# CONSTANTS: Note Names and Spelling Tables
# =============================================================================

# Natural notes as semitones above C
NATURAL_PITCH_CLASSES = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

ACCIDENTAL_OFFSETS = {"": 0, "#": 1, "b": -1}

LETTERS = "CDEFGAB"

SHARP_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
FLAT_NAMES = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

# The 15 major key signatures and the accidental each one is written with.
# C has no accidentals and is spelled with sharps.
KEY_SIGNATURES: Dict[str, str] = {
    "C": "sharps",
    "G": "sharps",
    "D": "sharps",
    "A": "sharps",
    "E": "sharps",
    "B": "sharps",
    "F#": "sharps",
    "C#": "sharps",
    "F": "flats",
    "Bb": "flats",
    "Eb": "flats",
    "Ab": "flats",
    "Db": "flats",
    "Gb": "flats",
    "Cb": "flats",
}

NOTE_NAME_REGEX = re.compile(r"^([A-G])([#b]?)$")
NOTE_WITH_OCTAVE_REGEX = re.compile(r"^([A-G][#b]?)(-?\d+)$")
KEY_NAME_REGEX = re.compile(r"^([A-G][#b]?)\s*(m|min|minor|maj|major)?$")

# Octave numbering where C4 is MIDI 60
MIDI_C0 = 12


# =============================================================================
# NOTE NAME <-> PITCH CLASS
# =============================================================================

def parse_note(name: str) -> int:
    """
    Get the pitch class (0-11) of a note name.

    Accepts a letter A-G and an optional single '#' or 'b'. Enharmonic
    spellings across the B/C and E/F boundaries wrap around, so "Cb" is 11
    and "E#" is 5.

    Raises:
        ValueError: If the name is not a valid note
    """
    match = NOTE_NAME_REGEX.match(name.strip()) if isinstance(name, str) else None
    if not match:
        raise ValueError(f"Invalid note name: '{name}'")

    letter, accidental = match.groups()
    return (NATURAL_PITCH_CLASSES[letter] + ACCIDENTAL_OFFSETS[accidental]) % 12


def note_to_pitch_class(name: str) -> Optional[int]:
    """Like parse_note(), but returns None instead of raising."""
    try:
        return parse_note(name)
    except ValueError:
        return None


def pitch_class_name(pitch_class: int, use_sharps: bool = True) -> str:
    """Spell a pitch class using the sharp or flat table."""
    table = SHARP_NAMES if use_sharps else FLAT_NAMES
    return table[pitch_class % 12]


def prefers_flats(note_name: str) -> bool:
    """True when a written note name uses a flat."""
    return len(note_name) > 1 and note_name[1] == "b"


# =============================================================================
# KEYS
# =============================================================================

def split_key_name(key: str) -> Tuple[str, str]:
    """
    Split a key name into (tonic, mode).

    Examples:
        split_key_name("Bb")     → ("Bb", "major")
        split_key_name("F#m")    → ("F#", "minor")
        split_key_name("D minor") → ("D", "minor")

    Raises:
        ValueError: If the key name cannot be read
    """
    match = KEY_NAME_REGEX.match(key.strip()) if isinstance(key, str) else None
    if not match:
        raise ValueError(f"Invalid key: '{key}'")

    tonic, mode = match.groups()
    if mode in ("m", "min", "minor"):
        return tonic, "minor"
    return tonic, "major"


def relative_major(key: str) -> str:
    """Name of the major key sharing the signature of `key`."""
    tonic, mode = split_key_name(key)
    if mode == "major":
        return tonic

    major_pc = (parse_note(tonic) + 3) % 12
    spellings = (SHARP_NAMES[major_pc], FLAT_NAMES[major_pc])
    if prefers_flats(tonic):
        spellings = spellings[::-1]
    # Pick the spelling that is an actual key signature (e.g. "Bb", not "A#")
    for candidate in spellings:
        if candidate in KEY_SIGNATURES:
            return candidate
    return SHARP_NAMES[major_pc]


def is_known_key(key: str) -> bool:
    """True if `key` (major or minor) maps onto one of the 15 signatures."""
    try:
        return relative_major(key) in KEY_SIGNATURES
    except ValueError:
        return False


def key_signature(key: str) -> str:
    """
    Return "sharps" or "flats" for a key.

    Minor keys use their relative major's signature. Unrecognised keys fall
    back to "sharps".
    """
    try:
        return KEY_SIGNATURES.get(relative_major(key), "sharps")
    except ValueError:
        return "sharps"


def use_sharps_for_key(key: str) -> bool:
    return key_signature(key) != "flats"


def key_tonic_pitch_class(key: str) -> Optional[int]:
    """Pitch class of a key's tonic, or None for an unreadable key."""
    try:
        tonic, _ = split_key_name(key)
    except ValueError:
        return None
    return note_to_pitch_class(tonic)


# =============================================================================
# MIDI NUMBERS <-> NOTE STRINGS
# =============================================================================

def midi_to_note_string(midi: int, use_sharps: bool = True) -> str:
    """61 → "C#4" (or "Db4" with use_sharps=False)."""
    octave = (midi - MIDI_C0) // 12
    return f"{pitch_class_name(midi % 12, use_sharps)}{octave}"


def note_string_to_midi(note: str) -> int:
    """
    "C4" → 60, "Bb3" → 58, "B#3" → 60.

    The octave belongs to the letter, so "Cb4" is B3 (59).

    Raises:
        ValueError: If the string is not a note name followed by an octave
    """
    match = NOTE_WITH_OCTAVE_REGEX.match(note.strip()) if isinstance(note, str) else None
    if not match:
        raise ValueError(f"Invalid note string: '{note}'")

    name, octave = match.groups()
    letter, accidental = name[0], name[1:]
    return MIDI_C0 + int(octave) * 12 + NATURAL_PITCH_CLASSES[letter] + ACCIDENTAL_OFFSETS[accidental]


def strip_octave(notes: List[str]) -> List[str]:
    """["C4", "E4"] → ["C", "E"]"""
    return [re.sub(r"-?\d+$", "", n) for n in notes]


def spell_midi(midi: int, name: str) -> str:
    """
    Write a MIDI number with a given spelling of its pitch class.

    The octave follows the letter, so spell_midi(71, "Cb") → "Cb5" (= B4).
    """
    offset = NATURAL_PITCH_CLASSES[name[0]] + ACCIDENTAL_OFFSETS[name[1:]]
    octave = (midi - MIDI_C0 - offset) // 12
    return f"{name}{octave}"
