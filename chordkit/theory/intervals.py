"""
Interval Table - Chord Qualities and Their Semitone Offsets

Each chord quality token maps to the semitone offsets (from the root) that
define it. The parser walks QUALITY_PRECEDENCE in order and takes the first
token that fits, so the order of that list decides ambiguous suffixes
("m7b5" before "m7" before "m").
"""

from typing import Dict, List, Tuple


# =============================================================================
# CONSTANTS: Quality → Intervals
# =============================================================================

CHORD_INTERVALS: Dict[str, Tuple[int, ...]] = {
    "":      (0, 4, 7),           # Major
    "m":     (0, 3, 7),           # Minor
    "dim":   (0, 3, 6),           # Diminished
    "aug":   (0, 4, 8),           # Augmented
    "sus2":  (0, 2, 7),           # Suspended 2nd
    "sus4":  (0, 5, 7),           # Suspended 4th
    "5":     (0, 7),              # Power chord
    "6":     (0, 4, 7, 9),        # Major 6th
    "m6":    (0, 3, 7, 9),        # Minor 6th
    "7":     (0, 4, 7, 10),       # Dominant 7th
    "maj7":  (0, 4, 7, 11),       # Major 7th
    "m7":    (0, 3, 7, 10),       # Minor 7th
    "mMaj7": (0, 3, 7, 11),       # Minor-major 7th
    "m7b5":  (0, 3, 6, 10),       # Half-diminished
    "dim7":  (0, 3, 6, 9),        # Diminished 7th
    "7sus4": (0, 5, 7, 10),       # Dominant 7th, suspended 4th
    "add9":  (0, 4, 7, 14),       # Added 9th
    "9":     (0, 4, 7, 10, 14),   # Dominant 9th
    "maj9":  (0, 4, 7, 11, 14),   # Major 9th
    "m9":    (0, 3, 7, 10, 14),   # Minor 9th
}

# Alternative spellings accepted by the parser, mapped to the canonical token
QUALITY_ALIASES: Dict[str, str] = {
    "maj": "",
    "M": "",
    "min": "m",
    "-": "m",
    "M7": "maj7",
    "Maj7": "maj7",
    "Δ7": "maj7",
    "min7": "m7",
    "-7": "m7",
    "m(maj7)": "mMaj7",
    "mM7": "mMaj7",
    "ø": "m7b5",
    "ø7": "m7b5",
    "m7-5": "m7b5",
    "o": "dim",
    "°": "dim",
    "o7": "dim7",
    "°7": "dim7",
    "+": "aug",
    "sus": "sus4",
    "add2": "add9",
    "min6": "m6",
    "min9": "m9",
    "M9": "maj9",
}

# Longest token first, ties alphabetical. The empty (major) token is last, so
# it only matches when nothing else does.
QUALITY_PRECEDENCE: List[str] = sorted(
    list(CHORD_INTERVALS) + list(QUALITY_ALIASES),
    key=lambda token: (-len(token), token),
)

SEVENTH_OFFSETS = (10, 11)


# =============================================================================
# LOOKUPS
# =============================================================================

def canonical_quality(token: str) -> str:
    """
    Map an accepted quality token to its canonical form.

    Raises:
        KeyError: If the token is not a known quality or alias
    """
    if token in CHORD_INTERVALS:
        return token
    return QUALITY_ALIASES[token]


def quality_intervals(token: str) -> Tuple[int, ...]:
    """Semitone offsets for a quality token (canonical or alias)."""
    return CHORD_INTERVALS[canonical_quality(token)]


def contains_seventh(intervals) -> bool:
    """True if the offsets include a minor or major 7th above the root."""
    return any(offset in SEVENTH_OFFSETS for offset in intervals)
