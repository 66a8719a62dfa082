"""
Chord Parser - Chord Symbols In, ParsedChord Out

Grammar:
    symbol     := root quality [inversion] ["/" bass]
    root, bass := letter A-G, optional '#' or 'b'
    quality    := a token from QUALITY_PRECEDENCE
    inversion  := "(1st inv.)", "(2nd inv.)", "(3rd inv.)", ...

Examples:
    "Cmaj7"          → root=0,  quality="maj7", inversion=0
    "G7/B"           → root=7,  quality="7",    explicit_bass=11
    "Dm (2nd inv.)"  → root=2,  quality="m",    inversion=2

parse_chord() is total: it returns None for anything it cannot read.
parse_chord_strict() raises ChordParseError instead.
"""

from typing import Optional, Tuple
import re

from pydantic import ValidationError

from chordkit.core.logging import get_logger
from chordkit.data.schema import ParsedChord
from chordkit.theory.intervals import (
    QUALITY_PRECEDENCE,
    canonical_quality,
    contains_seventh,
    quality_intervals,
)
from chordkit.theory.pitch import parse_note


logger = get_logger(__name__)


ROOT_REGEX = re.compile(r"^([A-G][#b]?)")

# Matches an inversion annotation such as " (1st inv.)" anywhere in a string
INVERSION_PATTERN = re.compile(r"\s*\(\s*(\d+)(?:st|nd|rd|th)\s+inv\.?\s*\)", re.IGNORECASE)

# What may follow the quality token: optional annotation, optional slash bass
TAIL_REGEX = re.compile(
    r"^(?:\s*\(\s*(?P<inversion>\d+)(?:st|nd|rd|th)\s+inv\.?\s*\))?"
    r"(?:\s*/\s*(?P<bass>[A-G][#b]?))?\s*$",
    re.IGNORECASE,
)


class ChordParseError(ValueError):
    """Raised by parse_chord_strict() for a symbol that is not a chord."""

    def __init__(self, symbol, reason: str):
        self.symbol = symbol
        self.reason = reason
        super().__init__(f"Cannot parse chord symbol {symbol!r}: {reason}")


# =============================================================================
# PARSING
# =============================================================================

def _split_quality(rest: str) -> Tuple[str, "re.Match"]:
    """Find the first quality token whose remainder is a valid tail."""
    for token in QUALITY_PRECEDENCE:
        if not rest.startswith(token):
            continue
        tail = TAIL_REGEX.match(rest[len(token):])
        if tail:
            return token, tail
    raise KeyError(rest)


def parse_chord_strict(symbol: str) -> ParsedChord:
    """
    Parse a chord symbol.

    Raises:
        ChordParseError: If the symbol is empty, has no root, has an unknown
            quality or a malformed annotation/bass
    """
    if not isinstance(symbol, str) or not symbol.strip():
        raise ChordParseError(symbol, "empty symbol")

    text = symbol.strip()
    root_match = ROOT_REGEX.match(text)
    if not root_match:
        raise ChordParseError(symbol, "no root note")

    root_name = root_match.group(1)
    try:
        token, tail = _split_quality(text[len(root_name):])
    except KeyError:
        raise ChordParseError(symbol, "unknown quality or trailing text") from None

    quality = canonical_quality(token)
    intervals = quality_intervals(token)

    inversion = 0
    if tail.group("inversion") is not None:
        # Reduce modulo chord size so "(3rd inv.)" on a triad is still legal
        inversion = int(tail.group("inversion")) % len(intervals)

    bass_name = tail.group("bass")
    if bass_name is not None:
        # The regex is case-insensitive for "inv."; note letters are not
        bass_name = bass_name[0].upper() + bass_name[1:]

    try:
        return ParsedChord(
            root=parse_note(root_name),
            quality=quality,
            intervals=intervals,
            inversion=inversion,
            explicit_bass=parse_note(bass_name) if bass_name else None,
            root_name=root_name,
            bass_name=bass_name,
        )
    except (ValidationError, ValueError) as e:
        raise ChordParseError(symbol, str(e)) from e


def parse_chord(symbol: str) -> Optional[ParsedChord]:
    """Parse a chord symbol, returning None when it cannot be read."""
    try:
        return parse_chord_strict(symbol)
    except ChordParseError as e:
        logger.debug("Unparseable chord symbol %r: %s", symbol, e.reason)
        return None


def is_valid_chord(symbol: str) -> bool:
    return parse_chord(symbol) is not None


def has_seventh(symbol: str) -> bool:
    """
    True if the chord contains a minor or major 7th.

    Examples:
        has_seventh("Cmaj7") → True
        has_seventh("C7")    → True
        has_seventh("C")     → False
        has_seventh("???")   → False
    """
    parsed = parse_chord(symbol)
    return parsed is not None and contains_seventh(parsed.intervals)


# =============================================================================
# SERIALIZATION
# =============================================================================

def ordinal(n: int) -> str:
    """1 → "1st", 2 → "2nd", 11 → "11th", 23 → "23rd"."""
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def inversion_annotation(inversion: int) -> str:
    """The " (2nd inv.)" suffix for an inversion level; empty for 0."""
    if inversion <= 0:
        return ""
    return f" ({ordinal(inversion)} inv.)"


def format_chord(parsed: ParsedChord) -> str:
    """
    Serialize a ParsedChord back into a chord symbol.

    Example:
        format_chord(parse_chord("G7 (1st inv.)/B")) → "G7 (1st inv.)/B"
    """
    symbol = parsed.root_name + parsed.quality + inversion_annotation(parsed.inversion)
    if parsed.bass_name is not None:
        symbol += "/" + parsed.bass_name
    return symbol


def strip_inversion(text: str) -> str:
    """Remove any inversion annotation from a symbol or quality string."""
    return INVERSION_PATTERN.sub("", text).strip()
