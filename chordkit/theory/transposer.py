"""
Transposer - Move Chords Between Keys

Shifts a chord's root (and slash bass) by a number of semitones and respells
them with sharps or flats. The quality and any inversion annotation are left
as they are.

    transpose_chord("C", 2)                 → "D"
    transpose_chord("C", 1, use_sharps=False) → "Db"
    transpose_chord("G7/B", 5)              → "C7/E"
    transpose_progression(["C", "Am", "F", "G"], "Eb") → ["Eb", "Cm", "Ab", "Bb"]

Unparseable symbols pass through unchanged.
"""

from typing import List

from chordkit.core.logging import get_logger
from chordkit.theory.parser import format_chord, parse_chord
from chordkit.theory.pitch import key_tonic_pitch_class, pitch_class_name, use_sharps_for_key


logger = get_logger(__name__)


def transpose_chord(symbol: str, semitones: int, use_sharps: bool = True) -> str:
    """Transpose one chord symbol by a signed number of semitones."""
    parsed = parse_chord(symbol)
    if parsed is None:
        return symbol

    root = (parsed.root + semitones) % 12
    changes = {"root": root, "root_name": pitch_class_name(root, use_sharps)}

    if parsed.explicit_bass is not None:
        bass = (parsed.explicit_bass + semitones) % 12
        changes["explicit_bass"] = bass
        changes["bass_name"] = pitch_class_name(bass, use_sharps)

    return format_chord(parsed.model_copy(update=changes))


def key_interval(from_key: str, to_key: str) -> int:
    """
    Semitones from one key's tonic up to another's, in 0-11.

    Raises:
        ValueError: If either key cannot be read
    """
    from_pc = key_tonic_pitch_class(from_key)
    to_pc = key_tonic_pitch_class(to_key)
    if from_pc is None or to_pc is None:
        raise ValueError(f"Cannot transpose between keys '{from_key}' and '{to_key}'")
    return (to_pc - from_pc) % 12


def transpose_progression(symbols: List[str], target_key: str, from_key: str = "C") -> List[str]:
    """
    Transpose every chord of a progression written in `from_key` into
    `target_key`, spelling with the target key's signature.

    Each chord is handled on its own. An unreadable key leaves the
    progression unchanged.
    """
    try:
        interval = key_interval(from_key, target_key)
    except ValueError as e:
        logger.warning("%s; progression left unchanged", e)
        return list(symbols)

    use_sharps = use_sharps_for_key(target_key)
    return [transpose_chord(symbol, interval, use_sharps) for symbol in symbols]


def change_key(symbols: List[str], old_key: str, new_key: str) -> List[str]:
    """Move a progression from the song's old key to its new key."""
    return transpose_progression(symbols, target_key=new_key, from_key=old_key)
