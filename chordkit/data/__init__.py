"""
Data Subpackage

    - schema.py: Pydantic models for structured chord data

The core data structure is ParsedChord, which carries:
    - root: pitch class of the root
    - quality / intervals: chord type and its semitone offsets
    - inversion: which chord tone is in the bass
    - explicit_bass: slash-chord bass, if any
"""

from chordkit.data.schema import ChordUpdate, ParsedChord, VoicedChord
