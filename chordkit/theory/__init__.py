"""
Theory Subpackage

The chord engine, leaves first:
    - pitch.py: Pitch classes, spelling tables, key signatures
    - intervals.py: Quality tokens and their semitone offsets
    - parser.py: Chord symbol → ParsedChord, and back
    - realizer.py: ParsedChord → octave-placed notes
    - transposer.py: Move chords and progressions between keys
    - mutator.py: Apply inversion / slash-bass changes to a symbol
    - voice_leading.py: Pick inversions across a progression

Every function here is pure: no I/O, no shared mutable state.
"""
