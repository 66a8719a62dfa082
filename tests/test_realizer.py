"""
Tests for chordkit/theory/realizer.py

Run with: pytest tests/test_realizer.py -v
"""

import pytest

from chordkit.theory.intervals import CHORD_INTERVALS
from chordkit.theory.parser import format_chord, inversion_annotation, parse_chord
from chordkit.theory.pitch import note_string_to_midi
from chordkit.theory.realizer import (
    chord_pitch_classes,
    chord_pitch_names,
    invert,
    realize_chord_midi,
    realize_chord_notes,
    spell_tone,
    voice_chord,
)


class TestRealizeChordNotes:
    """Chord symbols to octave-placed note strings."""

    @pytest.mark.parametrize("symbol,offset,expected", [
        ("C", 0, ["C4", "E4", "G4"]),
        ("C (1st inv.)", 0, ["E4", "G4", "C5"]),
        ("C (2nd inv.)", 0, ["G4", "C5", "E5"]),
        ("C/E", 0, ["E3", "C4", "E4", "G4"]),
        ("Bb7", -1, ["Bb3", "D4", "F4", "Ab4"]),
        ("G7/B", -1, ["B2", "G3", "B3", "D4", "F4"]),
        ("C", 1, ["C5", "E5", "G5"]),
    ])
    def test_voicings(self, symbol, offset, expected):
        assert realize_chord_notes(symbol, offset) == expected

    @pytest.mark.parametrize("symbol,expected", [
        ("C7", ["C4", "E4", "G4", "Bb4"]),
        ("Cm", ["C4", "Eb4", "G4"]),
        ("Caug", ["C4", "E4", "G#4"]),
        ("Eaug", ["E4", "G#4", "B#4"]),
        ("Cadd9", ["C4", "E4", "G4", "D5"]),
    ])
    def test_spelling_follows_intervals(self, symbol, expected):
        assert realize_chord_notes(symbol) == expected

    def test_explicit_spelling_table(self):
        assert realize_chord_notes("C7", use_sharps=True) == ["C4", "E4", "G4", "A#4"]
        assert realize_chord_notes("C#", use_sharps=False) == ["Db4", "F4", "Ab4"]

    def test_slash_bass_wins_over_inversion(self):
        assert realize_chord_notes("C (1st inv.)/G") == ["G3", "C4", "E4", "G4"]

    def test_unparseable_gives_empty_list(self):
        assert realize_chord_notes("xyz") == []
        assert realize_chord_notes("") == []
        assert realize_chord_midi("C/H") == []

    def test_notes_are_ascending(self):
        for symbol in ["Cmaj7 (2nd inv.)", "G7/B", "Dm9 (4th inv.)", "F#m7b5 (3rd inv.)"]:
            midi = realize_chord_midi(symbol)
            assert midi == sorted(midi), symbol


class TestVoicing:
    """MIDI-level voicing rules."""

    def test_root_position_midi(self):
        assert realize_chord_midi("C") == [60, 64, 67]
        assert realize_chord_midi("A", -1) == [57, 61, 64]

    def test_invert(self):
        assert invert([60, 64, 67], 0) == [60, 64, 67]
        assert invert([60, 64, 67], 1) == [64, 67, 72]
        assert invert([60, 64, 67], 3) == [60, 64, 67]
        assert invert([], 1) == []

    def test_invert_wide_chord(self):
        """Notes below the new bass may need more than one octave."""
        assert invert([60, 64, 67, 74], 3) == [74, 76, 79, 84]

    def test_ninth_chord_inversion(self):
        assert realize_chord_midi("C9 (1st inv.)") == [64, 67, 70, 72, 74]

    def test_inversion_bass_is_the_chord_tone(self):
        parsed = parse_chord("Cmaj7 (3rd inv.)")
        assert voice_chord(parsed)[0] % 12 == 11

    def test_slash_bass_below_the_chord(self):
        midi = realize_chord_midi("G7/B", -1)
        assert midi[0] == 47
        assert midi[1:] == realize_chord_midi("G7", -1)


class TestSpelling:

    def test_spell_tone_by_letter(self):
        assert spell_tone("C", 10) == "Bb"
        assert spell_tone("E", 8) == "B#"
        assert spell_tone("F#", 3) == "A"
        assert spell_tone("Bb", 4) == "D"

    def test_double_accidentals_fall_back_to_table(self):
        assert spell_tone("Cb", 3) == "D"
        assert spell_tone("B#", 4) == "E"

    @pytest.mark.parametrize("symbol,expected", [
        ("Cdim7", ["C", "Eb", "Gb", "A"]),
        ("F#m7b5", ["F#", "A", "C", "E"]),
        ("Ebmaj7", ["Eb", "G", "Bb", "D"]),
    ])
    def test_chord_pitch_names(self, symbol, expected):
        assert chord_pitch_names(symbol) == expected

    def test_chord_pitch_classes(self):
        assert chord_pitch_classes("C/E") == [4, 0, 7]
        assert chord_pitch_classes("Am") == [9, 0, 4]
        assert chord_pitch_classes("nope") == []


ROOT_SPELLINGS = [
    "C", "C#", "Db", "D", "D#", "Eb", "E", "Fb", "E#", "F", "F#",
    "Gb", "G", "G#", "Ab", "A", "A#", "Bb", "B", "Cb", "B#",
]


class TestVoicingProperties:
    """Every quality, root spelling, inversion and octave offset."""

    @pytest.mark.parametrize("quality", sorted(CHORD_INTERVALS))
    def test_every_voicing(self, quality):
        for root in ROOT_SPELLINGS:
            for inversion in range(len(CHORD_INTERVALS[quality])):
                symbol = root + quality + inversion_annotation(inversion)
                parsed = parse_chord(symbol)
                assert parsed is not None, symbol
                assert format_chord(parsed) == symbol

                for offset in (-2, 0, 1):
                    midi = realize_chord_midi(symbol, offset)
                    assert midi == sorted(midi), symbol
                    # Pitch classes are exactly root + each interval
                    assert {m % 12 for m in midi} == set(parsed.pitch_classes), symbol
                    # The bass is the chord tone the inversion names
                    assert midi[0] % 12 == parsed.pitch_classes[inversion], symbol
                    assert len(midi) == parsed.size
                    # Spelled notes sound the same pitches
                    notes = realize_chord_notes(symbol, offset)
                    assert [note_string_to_midi(n) for n in notes] == midi, symbol

    @pytest.mark.parametrize("quality", sorted(CHORD_INTERVALS))
    def test_every_slash_voicing(self, quality):
        for root in ROOT_SPELLINGS:
            symbol = root + quality + "/E"
            parsed = parse_chord(symbol)
            for offset in (-2, 0, 1):
                midi = realize_chord_midi(symbol, offset)
                assert midi == sorted(midi), symbol
                assert midi[0] % 12 == 4, symbol
                assert {m % 12 for m in midi} == set(parsed.pitch_classes) | {4}, symbol
                assert midi[1:] == realize_chord_midi(root + quality, offset), symbol


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
