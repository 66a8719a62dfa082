"""
Tests for chordkit/app/cli.py

Run with: pytest tests/test_cli.py -v
"""

import json

import pytest

from chordkit.app.cli import format_progression, main, read_progressions, split_progression


class TestInputHelpers:

    @pytest.mark.parametrize("line,expected", [
        ("C, Am | F G7", ["C", "Am", "F", "G7"]),
        ("C (1st inv.) F", ["C (1st inv.)", "F"]),
        ("G7/B C", ["G7/B", "C"]),
        ("C G7 / B", ["C", "G7/B"]),
        ("Am, C (1st inv.) / E | F", ["Am", "C (1st inv.)/E", "F"]),
        ("   ", []),
    ])
    def test_split_progression(self, line, expected):
        assert split_progression(line) == expected

    def test_read_progressions_skips_comments(self, tmp_path):
        path = tmp_path / "songs.txt"
        path.write_text("# verse\nC Am F G\n\nDm7, G7, Cmaj7\n", encoding="utf-8")
        assert read_progressions(str(path)) == [["C", "Am", "F", "G"], ["Dm7", "G7", "Cmaj7"]]

    def test_format_progression(self):
        assert format_progression(["C", "F"]) == "C  →  F"
        assert format_progression([]) == "(no chords)"


class TestCommands:
    """End-to-end runs of main() with captured output."""

    def test_no_command_shows_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out.lower()

    def test_parse(self, capsys):
        assert main(["parse", "G7/B"]) == 0
        out = capsys.readouterr().out
        assert "G7/B" in out
        assert "Root:" in out
        assert "B3 G4 B4 D5 F5" in out

    def test_parse_json(self, capsys):
        assert main(["parse", "Dm (2nd inv.)", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["root"] == 2
        assert payload["quality"] == "m"
        assert payload["inversion"] == 2

    def test_parse_invalid(self, capsys):
        assert main(["parse", "Cxyz"]) == 1
        assert "Cannot parse" in capsys.readouterr().err

    def test_notes(self, capsys):
        assert main(["notes", "C", "C/E"]) == 0
        out = capsys.readouterr().out
        assert "C4 E4 G4" in out
        assert "E3 C4 E4 G4" in out

    def test_notes_octave_and_flats(self, capsys):
        assert main(["notes", "C#", "--octave", "-1", "--flats", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload[0]["notes"] == ["Db3", "F3", "Ab3"]
        assert payload[0]["pitch_classes"] == [1, 5, 8]

    def test_notes_octave_from_settings(self, capsys, monkeypatch):
        monkeypatch.setenv("CHORDKIT_OCTAVE_OFFSET", "-1")
        assert main(["notes", "C"]) == 0
        assert "C3 E3 G3" in capsys.readouterr().out

    def test_notes_unparseable(self, capsys):
        assert main(["notes", "xyz"]) == 0
        assert "(no notes)" in capsys.readouterr().out

    def test_transpose(self, capsys):
        assert main(["transpose", "3", "C", "Am", "--flats"]) == 0
        assert "Eb  →  Cm" in capsys.readouterr().out

    def test_key(self, capsys):
        assert main(["key", "C", "Am", "F", "G", "--to", "Eb"]) == 0
        assert "Eb  →  Cm  →  Ab  →  Bb" in capsys.readouterr().out

    def test_key_unknown(self, capsys):
        assert main(["key", "C", "--to", "H"]) == 1
        assert "Unknown key" in capsys.readouterr().err

    @pytest.mark.parametrize("key,expected", [
        ("A#", "A#  →  Gm  →  D#  →  F"),
        ("D#", "D#  →  Cm  →  G#  →  A#"),
        ("G#", "G#  →  Fm  →  C#  →  D#"),
    ])
    def test_key_sharp_tonics_outside_signature_table(self, capsys, key, expected):
        assert main(["key", "C", "Am", "F", "G", "--to", key]) == 0
        assert expected in capsys.readouterr().out

    def test_key_needs_input(self, capsys):
        assert main(["key", "--to", "G"]) == 1

    def test_key_from_file(self, capsys, tmp_path):
        path = tmp_path / "songs.txt"
        path.write_text("C G Am F\n# skip\nDm G7 C\n", encoding="utf-8")
        assert main(["key", "--file", str(path), "--to", "D", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert [item["output"] for item in payload] == [["D", "A", "Bm", "G"], ["Em", "A7", "D"]]

    def test_missing_file(self, capsys, tmp_path):
        assert main(["humanize", "--file", str(tmp_path / "missing.txt")]) == 1
        assert "Cannot read input" in capsys.readouterr().err

    def test_update(self, capsys):
        assert main(["update", "C", "--inversion", "1", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["output"] == "C (1st inv.)"
        assert payload["notes"] == ["E4", "G4", "C5"]

    def test_update_bass(self, capsys):
        assert main(["update", "G7/B", "--no-bass", "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["output"] == "G7"

    def test_update_invalid_bass(self, capsys):
        assert main(["update", "C", "--bass", "X"]) == 1
        assert "Invalid update" in capsys.readouterr().err

    def test_humanize(self, capsys):
        assert main(["humanize", "C", "F", "G", "C", "--json"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload[0]["output"] == ["C", "F", "G", "C (2nd inv.)"]
        assert payload[0]["voicings"][-1] == ["G4", "C5", "E5"]

    def test_humanize_text(self, capsys):
        assert main(["humanize", "C", "F", "G", "C"]) == 0
        assert "C  →  F  →  G  →  C (2nd inv.)" in capsys.readouterr().out

    def test_configuration_error(self, capsys, monkeypatch):
        monkeypatch.setenv("CHORDKIT_OCTAVE_OFFSET", "9")
        assert main(["notes", "C"]) == 1
        assert "Configuration error" in capsys.readouterr().err


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
