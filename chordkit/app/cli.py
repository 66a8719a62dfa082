"""
Command Line Interface for chordkit
===================================

A thin front end over the chord engine, for trying symbols out and for
batch-processing progression files.

Usage Examples:
    # Inspect a chord
    python -m chordkit.app.cli parse "G7/B"

    # Realize notes, one octave down
    python -m chordkit.app.cli notes Cmaj7 "Dm (2nd inv.)" --octave -1

    # Transpose by semitones, or move a progression to another key
    python -m chordkit.app.cli transpose 3 C Am F G --flats
    python -m chordkit.app.cli key C Am F G --to Eb

    # Add an inversion or a slash bass
    python -m chordkit.app.cli update C --inversion 1
    python -m chordkit.app.cli update G7 --bass B

    # Voice-lead a progression, or a whole file of them
    python -m chordkit.app.cli humanize C F G C
    python -m chordkit.app.cli humanize --file progressions.txt --json
"""

import argparse
import json
import re
import sys
from typing import Dict, List, Optional

from pydantic import ValidationError
from tqdm import tqdm

from chordkit.core.config import get_settings
from chordkit.core.logging import get_logger, setup_logging
from chordkit.data.schema import ChordUpdate, VoicedChord
from chordkit.theory.mutator import base_chord_name, update_chord
from chordkit.theory.parser import ChordParseError, format_chord, parse_chord_strict
from chordkit.theory.pitch import key_tonic_pitch_class
from chordkit.theory.realizer import chord_pitch_classes, realize_chord_notes
from chordkit.theory.transposer import transpose_chord, transpose_progression
from chordkit.theory.voice_leading import humanize_progression


logger = get_logger(__name__)

# Chords in a progression file are separated by commas, pipes, or whitespace
# that is followed by a new root letter ("C (1st inv.) F" is two chords)
CHORD_SEPARATOR_REGEX = re.compile(r"\s*[,|]\s*|(?<!/)\s+(?=[A-G])")

# Spaces around a slash bass belong to the chord ("G7 / B")
SLASH_BASS_REGEX = re.compile(r"\s*/\s*")


# =============================================================================
# PART 1: ARGUMENT PARSER SETUP
# =============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser object
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--json",
        action="store_true",
        help="Output result as JSON (useful for scripting)"
    )
    common.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug logging on stderr"
    )

    parser = argparse.ArgumentParser(
        prog="chordkit",
        description="Parse, voice, transpose and voice-lead chord symbols.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Chord symbols look like: C  Am  G7/B  Cmaj7  "Dm (2nd inv.)"  F#m7b5
Quote symbols that contain spaces.
        """
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # ─────────────────────────────────────────────────────────────────────────
    # parse
    # ─────────────────────────────────────────────────────────────────────────
    p = subparsers.add_parser("parse", parents=[common], help="Show the structure of a chord symbol")
    p.add_argument("symbol", help="Chord symbol, e.g. 'G7/B'")

    # ─────────────────────────────────────────────────────────────────────────
    # notes
    # ─────────────────────────────────────────────────────────────────────────
    p = subparsers.add_parser("notes", parents=[common], help="Realize chords as octave-placed notes")
    p.add_argument("symbols", nargs="+", help="Chord symbols")
    p.add_argument("--octave", type=int, default=None, help="Octave offset (default from settings)")
    spelling = p.add_mutually_exclusive_group()
    spelling.add_argument("--sharps", action="store_true", help="Spell notes with sharps")
    spelling.add_argument("--flats", action="store_true", help="Spell notes with flats")

    # ─────────────────────────────────────────────────────────────────────────
    # transpose
    # ─────────────────────────────────────────────────────────────────────────
    p = subparsers.add_parser("transpose", parents=[common], help="Transpose chords by semitones")
    p.add_argument("semitones", type=int, help="Signed interval in semitones")
    p.add_argument("symbols", nargs="+", help="Chord symbols")
    p.add_argument("--flats", action="store_true", help="Spell results with flats")

    # ─────────────────────────────────────────────────────────────────────────
    # key
    # ─────────────────────────────────────────────────────────────────────────
    p = subparsers.add_parser("key", parents=[common], help="Move progressions to another key")
    p.add_argument("symbols", nargs="*", help="Chord symbols (or use --file)")
    p.add_argument("--to", dest="to_key", required=True, help="Target key, e.g. 'Eb' or 'F#m'")
    p.add_argument("--from", dest="from_key", default=None, help="Source key (default from settings)")
    p.add_argument("--file", default=None, help="File with one progression per line")

    # ─────────────────────────────────────────────────────────────────────────
    # update
    # ─────────────────────────────────────────────────────────────────────────
    p = subparsers.add_parser("update", parents=[common], help="Set the inversion or slash bass of a chord")
    p.add_argument("symbol", help="Chord symbol")
    p.add_argument("--inversion", type=int, default=None, help="Inversion level (0 = root position)")
    bass = p.add_mutually_exclusive_group()
    bass.add_argument("--bass", default=None, help="Slash-bass note, e.g. 'B' or 'F#'")
    bass.add_argument("--no-bass", action="store_true", help="Remove slash-bass notation")

    # ─────────────────────────────────────────────────────────────────────────
    # humanize
    # ─────────────────────────────────────────────────────────────────────────
    p = subparsers.add_parser("humanize", parents=[common], help="Choose inversions for smooth voice leading")
    p.add_argument("symbols", nargs="*", help="Chord symbols (or use --file)")
    p.add_argument("--file", default=None, help="File with one progression per line")

    return parser


# =============================================================================
# PART 2: OUTPUT FORMATTING FUNCTIONS
# =============================================================================

def describe_chord(symbol: str, octave_offset: int = 0, use_sharps: Optional[bool] = None) -> VoicedChord:
    """Bundle a symbol with its realized notes for display."""
    return VoicedChord(
        symbol=symbol,
        display_name=base_chord_name(symbol),
        notes=realize_chord_notes(symbol, octave_offset, use_sharps),
        pitch_classes=chord_pitch_classes(symbol),
    )


def format_voiced_table(chords: List[VoicedChord]) -> str:
    """
    Format realized chords as aligned rows.

    Example:
        Cmaj7            C4 E4 G4 B4
        Dm (2nd inv.)    A4 D5 F5
    """
    width = max((len(c.symbol) for c in chords), default=0) + 4
    lines = []
    for chord in chords:
        notes = " ".join(chord.notes) if chord.notes else "(no notes)"
        lines.append(f"{chord.symbol.ljust(width)}{notes}")
    return "\n".join(lines)


def format_progression(symbols: List[str]) -> str:
    return "  →  ".join(symbols) if symbols else "(no chords)"


def format_parsed(symbol: str) -> str:
    """Multi-line description of one chord symbol."""
    parsed = parse_chord_strict(symbol)
    lines = [
        "┌" + "─" * 45 + "┐",
        "│" + f" {format_chord(parsed)} ".center(45) + "│",
        "├" + "─" * 45 + "┤",
        f"│  Root:       {parsed.root_name} (pitch class {parsed.root})".ljust(46) + "│",
        f"│  Quality:    {parsed.quality or '(major)'}".ljust(46) + "│",
        f"│  Intervals:  {', '.join(str(i) for i in parsed.intervals)}".ljust(46) + "│",
        f"│  Inversion:  {parsed.inversion}".ljust(46) + "│",
    ]
    if parsed.bass_name is not None:
        lines.append(f"│  Bass:       {parsed.bass_name} (pitch class {parsed.explicit_bass})".ljust(46) + "│")
    lines.append(f"│  Notes:      {' '.join(realize_chord_notes(symbol))}".ljust(46) + "│")
    lines.append("└" + "─" * 45 + "┘")
    return "\n".join(lines)


def print_json(payload) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


# =============================================================================
# PART 3: INPUT HELPERS
# =============================================================================

def split_progression(line: str) -> List[str]:
    """'C, Am | F G7 / B' → ['C', 'Am', 'F', 'G7/B']"""
    line = SLASH_BASS_REGEX.sub("/", line.strip())
    if not line:
        return []
    return [chord for chord in CHORD_SEPARATOR_REGEX.split(line) if chord]


def read_progressions(path: str) -> List[List[str]]:
    """
    Read one progression per line, skipping blank lines and '#' comments.

    Raises:
        OSError: If the file cannot be read
    """
    progressions = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            if line.strip().startswith("#"):
                continue
            chords = split_progression(line)
            if chords:
                progressions.append(chords)
    return progressions


def collect_progressions(args) -> List[List[str]]:
    """Progressions from --file, or the positional symbols as one progression."""
    if args.file:
        return read_progressions(args.file)
    return [list(args.symbols)] if args.symbols else []


# =============================================================================
# PART 4: COMMANDS
# =============================================================================

def run_parse(args, settings) -> int:
    try:
        parsed = parse_chord_strict(args.symbol)
    except ChordParseError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    if args.json:
        print(parsed.model_dump_json(indent=2))
    else:
        print(format_parsed(args.symbol))
    return 0


def run_notes(args, settings) -> int:
    octave = settings.CHORDKIT_OCTAVE_OFFSET if args.octave is None else args.octave
    use_sharps = True if args.sharps else False if args.flats else None

    chords = [describe_chord(symbol, octave, use_sharps) for symbol in args.symbols]
    for chord in chords:
        if not chord.notes:
            logger.warning("No notes for %r (unparseable chord symbol)", chord.symbol)

    if args.json:
        print_json([chord.model_dump() for chord in chords])
    else:
        print(format_voiced_table(chords))
    return 0


def run_transpose(args, settings) -> int:
    result = [transpose_chord(symbol, args.semitones, use_sharps=not args.flats) for symbol in args.symbols]

    if args.json:
        print_json({"semitones": args.semitones, "input": args.symbols, "output": result})
    else:
        print(format_progression(result))
    return 0


def run_key(args, settings) -> int:
    from_key = args.from_key or settings.CHORDKIT_DEFAULT_KEY
    for key in (from_key, args.to_key):
        if key_tonic_pitch_class(key) is None:
            print(f"❌ Unknown key: '{key}'", file=sys.stderr)
            return 1

    progressions = collect_progressions(args)
    results = []
    for chords in tqdm(progressions, desc="Transposing", unit="prog", file=sys.stderr,
                       disable=len(progressions) < 2):
        results.append(transpose_progression(chords, args.to_key, from_key=from_key))

    if args.json:
        print_json([
            {"from_key": from_key, "to_key": args.to_key, "input": chords, "output": out}
            for chords, out in zip(progressions, results)
        ])
    else:
        for out in results:
            print(format_progression(out))
    return 0


def run_update(args, settings) -> int:
    fields: Dict = {}
    if args.inversion is not None:
        fields["inversion"] = args.inversion
    if args.bass is not None:
        fields["bass"] = args.bass
    elif args.no_bass:
        fields["bass"] = None

    try:
        update = ChordUpdate(**fields)
    except ValidationError as e:
        print(f"❌ Invalid update: {e.errors()[0]['msg']}", file=sys.stderr)
        return 1

    result = update_chord(args.symbol, update)

    if args.json:
        print_json({"input": args.symbol, "output": result, "notes": realize_chord_notes(result)})
    else:
        print(format_voiced_table([describe_chord(result)]))
    return 0


def run_humanize(args, settings) -> int:
    progressions = collect_progressions(args)
    results = []
    for chords in tqdm(progressions, desc="Voice leading", unit="prog", file=sys.stderr,
                       disable=len(progressions) < 2):
        results.append(humanize_progression(chords))

    if args.json:
        print_json([
            {
                "input": chords,
                "output": out,
                "voicings": [realize_chord_notes(symbol, settings.CHORDKIT_OCTAVE_OFFSET) for symbol in out],
            }
            for chords, out in zip(progressions, results)
        ])
    else:
        for out in results:
            print(format_progression(out))
            print(format_voiced_table([describe_chord(s, settings.CHORDKIT_OCTAVE_OFFSET) for s in out]))
            print()
    return 0


COMMANDS = {
    "parse": run_parse,
    "notes": run_notes,
    "transpose": run_transpose,
    "key": run_key,
    "update": run_update,
    "humanize": run_humanize,
}


# =============================================================================
# PART 5: MAIN ENTRY POINT
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Parses arguments, loads settings, configures logging and dispatches to
    the command. Returns the process exit code.
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = get_settings()
    except ValueError as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(level="DEBUG" if args.verbose else None)

    if args.command in ("key", "humanize") and not (args.symbols or args.file):
        print("⚠️  Please provide chord symbols or --file", file=sys.stderr)
        return 1

    try:
        return COMMANDS[args.command](args, settings)
    except OSError as e:
        print(f"❌ Cannot read input: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
