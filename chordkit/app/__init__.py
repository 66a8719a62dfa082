"""
App Subpackage

    - cli.py: Command-line interface over the chord engine

Usage:
    chordkit notes "Cmaj7"
    python -m chordkit.app.cli humanize C F G C
"""
