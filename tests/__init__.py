"""
Test Package

Contains unit tests for all modules.
Run with: pytest tests/ -v

Test files follow the pattern:
    test_<module_name>.py

Example:
    tests/test_parser.py      - Tests for chordkit/theory/parser.py
    tests/test_realizer.py    - Tests for chordkit/theory/realizer.py
    tests/test_cli.py         - Tests for chordkit/app/cli.py
"""
