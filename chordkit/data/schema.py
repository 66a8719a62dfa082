"""
Schema definitions for the chord engine.

This module defines the Pydantic models that carry structured harmonic data
between the engine's components. A chord symbol string is only a
presentation format; inside the engine a chord is always a ParsedChord.
"""

from typing import List, Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from chordkit.theory.intervals import CHORD_INTERVALS
from chordkit.theory.pitch import parse_note


# =============================================================================
# PARSED CHORD
# =============================================================================

class ParsedChord(BaseModel):
    """
    A chord symbol decomposed into harmonic data.

    Attributes:
        root: Pitch class of the root (0-11)
        quality: Canonical quality token, a key of CHORD_INTERVALS
        intervals: Semitone offsets from the root, ascending, starting at 0
        inversion: Which chord tone is in the bass (0 = root position)
        explicit_bass: Pitch class of a slash-chord bass, or None
        root_name: Root as written, used when re-serializing
        bass_name: Bass as written, used when re-serializing

    Example:
        >>> ParsedChord(root=0, quality="maj7", intervals=(0, 4, 7, 11), root_name="C")
    """

    model_config = ConfigDict(frozen=True)

    root: int = Field(..., ge=0, le=11, description="Root pitch class")
    quality: str = Field(..., description="Canonical quality token", examples=["", "m", "maj7"])
    intervals: Tuple[int, ...] = Field(..., min_length=1, description="Semitone offsets from the root")
    inversion: int = Field(default=0, ge=0, description="Inversion level")
    explicit_bass: Optional[int] = Field(default=None, ge=0, le=11, description="Slash-bass pitch class")
    root_name: str = Field(..., description="Root spelling", examples=["C", "F#", "Bb"])
    bass_name: Optional[str] = Field(default=None, description="Bass spelling")

    @field_validator("quality")
    @classmethod
    def validate_quality(cls, v: str) -> str:
        """Quality must be a canonical interval table key."""
        if v not in CHORD_INTERVALS:
            raise ValueError(f"Unknown chord quality: '{v}'")
        return v

    @field_validator("root_name", "bass_name")
    @classmethod
    def validate_spelling(cls, v: Optional[str]) -> Optional[str]:
        if v is not None:
            parse_note(v)
        return v

    @model_validator(mode="after")
    def check_consistency(self) -> "ParsedChord":
        """Spellings must agree with the pitch classes; inversion must be legal."""
        if parse_note(self.root_name) != self.root:
            raise ValueError(f"Root spelling '{self.root_name}' does not match pitch class {self.root}")
        if (self.explicit_bass is None) != (self.bass_name is None):
            raise ValueError("explicit_bass and bass_name must be given together")
        if self.bass_name is not None and parse_note(self.bass_name) != self.explicit_bass:
            raise ValueError(
                f"Bass spelling '{self.bass_name}' does not match pitch class {self.explicit_bass}"
            )
        if self.inversion > len(self.intervals) - 1:
            raise ValueError(
                f"Inversion {self.inversion} out of range for a {len(self.intervals)}-note chord"
            )
        return self

    @property
    def size(self) -> int:
        return len(self.intervals)

    @property
    def pitch_classes(self) -> List[int]:
        """Chord tones as pitch classes, in root-position order."""
        return [(self.root + offset) % 12 for offset in self.intervals]


# =============================================================================
# PARTIAL UPDATE
# =============================================================================

class ChordUpdate(BaseModel):
    """
    A partial change to apply to a chord symbol.

    Only fields that were actually given are applied, so
    ChordUpdate(bass=None) removes a slash bass while ChordUpdate() leaves
    it alone.
    """

    inversion: Optional[int] = Field(default=None, description="New inversion level; 0 for root position")
    bass: Optional[Union[int, str]] = Field(
        default=None, description="New bass as pitch class or note name; None removes it"
    )

    @field_validator("bass")
    @classmethod
    def validate_bass(cls, v: Optional[Union[int, str]]) -> Optional[Union[int, str]]:
        if isinstance(v, str):
            parse_note(v)
        elif isinstance(v, int) and not 0 <= v <= 11:
            raise ValueError(f"Bass pitch class must be in 0-11. Got: {v}")
        return v

    @property
    def sets_inversion(self) -> bool:
        return "inversion" in self.model_fields_set and self.inversion is not None

    @property
    def sets_bass(self) -> bool:
        return "bass" in self.model_fields_set


# =============================================================================
# REPORTING
# =============================================================================

class VoicedChord(BaseModel):
    """A chord symbol with its realized notes, as reported by the CLI."""

    symbol: str = Field(..., description="Chord symbol as given or produced")
    display_name: str = Field(..., description="Root and quality without voicing annotations")
    notes: List[str] = Field(default_factory=list, description="Realized notes, ascending")
    pitch_classes: List[int] = Field(default_factory=list, description="Distinct pitch classes")
