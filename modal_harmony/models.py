"""Chord, mode and analysis data models for modal-harmony."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from modal_harmony.exceptions import ChordLookupError
from modal_harmony.pitch_class import NOTES, note_index


class ChordQuality(Enum):
    """Triad quality, valued by its Harte shorthand."""

    MAJOR = "maj"
    MINOR = "min"
    DIMINISHED = "dim"

    @property
    def intervals(self) -> tuple[int, int, int]:
        """Semitone offsets of root, third and fifth."""
        return QUALITY_INTERVALS[self]

    @property
    def suffix(self) -> str:
        """Suffix appended to the root in a chord symbol."""
        return QUALITY_SUFFIXES[self]


QUALITY_INTERVALS: dict[ChordQuality, tuple[int, int, int]] = {
    ChordQuality.MAJOR: (0, 4, 7),
    ChordQuality.MINOR: (0, 3, 7),
    ChordQuality.DIMINISHED: (0, 3, 6),
}

QUALITY_SUFFIXES: dict[ChordQuality, str] = {
    ChordQuality.MAJOR: "",
    ChordQuality.MINOR: "m",
    ChordQuality.DIMINISHED: "°",
}

# pychord spells the diminished triad "dim"
PYCHORD_SUFFIXES: dict[ChordQuality, str] = {
    ChordQuality.MAJOR: "",
    ChordQuality.MINOR: "m",
    ChordQuality.DIMINISHED: "dim",
}


@dataclass(frozen=True)
class Chord:
    """A triad: root note plus quality.

    The root is normalized to its sharp spelling on construction, so
    ``Chord("Ab", ChordQuality.MAJOR) == Chord("G#", ChordQuality.MAJOR)``.

    Parameters
    ----------
    root : str
        The root note (e.g., "C", "F#", "Bb").
    quality : ChordQuality
        The triad quality.

    Raises
    ------
    ChordLookupError
        If the root is not a recognized note name.

    Examples
    --------
    >>> chord = Chord(root="A", quality=ChordQuality.MINOR)
    >>> chord.symbol
    'Am'
    >>> chord.to_harte()
    'A:min'
    >>> chord.notes()
    ('A', 'C', 'E')
    """

    root: str
    quality: ChordQuality = ChordQuality.MAJOR

    def __post_init__(self) -> None:
        pc = note_index(self.root)
        if pc is None:
            msg = f"Unknown chord root: {self.root}"
            raise ChordLookupError(msg)
        if not isinstance(self.quality, ChordQuality):
            msg = f"Unknown chord quality: {self.quality}"
            raise ChordLookupError(msg)
        object.__setattr__(self, "root", NOTES[pc])

    @property
    def root_index(self) -> int:
        """Pitch class of the root (0-11)."""
        return NOTES.index(self.root)

    @property
    def symbol(self) -> str:
        """Canonical chord symbol (e.g., "C", "Dm", "B°")."""
        return f"{self.root}{self.quality.suffix}"

    def notes(self) -> tuple[str, str, str]:
        """Return root, third and fifth as canonical note names."""
        root, third, fifth = (NOTES[(self.root_index + offset) % 12] for offset in self.quality.intervals)
        return root, third, fifth

    def to_harte(self) -> str:
        """Convert to Harte notation string (e.g., "G:min")."""
        return f"{self.root}:{self.quality.value}"

    def to_pychord(self) -> str:
        """Convert to pychord notation string (e.g., "Gm", "Bdim")."""
        return f"{self.root}{PYCHORD_SUFFIXES[self.quality]}"

    def __str__(self) -> str:
        """Return the canonical symbol as default string representation."""
        return self.symbol


@dataclass(frozen=True)
class Mode:
    """One of the seven diatonic modes.

    Parameters
    ----------
    name : str
        Full mode name (e.g., "Ionian (Major)").
    description : str
        Short character description.
    intervals : tuple[int, ...]
        Seven ascending semitone offsets from the tonic, starting at 0.
    qualities : tuple[ChordQuality, ...]
        Triad quality on each scale degree.
    roman_numerals : tuple[str, ...]
        Roman-numeral label of each scale degree.
    characteristic_degrees : tuple[int, ...]
        Degrees (0-6) whose chords best distinguish the mode from its
        relatives.
    """

    name: str
    description: str
    intervals: tuple[int, ...]
    qualities: tuple[ChordQuality, ...]
    roman_numerals: tuple[str, ...]
    characteristic_degrees: tuple[int, ...]

    @property
    def short_name(self) -> str:
        """First word of the name (e.g., "Ionian")."""
        return self.name.split(" ")[0]

    def is_characteristic(self, degree: int) -> bool:
        """Check whether a scale degree is characteristic of this mode."""
        return degree in self.characteristic_degrees

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class DiatonicChord:
    """A chord built on one degree of a tonic/mode scale.

    Parameters
    ----------
    degree : int
        Scale degree index (0-6).
    chord : Chord
        The triad on that degree.
    roman_numeral : str
        The mode's label for the degree.
    is_characteristic : bool
        True if the degree is characteristic of the mode.
    """

    degree: int
    chord: Chord
    roman_numeral: str
    is_characteristic: bool

    @property
    def symbol(self) -> str:
        return self.chord.symbol

    @property
    def quality(self) -> ChordQuality:
        return self.chord.quality


@dataclass(frozen=True)
class MatchResult:
    """How well a chord selection fits one tonic/mode combination.

    Parameters
    ----------
    tonic : str
        Tonic note of the candidate key.
    mode : Mode
        Candidate mode.
    matching_chords : tuple[str, ...]
        Selected symbols that are diatonic to the key, in selection order.
    missing_chords : tuple[str, ...]
        Selected symbols that are not diatonic to the key.
    match_fraction : float
        ``len(matching_chords) / len(selection)``.
    is_perfect : bool
        True if every selected chord is diatonic to the key.
    characteristic_chords : tuple[str, ...]
        Matched symbols sitting on characteristic degrees, in scale order.
    """

    tonic: str
    mode: Mode
    matching_chords: tuple[str, ...]
    missing_chords: tuple[str, ...]
    match_fraction: float
    is_perfect: bool
    characteristic_chords: tuple[str, ...]

    @property
    def match_percentage(self) -> float:
        """Match fraction scaled to 0-100."""
        return self.match_fraction * 100

    @property
    def label(self) -> str:
        """Display label such as "C Ionian"."""
        return f"{self.tonic} {self.mode.short_name}"


MatchStatus = Literal["no_input", "no_matches", "matched"]


@dataclass(frozen=True)
class MatchReport:
    """Matcher outcome with the empty-input and no-match cases made explicit.

    Parameters
    ----------
    status : MatchStatus
        "no_input" for an empty selection, "no_matches" when no key/mode
        contains any selected chord, "matched" otherwise.
    results : tuple[MatchResult, ...]
        Ranked results; empty unless status is "matched".
    """

    status: MatchStatus
    results: tuple[MatchResult, ...] = ()

    @property
    def best(self) -> MatchResult | None:
        """Top-ranked result, if any."""
        return self.results[0] if self.results else None


@dataclass(frozen=True)
class ProgressionStep:
    """Roman-numeral analysis of one chord in a progression.

    Parameters
    ----------
    symbol : str
        The chord symbol as supplied (canonicalized when it parses).
    roman_numeral : str | None
        Degree label in the key, or None when it cannot be resolved.
    is_diatonic : bool
        True if the chord belongs to the key's major scale.
    """

    symbol: str
    roman_numeral: str | None
    is_diatonic: bool

    @property
    def is_borrowed(self) -> bool:
        return not self.is_diatonic

    @property
    def display_numeral(self) -> str:
        """Numeral for display, "?" when unresolved."""
        return self.roman_numeral if self.roman_numeral is not None else "?"


@dataclass(frozen=True)
class ProgressionAnalysis:
    """Roman-numeral analysis of a whole progression.

    Parameters
    ----------
    key : str
        Reference major key.
    steps : tuple[ProgressionStep, ...]
        One step per chord, in progression order.
    """

    key: str
    steps: tuple[ProgressionStep, ...]

    @property
    def formula(self) -> str:
        """Numerals joined as a progression formula (e.g., "I - IV - V")."""
        return " - ".join(step.display_numeral for step in self.steps)

    @property
    def borrowed(self) -> tuple[ProgressionStep, ...]:
        return tuple(step for step in self.steps if step.is_borrowed)
