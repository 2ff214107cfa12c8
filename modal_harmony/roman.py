"""Roman-numeral analysis of chords relative to a major key.

The numeral always reflects the chord's own quality combined with the
degree name of its root interval, so borrowed chords get a label too
(e.g., Fm in C is "iv", Ab in C is "♭VI").
"""

from __future__ import annotations

from collections.abc import Iterable

from modal_harmony.converter import parse_chord
from modal_harmony.models import Chord, ChordQuality, ProgressionAnalysis, ProgressionStep
from modal_harmony.modes import IONIAN
from modal_harmony.pitch_class import canonical_note, note_index
from modal_harmony.scales import diatonic_symbols

# Interval above the key (semitones) to (major, minor, diminished) labels
ROMAN_NUMERALS: tuple[tuple[str, str, str], ...] = (
    ("I", "i", "i°"),
    ("♭II", "♭ii", "♭ii°"),
    ("II", "ii", "ii°"),
    ("♭III", "♭iii", "♭iii°"),
    ("III", "iii", "iii°"),
    ("IV", "iv", "iv°"),
    ("♭V", "♭v", "♭v°"),
    ("V", "v", "v°"),
    ("♭VI", "♭vi", "♭vi°"),
    ("VI", "vi", "vi°"),
    ("♭VII", "♭vii", "♭vii°"),
    ("VII", "vii", "vii°"),
)

_QUALITY_COLUMN: dict[ChordQuality, int] = {
    ChordQuality.MAJOR: 0,
    ChordQuality.MINOR: 1,
    ChordQuality.DIMINISHED: 2,
}


def _as_chord(chord: Chord | str) -> Chord | None:
    return chord if isinstance(chord, Chord) else parse_chord(chord)


def roman_numeral(chord: Chord | str, key: str) -> str | None:
    """Label a chord with its Roman numeral in a major key.

    Parameters
    ----------
    chord : Chord | str
        The chord, or its symbol.
    key : str
        Tonic of the reference key.

    Returns
    -------
    str | None
        The label, or None if the chord or key cannot be resolved.

    Examples
    --------
    >>> roman_numeral("G", "C")
    'V'
    >>> roman_numeral("Ab", "C")
    '♭VI'
    >>> roman_numeral("Fm", "C")
    'iv'
    >>> roman_numeral("Xm", "C") is None
    True
    """
    resolved = _as_chord(chord)
    key_pc = note_index(key)
    if resolved is None or key_pc is None:
        return None
    interval = (resolved.root_index - key_pc + 12) % 12
    return ROMAN_NUMERALS[interval][_QUALITY_COLUMN[resolved.quality]]


def is_diatonic_to_major(chord: Chord | str, key: str) -> bool:
    """Check whether a chord is one of the seven chords of a major key.

    Examples
    --------
    >>> is_diatonic_to_major("Am", "C")
    True
    >>> is_diatonic_to_major("Fm", "C")
    False
    """
    resolved = _as_chord(chord)
    if resolved is None or note_index(key) is None:
        return False
    return resolved.symbol in diatonic_symbols(key, IONIAN)


def analyze_progression(chords: Iterable[Chord | str], key: str) -> ProgressionAnalysis:
    """Analyze a chord progression in a major key.

    Chords that cannot be resolved are kept in place with a "?" numeral and
    flagged as borrowed.

    Parameters
    ----------
    chords : Iterable[Chord | str]
        The progression, in order. Repeats are kept.
    key : str
        Tonic of the reference major key.

    Returns
    -------
    ProgressionAnalysis
        One step per chord.

    Examples
    --------
    >>> analyze_progression(["C", "Am", "F", "G"], "C").formula
    'I - vi - IV - V'
    """
    key_name = canonical_note(key) if note_index(key) is not None else key
    steps = []
    for item in chords:
        resolved = _as_chord(item)
        symbol = resolved.symbol if resolved is not None else str(item)
        steps.append(
            ProgressionStep(
                symbol=symbol,
                roman_numeral=roman_numeral(resolved, key) if resolved is not None else None,
                is_diatonic=is_diatonic_to_major(resolved, key) if resolved is not None else False,
            )
        )
    return ProgressionAnalysis(key=key_name, steps=tuple(steps))
