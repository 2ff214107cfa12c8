"""Pitch class operations on the fixed 12-tone chromatic space.

Notes are canonically spelled with sharps. Flat names are accepted as input
aliases and normalized to the sharp spelling; they are never used for
equality.
"""

from __future__ import annotations

import math

from modal_harmony.exceptions import NoteLookupError

# Canonical note names, index = pitch class (C=0)
NOTES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

# Display-only flat spellings of the sharp notes
NOTE_ALIASES: dict[str, str] = {
    "C#": "Db",
    "D#": "Eb",
    "F#": "Gb",
    "G#": "Ab",
    "A#": "Bb",
}

# Note name (canonical or flat alias) to pitch class
NOTE_TO_PC: dict[str, int] = {
    **{name: pc for pc, name in enumerate(NOTES)},
    **{flat: NOTES.index(sharp) for sharp, flat in NOTE_ALIASES.items()},
}

REFERENCE_FREQUENCY = 440.0
REFERENCE_PC = 9  # A
REFERENCE_OCTAVE = 4


def note_index(note: str) -> int | None:
    """Return the pitch class of a note, or None if it is not recognized.

    Parameters
    ----------
    note : str
        Note name (e.g., "C", "F#", "Bb").

    Returns
    -------
    int | None
        Pitch class (0-11, where C=0), or None for an unknown name.

    Examples
    --------
    >>> note_index("F#")
    6
    >>> note_index("Bb")
    10
    >>> note_index("H") is None
    True
    """
    return NOTE_TO_PC.get(note)


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11).

    Parameters
    ----------
    note : str
        Note name (e.g., "C", "F#", "Bb").

    Returns
    -------
    int
        Pitch class (0-11, where C=0).

    Raises
    ------
    NoteLookupError
        If the note name is not recognized.
    """
    pc = note_index(note)
    if pc is None:
        msg = f"Unknown note: {note}"
        raise NoteLookupError(msg)
    return pc


def canonical_note(note: str) -> str:
    """Normalize a note name to its sharp spelling.

    Examples
    --------
    >>> canonical_note("Ab")
    'G#'
    >>> canonical_note("E")
    'E'
    """
    return NOTES[note_to_pc(note)]


def display_name(note: str, *, prefer_flats: bool = False) -> str:
    """Spell a note for display, optionally with flats."""
    name = canonical_note(note)
    if prefer_flats:
        return NOTE_ALIASES.get(name, name)
    return name


def transpose_note(note: str, semitones: int) -> str:
    """Transpose a note by a number of semitones.

    Examples
    --------
    >>> transpose_note("C", 2)
    'D'
    >>> transpose_note("C", -1)
    'B'
    """
    return NOTES[(note_to_pc(note) + semitones) % 12]


def frequency(note: str, octave: int = REFERENCE_OCTAVE) -> float:
    """Convert a note and octave to a frequency in Hz (A4 = 440 Hz).

    The octave factor is applied as an exact power of two, so raising the
    octave by one doubles the result exactly.

    Parameters
    ----------
    note : str
        Note name.
    octave : int
        Scientific pitch octave. Not bounds-checked.

    Returns
    -------
    float
        Frequency in Hz.

    Examples
    --------
    >>> frequency("A", 4)
    440.0
    >>> frequency("A", 3)
    220.0
    >>> round(frequency("C", 4), 2)
    261.63
    """
    semitones = note_to_pc(note) - REFERENCE_PC
    within_octave = REFERENCE_FREQUENCY * 2.0 ** (semitones / 12)
    return math.ldexp(within_octave, octave - REFERENCE_OCTAVE)
