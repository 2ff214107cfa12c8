"""Catalog of the seven diatonic modes.

Each mode is a flat record: scale intervals, the triad quality and Roman
numeral of every degree, and the degrees whose chords set it apart from its
relative modes.
"""

from __future__ import annotations

from modal_harmony.exceptions import ModeLookupError
from modal_harmony.models import ChordQuality, Mode

MAJ = ChordQuality.MAJOR
MIN = ChordQuality.MINOR
DIM = ChordQuality.DIMINISHED

IONIAN = Mode(
    name="Ionian (Major)",
    description="The major scale - bright and stable",
    intervals=(0, 2, 4, 5, 7, 9, 11),
    qualities=(MAJ, MIN, MIN, MAJ, MAJ, MIN, DIM),
    roman_numerals=("I", "ii", "iii", "IV", "V", "vi", "vii°"),
    characteristic_degrees=(0, 3),
)

DORIAN = Mode(
    name="Dorian",
    description="Minor with raised 6th - jazzy and sophisticated",
    intervals=(0, 2, 3, 5, 7, 9, 10),
    qualities=(MIN, MIN, MAJ, MAJ, MIN, DIM, MAJ),
    roman_numerals=("i", "ii", "bIII", "IV", "v", "vi°", "bVII"),
    characteristic_degrees=(1, 3),
)

PHRYGIAN = Mode(
    name="Phrygian",
    description="Minor with lowered 2nd - Spanish/flamenco sound",
    intervals=(0, 1, 3, 5, 7, 8, 10),
    qualities=(MIN, MAJ, MAJ, MIN, DIM, MAJ, MIN),
    roman_numerals=("i", "bII", "bIII", "iv", "v°", "bVI", "bvii"),
    characteristic_degrees=(1, 5),
)

LYDIAN = Mode(
    name="Lydian",
    description="Major with raised 4th - dreamy and floating",
    intervals=(0, 2, 4, 6, 7, 9, 11),
    qualities=(MAJ, MAJ, MIN, DIM, MAJ, MIN, MIN),
    roman_numerals=("I", "II", "iii", "#iv°", "V", "vi", "vii"),
    characteristic_degrees=(1, 3),
)

MIXOLYDIAN = Mode(
    name="Mixolydian",
    description="Major with lowered 7th - bluesy and rock",
    intervals=(0, 2, 4, 5, 7, 9, 10),
    qualities=(MAJ, MIN, DIM, MAJ, MIN, MIN, MAJ),
    roman_numerals=("I", "ii", "iii°", "IV", "v", "vi", "bVII"),
    characteristic_degrees=(0, 6, 4),
)

AEOLIAN = Mode(
    name="Aeolian (Natural Minor)",
    description="The natural minor scale - melancholic and stable",
    intervals=(0, 2, 3, 5, 7, 8, 10),
    qualities=(MIN, DIM, MAJ, MIN, MIN, MAJ, MAJ),
    roman_numerals=("i", "ii°", "bIII", "iv", "v", "bVI", "bVII"),
    characteristic_degrees=(5, 6),
)

LOCRIAN = Mode(
    name="Locrian",
    description="Unstable diminished tonic - dark and tense",
    intervals=(0, 1, 3, 5, 6, 8, 10),
    qualities=(DIM, MAJ, MIN, MIN, MAJ, MAJ, MIN),
    roman_numerals=("i°", "bII", "biii", "iv", "bV", "bVI", "bvii"),
    characteristic_degrees=(0, 4),
)

# Catalog order is significant: it breaks ties between equally ranked matches
MODES: tuple[Mode, ...] = (IONIAN, DORIAN, PHRYGIAN, LYDIAN, MIXOLYDIAN, AEOLIAN, LOCRIAN)


def get_mode(name: str) -> Mode:
    """Look up a mode by full or short name, case-insensitively.

    Parameters
    ----------
    name : str
        Mode name (e.g., "Dorian", "ionian", "Aeolian (Natural Minor)").

    Returns
    -------
    Mode
        The catalog entry.

    Raises
    ------
    ModeLookupError
        If no mode has that name.

    Examples
    --------
    >>> get_mode("aeolian").name
    'Aeolian (Natural Minor)'
    """
    wanted = name.strip().lower()
    for mode in MODES:
        if wanted in (mode.name.lower(), mode.short_name.lower()):
            return mode
    msg = f"Unknown mode: {name}"
    raise ModeLookupError(msg)
