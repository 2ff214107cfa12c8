"""Chord symbol parsing and formatting.

Canonical symbols are a sharp-spelled root followed by a quality marker:
"" for major, "m" for minor and "°" for diminished (e.g., "C", "F#m", "B°").
pychord notation (e.g., "Bdim", "Ebmin") is accepted through
:func:`from_pychord` as an alternative ingestion format.
"""

from __future__ import annotations

from modal_harmony.exceptions import ChordLookupError
from modal_harmony.models import Chord, ChordQuality
from modal_harmony.pitch_class import NOTES, note_index

MINOR_MARKER = "m"
DIMINISHED_MARKER = "°"

# Mapping from pychord triad quality names to ChordQuality
PYCHORD_TO_QUALITY: dict[str, ChordQuality] = {
    "": ChordQuality.MAJOR,
    "maj": ChordQuality.MAJOR,
    "M": ChordQuality.MAJOR,
    "m": ChordQuality.MINOR,
    "min": ChordQuality.MINOR,
    "-": ChordQuality.MINOR,
    "dim": ChordQuality.DIMINISHED,
}


def _split_symbol(symbol: str) -> tuple[str, ChordQuality]:
    """Split a canonical symbol into root text and quality."""
    if symbol.endswith(DIMINISHED_MARKER):
        return symbol[: -len(DIMINISHED_MARKER)], ChordQuality.DIMINISHED
    if symbol.endswith(MINOR_MARKER):
        return symbol[: -len(MINOR_MARKER)], ChordQuality.MINOR
    return symbol, ChordQuality.MAJOR


def parse_chord_symbol(symbol: str) -> Chord:
    """Parse a canonical chord symbol into a Chord.

    The quality marker is stripped to recover the root, which must then be a
    known note name. Symbols with misplaced or repeated markers are rejected
    instead of being misclassified.

    Parameters
    ----------
    symbol : str
        Chord symbol (e.g., "C", "Dm", "B°", "Abm").

    Returns
    -------
    Chord
        The parsed triad, root normalized to sharps.

    Raises
    ------
    ChordLookupError
        If the symbol does not name one of the 36 supported triads.

    Examples
    --------
    >>> parse_chord_symbol("F#m")
    Chord(root='F#', quality=<ChordQuality.MINOR: 'min'>)
    >>> parse_chord_symbol("B°").quality
    <ChordQuality.DIMINISHED: 'dim'>
    >>> parse_chord_symbol("Bb").root
    'A#'
    """
    text = symbol.strip() if isinstance(symbol, str) else ""
    root, quality = _split_symbol(text)
    if note_index(root) is None:
        msg = f"Unknown chord symbol: {symbol!r}"
        raise ChordLookupError(msg)
    return Chord(root=root, quality=quality)


def parse_chord(symbol: str) -> Chord | None:
    """Parse a chord symbol, returning None if it cannot be resolved.

    Examples
    --------
    >>> parse_chord("Am").symbol
    'Am'
    >>> parse_chord("Hm") is None
    True
    """
    try:
        return parse_chord_symbol(symbol)
    except ChordLookupError:
        return None


def format_chord(chord: Chord) -> str:
    """Format a Chord as its canonical symbol.

    Examples
    --------
    >>> format_chord(Chord("D", ChordQuality.MINOR))
    'Dm'
    """
    return f"{chord.root}{chord.quality.suffix}"


def triad_notes(chord: Chord | str) -> tuple[str, str, str]:
    """Return the root, third and fifth of a chord.

    Examples
    --------
    >>> triad_notes("C")
    ('C', 'E', 'G')
    >>> triad_notes("B°")
    ('B', 'D', 'F')
    """
    return ensure_chord(chord).notes()


def ensure_chord(chord: Chord | str) -> Chord:
    """Coerce a symbol to a Chord, leaving Chord objects untouched."""
    if isinstance(chord, Chord):
        return chord
    return parse_chord_symbol(chord)


def all_chords() -> tuple[Chord, ...]:
    """All 36 supported triads, root-major order."""
    return tuple(Chord(root, quality) for root in NOTES for quality in ChordQuality)


def list_all_chord_symbols() -> tuple[str, ...]:
    """All 36 canonical symbols, sorted lexicographically.

    Examples
    --------
    >>> list_all_chord_symbols()[:4]
    ('A', 'A#', 'A#m', 'A#°')
    """
    return tuple(sorted(format_chord(chord) for chord in all_chords()))


def from_pychord(chord_str: str) -> Chord:
    """Parse a pychord notation string into a Chord.

    Only plain major, minor and diminished triads are supported; extended,
    altered or slash chords are rejected.

    Parameters
    ----------
    chord_str : str
        Chord in pychord notation (e.g., "Gm", "Bdim", "Ebmin").

    Returns
    -------
    Chord
        The parsed triad.

    Raises
    ------
    ChordLookupError
        If pychord cannot parse the text or it is not a supported triad.

    Examples
    --------
    >>> from_pychord("Bdim").symbol
    'B°'
    >>> from_pychord("Ebm").symbol
    'D#m'
    """
    from pychord import Chord as PyChord

    try:
        pc = PyChord(chord_str)
    except ValueError as e:
        msg = f"Unknown chord symbol: {chord_str!r}"
        raise ChordLookupError(msg) from e

    quality_name = str(pc.quality)
    if pc.on or quality_name not in PYCHORD_TO_QUALITY:
        msg = f"Unsupported chord (triads only): {chord_str!r}"
        raise ChordLookupError(msg)
    return Chord(root=pc.root, quality=PYCHORD_TO_QUALITY[quality_name])


def resolve_chord(text: str) -> Chord | None:
    """Resolve user input as a canonical symbol or pychord notation.

    Returns None if neither reading produces a supported triad.

    Examples
    --------
    >>> resolve_chord("C°").symbol
    'C°'
    >>> resolve_chord("Cdim").symbol
    'C°'
    >>> resolve_chord("Cmaj7") is None
    True
    """
    chord = parse_chord(text)
    if chord is not None:
        return chord
    try:
        return from_pychord(text)
    except ChordLookupError:
        return None
