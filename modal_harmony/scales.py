"""Scale and diatonic chord generation for a tonic and mode."""

from __future__ import annotations

from modal_harmony.models import Chord, DiatonicChord, Mode
from modal_harmony.modes import MODES, get_mode
from modal_harmony.pitch_class import NOTES, note_to_pc


def _resolve_mode(mode: Mode | str) -> Mode:
    return mode if isinstance(mode, Mode) else get_mode(mode)


def generate_scale(tonic: str, mode: Mode | str) -> tuple[str, ...]:
    """Generate the seven scale notes of a tonic/mode.

    Examples
    --------
    >>> generate_scale("D", "Dorian")
    ('D', 'E', 'F', 'G', 'A', 'B', 'C')
    """
    tonic_pc = note_to_pc(tonic)
    return tuple(NOTES[(tonic_pc + interval) % 12] for interval in _resolve_mode(mode).intervals)


def generate_diatonic_chords(tonic: str, mode: Mode | str) -> tuple[DiatonicChord, ...]:
    """Generate the seven diatonic triads of a tonic/mode.

    Parameters
    ----------
    tonic : str
        Tonic note name.
    mode : Mode | str
        Catalog mode, or its name.

    Returns
    -------
    tuple[DiatonicChord, ...]
        One chord per scale degree, in degree order.

    Examples
    --------
    >>> [c.symbol for c in generate_diatonic_chords("C", "Ionian")]
    ['C', 'Dm', 'Em', 'F', 'G', 'Am', 'B°']
    """
    resolved = _resolve_mode(mode)
    scale = generate_scale(tonic, resolved)
    return tuple(
        DiatonicChord(
            degree=degree,
            chord=Chord(root=note, quality=resolved.qualities[degree]),
            roman_numeral=resolved.roman_numerals[degree],
            is_characteristic=resolved.is_characteristic(degree),
        )
        for degree, note in enumerate(scale)
    )


def diatonic_symbols(tonic: str, mode: Mode | str) -> tuple[str, ...]:
    """Canonical symbols of the seven diatonic triads."""
    return tuple(chord.symbol for chord in generate_diatonic_chords(tonic, mode))


def mode_grid(tonic: str) -> tuple[tuple[Mode, tuple[DiatonicChord, ...]], ...]:
    """Diatonic chords of every catalog mode on one tonic."""
    return tuple((mode, generate_diatonic_chords(tonic, mode)) for mode in MODES)
