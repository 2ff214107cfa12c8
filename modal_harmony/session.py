"""Selection state owned by a presentation session.

The analysis functions are pure; these objects hold what the user has
picked and pass it to them on demand. Neither offers a bulk clear: members
are removed one at a time.
"""

from __future__ import annotations

from collections.abc import Iterator

from modal_harmony.converter import ensure_chord, parse_chord
from modal_harmony.matcher import MAX_RESULTS, analyze_selection
from modal_harmony.models import Chord, MatchReport, ProgressionAnalysis
from modal_harmony.pitch_class import canonical_note
from modal_harmony.roman import analyze_progression


class ChordSelection:
    """Unordered set of chords toggled on in the key/mode analyzer.

    Iteration follows the order chords were added.

    Examples
    --------
    >>> selection = ChordSelection()
    >>> selection.toggle("C"), selection.toggle("G"), selection.toggle("C")
    (True, True, False)
    >>> selection.symbols()
    ('G',)
    """

    def __init__(self) -> None:
        self._chords: dict[Chord, None] = {}

    def toggle(self, chord: Chord | str) -> bool:
        """Flip a chord's membership. Returns True if it is now selected."""
        resolved = ensure_chord(chord)
        if resolved in self._chords:
            del self._chords[resolved]
            return False
        self._chords[resolved] = None
        return True

    def add(self, chord: Chord | str) -> None:
        self._chords.setdefault(ensure_chord(chord), None)

    def discard(self, chord: Chord | str) -> None:
        self._chords.pop(ensure_chord(chord), None)

    def symbols(self) -> tuple[str, ...]:
        return tuple(chord.symbol for chord in self._chords)

    def analyze(self, *, limit: int | None = MAX_RESULTS) -> MatchReport:
        """Match the current selection against every key and mode."""
        return analyze_selection(self._chords, limit=limit)

    def __contains__(self, chord: object) -> bool:
        if isinstance(chord, str):
            chord = parse_chord(chord)
        return chord in self._chords

    def __iter__(self) -> Iterator[Chord]:
        return iter(tuple(self._chords))

    def __len__(self) -> int:
        return len(self._chords)


class Progression:
    """Ordered chord progression analyzed against a major key.

    Parameters
    ----------
    key : str
        Tonic of the reference major key (default "C").

    Examples
    --------
    >>> progression = Progression("G")
    >>> for symbol in ("G", "Em", "C", "D"):
    ...     progression.append(symbol)
    >>> progression.analyze().formula
    'I - vi - IV - V'
    """

    def __init__(self, key: str = "C") -> None:
        self.key = canonical_note(key)
        self._chords: list[Chord] = []

    def set_key(self, key: str) -> None:
        self.key = canonical_note(key)

    def append(self, chord: Chord | str) -> None:
        """Add a chord at the end. Repeats are allowed."""
        self._chords.append(ensure_chord(chord))

    def remove(self, chord: Chord | str) -> bool:
        """Remove the first occurrence of a chord. Returns False if absent."""
        resolved = ensure_chord(chord)
        if resolved in self._chords:
            self._chords.remove(resolved)
            return True
        return False

    def toggle(self, chord: Chord | str) -> bool:
        """Remove a chord if present, otherwise append it.

        Returns True if the chord was appended.
        """
        if self.remove(chord):
            return False
        self.append(chord)
        return True

    def symbols(self) -> tuple[str, ...]:
        return tuple(chord.symbol for chord in self._chords)

    def analyze(self) -> ProgressionAnalysis:
        return analyze_progression(self._chords, self.key)

    def __contains__(self, chord: object) -> bool:
        if isinstance(chord, str):
            chord = parse_chord(chord)
        return chord in self._chords

    def __iter__(self) -> Iterator[Chord]:
        return iter(tuple(self._chords))

    def __len__(self) -> int:
        return len(self._chords)
