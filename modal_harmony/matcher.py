"""Key and mode matching for a set of chords.

Every tonic/mode combination (12 x 7 = 84) is scored by how many of the
selected chords are diatonic to it. Results are ranked and capped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from functools import lru_cache

from modal_harmony.converter import parse_chord
from modal_harmony.models import Chord, DiatonicChord, MatchReport, MatchResult, Mode
from modal_harmony.modes import MODES
from modal_harmony.pitch_class import NOTES
from modal_harmony.scales import generate_diatonic_chords

logger = logging.getLogger(__name__)

MAX_RESULTS = 20


@lru_cache(maxsize=1)
def _candidates() -> tuple[tuple[str, Mode, tuple[DiatonicChord, ...]], ...]:
    """All tonic/mode combinations in generation order (tonic outer, mode inner)."""
    return tuple((tonic, mode, generate_diatonic_chords(tonic, mode)) for tonic in NOTES for mode in MODES)


def _normalize_selection(selection: Iterable[Chord | str]) -> tuple[str, ...]:
    """Canonicalize and deduplicate a selection, keeping first-seen order.

    Strings that do not parse are kept verbatim; they can never match.
    """
    symbols: dict[str, None] = {}
    for item in selection:
        if isinstance(item, Chord):
            symbol = item.symbol
        else:
            chord = parse_chord(item)
            symbol = chord.symbol if chord is not None else item
        symbols.setdefault(symbol, None)
    return tuple(symbols)


def _check_limit(limit: int | None) -> None:
    if limit is not None and limit < 1:
        msg = f"Result limit must be at least 1, got {limit}"
        raise ValueError(msg)


def _rank_key(result: MatchResult) -> tuple[bool, float, int]:
    return (not result.is_perfect, -result.match_fraction, -len(result.characteristic_chords))


def score_key(selection: tuple[str, ...], tonic: str, mode: Mode) -> MatchResult | None:
    """Score a normalized selection against one tonic/mode.

    Parameters
    ----------
    selection : tuple[str, ...]
        Canonical, deduplicated chord symbols.
    tonic : str
        Tonic note.
    mode : Mode
        Catalog mode.

    Returns
    -------
    MatchResult | None
        The score, or None if no selected chord is diatonic to the key.
    """
    chords = generate_diatonic_chords(tonic, mode)
    return _score(selection, tonic, mode, chords)


def _score(
    selection: tuple[str, ...], tonic: str, mode: Mode, chords: tuple[DiatonicChord, ...]
) -> MatchResult | None:
    diatonic = {chord.symbol for chord in chords}
    matching = tuple(symbol for symbol in selection if symbol in diatonic)
    if not matching:
        return None
    missing = tuple(symbol for symbol in selection if symbol not in diatonic)
    selected = set(selection)
    return MatchResult(
        tonic=tonic,
        mode=mode,
        matching_chords=matching,
        missing_chords=missing,
        match_fraction=len(matching) / len(selection),
        is_perfect=not missing,
        characteristic_chords=tuple(
            chord.symbol for chord in chords if chord.is_characteristic and chord.symbol in selected
        ),
    )


def match_keys_and_modes(
    selection: Iterable[Chord | str],
    *,
    limit: int | None = MAX_RESULTS,
) -> tuple[MatchResult, ...]:
    """Rank every tonic/mode combination against a chord selection.

    Ranking is perfect matches first, then higher match fraction, then more
    matched characteristic chords. Equal ranks keep generation order: tonics
    in chromatic order from C, modes in catalog order.

    Parameters
    ----------
    selection : Iterable[Chord | str]
        Selected chords or chord symbols. Duplicates are ignored.
    limit : int | None
        Maximum number of results (default 20). None for no cap.

    Returns
    -------
    tuple[MatchResult, ...]
        Ranked results; empty for an empty selection or when nothing matches.

    Raises
    ------
    ValueError
        If ``limit`` is less than 1.

    Examples
    --------
    >>> best = match_keys_and_modes(["C", "F", "G"])[0]
    >>> best.label, best.is_perfect
    ('C Ionian', True)
    """
    _check_limit(limit)
    symbols = _normalize_selection(selection)
    if not symbols:
        return ()

    matches = []
    for tonic, mode, chords in _candidates():
        result = _score(symbols, tonic, mode, chords)
        if result is not None:
            matches.append(result)

    ranked = sorted(matches, key=_rank_key)
    logger.debug("Matched %d of %d key/mode combinations for %s", len(ranked), len(_candidates()), symbols)
    if limit is not None:
        ranked = ranked[:limit]
    return tuple(ranked)


def analyze_selection(
    selection: Iterable[Chord | str],
    *,
    limit: int | None = MAX_RESULTS,
) -> MatchReport:
    """Match a selection and classify the outcome for display.

    Returns
    -------
    MatchReport
        "no_input" for an empty selection, "no_matches" if no key/mode
        contains any of the chords, "matched" with the ranked results
        otherwise.

    Examples
    --------
    >>> analyze_selection([]).status
    'no_input'
    >>> analyze_selection(["C", "F", "G"]).status
    'matched'
    """
    _check_limit(limit)
    symbols = _normalize_selection(selection)
    if not symbols:
        return MatchReport(status="no_input")
    results = match_keys_and_modes(symbols, limit=limit)
    if not results:
        return MatchReport(status="no_matches")
    return MatchReport(status="matched", results=results)
