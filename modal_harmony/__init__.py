"""Modal harmony reasoning engine.

This library derives the diatonic triads of the seven modes on any tonic,
finds the keys and modes that contain a set of chords, labels chord
progressions with Roman numerals and voices triads as audible tones.

Examples
--------
>>> from modal_harmony import generate_diatonic_chords, match_keys_and_modes

>>> # Chords of D Dorian
>>> [c.symbol for c in generate_diatonic_chords("D", "Dorian")]
['Dm', 'Em', 'F', 'G', 'Am', 'B°', 'C']

>>> # Which keys contain C, F and G?
>>> match_keys_and_modes(["C", "F", "G"])[0].label
'C Ionian'

>>> # Roman numerals in C major
>>> from modal_harmony import roman_numeral
>>> roman_numeral("Ab", "C")
'♭VI'
"""

import logging

from modal_harmony.converter import (
    format_chord,
    from_pychord,
    list_all_chord_symbols,
    parse_chord,
    parse_chord_symbol,
    resolve_chord,
    triad_notes,
)
from modal_harmony.exceptions import (
    AudioUnavailableError,
    ChordLookupError,
    ModalHarmonyError,
    ModeLookupError,
    NoteLookupError,
)
from modal_harmony.matcher import MAX_RESULTS, analyze_selection, match_keys_and_modes
from modal_harmony.models import (
    Chord,
    ChordQuality,
    DiatonicChord,
    MatchReport,
    MatchResult,
    Mode,
    ProgressionAnalysis,
    ProgressionStep,
)
from modal_harmony.modes import MODES, get_mode
from modal_harmony.pitch_class import NOTE_ALIASES, NOTES, frequency, note_index
from modal_harmony.roman import analyze_progression, is_diatonic_to_major, roman_numeral
from modal_harmony.scales import generate_diatonic_chords, generate_scale
from modal_harmony.session import ChordSelection, Progression
from modal_harmony.synthesis import ChordPlayer, Envelope, ToneEvent, render, synthesize

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "MAX_RESULTS",
    "MODES",
    "NOTES",
    "NOTE_ALIASES",
    "AudioUnavailableError",
    "Chord",
    "ChordLookupError",
    "ChordPlayer",
    "ChordQuality",
    "ChordSelection",
    "DiatonicChord",
    "Envelope",
    "MatchReport",
    "MatchResult",
    "ModalHarmonyError",
    "Mode",
    "ModeLookupError",
    "NoteLookupError",
    "Progression",
    "ProgressionAnalysis",
    "ProgressionStep",
    "ToneEvent",
    "analyze_progression",
    "analyze_selection",
    "format_chord",
    "frequency",
    "from_pychord",
    "generate_diatonic_chords",
    "generate_scale",
    "get_mode",
    "is_diatonic_to_major",
    "list_all_chord_symbols",
    "match_keys_and_modes",
    "note_index",
    "parse_chord",
    "parse_chord_symbol",
    "render",
    "resolve_chord",
    "roman_numeral",
    "synthesize",
    "triad_notes",
]
