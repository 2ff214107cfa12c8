"""Chord synthesis: tone events, envelopes, rendering and playback."""

from modal_harmony.synthesis.engine import render, render_chord, synthesize, write_wav
from modal_harmony.synthesis.models import (
    ATTACK_TIME,
    FLOOR_GAIN,
    NOTE_DURATION,
    PEAK_GAIN,
    ROOT_OCTAVE,
    SAMPLE_RATE,
    UPPER_OCTAVE,
    Envelope,
    ToneEvent,
)
from modal_harmony.synthesis.playback import AudioOutput, ChordPlayer, get_audio_output

__all__ = [
    "ATTACK_TIME",
    "FLOOR_GAIN",
    "NOTE_DURATION",
    "PEAK_GAIN",
    "ROOT_OCTAVE",
    "SAMPLE_RATE",
    "UPPER_OCTAVE",
    "AudioOutput",
    "ChordPlayer",
    "Envelope",
    "ToneEvent",
    "get_audio_output",
    "render",
    "render_chord",
    "synthesize",
    "write_wav",
]
