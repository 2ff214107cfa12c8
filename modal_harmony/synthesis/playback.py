"""Audio output for chord playback.

The output device is acquired lazily on first use and kept for the life of
the process. Playback is fire-and-forget: ``ChordPlayer.play`` returns as
soon as the buffer is queued and every chord rings out on its own.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import numpy as np
from numpy.typing import NDArray

from modal_harmony.converter import resolve_chord
from modal_harmony.exceptions import AudioUnavailableError
from modal_harmony.models import Chord
from modal_harmony.synthesis.engine import render, synthesize
from modal_harmony.synthesis.models import SAMPLE_RATE

logger = logging.getLogger(__name__)

_audio_output: AudioOutput | None = None


def to_pcm16(samples: NDArray[np.float32]) -> NDArray[np.int16]:
    """Convert float samples in [-1, 1] to 16-bit PCM."""
    return (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)


class AudioOutput:
    """Mono 16-bit output through simpleaudio.

    Parameters
    ----------
    backend : module
        The imported ``simpleaudio`` module.
    sample_rate : int
        Samples per second.
    """

    def __init__(self, backend: Any, sample_rate: int = SAMPLE_RATE) -> None:
        self.backend = backend
        self.sample_rate = sample_rate

    def play(self, samples: NDArray[np.float32]) -> Any:
        """Queue a buffer for playback and return the backend's play handle.

        Raises
        ------
        AudioUnavailableError
            If the device rejects the buffer.
        """
        try:
            return self.backend.play_buffer(to_pcm16(samples), 1, 2, self.sample_rate)
        except Exception as e:  # simpleaudio raises its own error type per platform
            msg = f"Audio device unavailable: {e}"
            raise AudioUnavailableError(msg) from e


def get_audio_output() -> AudioOutput:
    """Return the process-wide audio output, acquiring it on first call.

    Raises
    ------
    AudioUnavailableError
        If no audio backend can be loaded.
    """
    global _audio_output
    if _audio_output is None:
        try:
            import simpleaudio
        except ImportError as e:
            msg = "Audio playback needs the simpleaudio package"
            raise AudioUnavailableError(msg) from e
        _audio_output = AudioOutput(simpleaudio)
        logger.debug("Acquired audio output at %d Hz", _audio_output.sample_rate)
    return _audio_output


class ChordPlayer:
    """Plays chords without blocking the caller.

    If the audio device cannot be acquired, a single warning is logged and
    the player becomes silent; analysis is never affected.

    Parameters
    ----------
    output_factory : Callable[[], AudioOutput]
        Returns the audio output. Defaults to :func:`get_audio_output`.
    """

    def __init__(self, output_factory: Callable[[], AudioOutput] = get_audio_output) -> None:
        self._output_factory = output_factory
        self.available = True

    def play(self, chord: Chord | str) -> Any | None:
        """Start playing a chord.

        Parameters
        ----------
        chord : Chord | str
            The chord, or its symbol. A symbol that does not resolve plays
            nothing.

        Returns
        -------
        Any | None
            The backend play handle, or None when audio is unavailable or
            the symbol is unknown.
        """
        if not self.available:
            return None
        if isinstance(chord, str):
            resolved = resolve_chord(chord)
            if resolved is None:
                logger.debug("Skipping playback of unknown chord %r", chord)
                return None
            chord = resolved
        events = synthesize(chord)
        try:
            output = self._output_factory()
            return output.play(render(events, sample_rate=output.sample_rate))
        except AudioUnavailableError as e:
            self.available = False
            logger.warning("Chord playback disabled: %s", e)
            return None
