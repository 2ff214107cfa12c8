"""Conversion of chord symbols into tone events and audio buffers."""

from __future__ import annotations

import math
from collections.abc import Sequence
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from modal_harmony.converter import ensure_chord
from modal_harmony.models import Chord
from modal_harmony.pitch_class import frequency
from modal_harmony.synthesis.models import (
    NOTE_DURATION,
    ROOT_OCTAVE,
    SAMPLE_RATE,
    UPPER_OCTAVE,
    WAVEFORM,
    Envelope,
    ToneEvent,
)


def synthesize(chord: Chord | str, onset: float = 0.0) -> tuple[ToneEvent, ...]:
    """Voice a triad as three simultaneous sine tones.

    The root sounds an octave below the third and fifth. All three tones
    share the onset and envelope.

    Parameters
    ----------
    chord : Chord | str
        The chord, or its symbol.
    onset : float
        Start time in seconds.

    Returns
    -------
    tuple[ToneEvent, ...]
        Root, third and fifth, in that order.

    Raises
    ------
    ChordLookupError
        If a symbol cannot be parsed.

    Examples
    --------
    >>> [(e.note, e.octave) for e in synthesize("C")]
    [('C', 3), ('E', 4), ('G', 4)]
    """
    envelope = Envelope(duration=NOTE_DURATION)
    events = []
    for index, note in enumerate(ensure_chord(chord).notes()):
        octave = ROOT_OCTAVE if index == 0 else UPPER_OCTAVE
        events.append(
            ToneEvent(
                note=note,
                octave=octave,
                frequency=frequency(note, octave),
                onset=onset,
                duration=envelope.duration,
                envelope=envelope,
                waveform=WAVEFORM,
            )
        )
    return tuple(events)


def render(events: Sequence[ToneEvent], sample_rate: int = SAMPLE_RATE) -> NDArray[np.float32]:
    """Mix tone events into a mono float32 buffer starting at time 0.

    Overlapping events are summed.

    Parameters
    ----------
    events : Sequence[ToneEvent]
        Events to render. Only sine waveforms are supported.
    sample_rate : int
        Samples per second.

    Returns
    -------
    NDArray[np.float32]
        Samples covering time 0 up to the latest event end.
    """
    if not events:
        return np.zeros(0, dtype=np.float32)

    unsupported = {event.waveform for event in events} - {WAVEFORM}
    if unsupported:
        msg = f"Unsupported waveform(s): {', '.join(sorted(unsupported))}"
        raise ValueError(msg)

    end = max(event.end for event in events)
    times = np.arange(int(math.ceil(end * sample_rate))) / sample_rate
    buffer = np.zeros_like(times)
    for event in events:
        local = times - event.onset
        buffer += np.sin(2 * np.pi * event.frequency * local) * event.envelope.gain_at(local)
    return buffer.astype(np.float32)


def render_chord(chord: Chord | str, sample_rate: int = SAMPLE_RATE) -> NDArray[np.float32]:
    """Synthesize and render a chord in one step."""
    return render(synthesize(chord), sample_rate=sample_rate)


def write_wav(path: str | Path, events: Sequence[ToneEvent], sample_rate: int = SAMPLE_RATE) -> Path:
    """Render tone events and write them to a WAV file.

    Returns
    -------
    Path
        The written file.
    """
    import soundfile as sf

    target = Path(path)
    sf.write(str(target), render(events, sample_rate=sample_rate), sample_rate, subtype="PCM_16")
    return target
