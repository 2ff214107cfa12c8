"""Tone event and envelope models for chord synthesis.

The constants below are playback policy, not derived values: a chord rings
for ``NOTE_DURATION`` seconds, rising linearly to ``PEAK_GAIN`` over
``ATTACK_TIME`` and then decaying exponentially to ``FLOOR_GAIN``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, overload

import numpy as np
from numpy.typing import ArrayLike, NDArray

NOTE_DURATION = 1.2
ATTACK_TIME = 0.05
PEAK_GAIN = 0.15
FLOOR_GAIN = 0.01

# Slack on the envelope end so onset arithmetic cannot cut off the final floor gain
END_TOLERANCE = 1e-9

# Root in the bass register, third and fifth an octave above
ROOT_OCTAVE = 3
UPPER_OCTAVE = 4

WAVEFORM = "sine"
SAMPLE_RATE = 44100

RampKind = Literal["set", "linear", "exponential"]


@dataclass(frozen=True)
class Envelope:
    """Attack/decay amplitude envelope.

    Gain is 0 at time 0, rises linearly to ``peak`` at ``attack``, then
    decays exponentially to ``floor`` at ``duration``. Outside
    ``[0, duration]`` the gain is 0.

    Parameters
    ----------
    attack : float
        Attack time in seconds.
    peak : float
        Peak gain reached at the end of the attack.
    floor : float
        Gain reached at the end of the decay. Must be positive.
    duration : float
        Total envelope length in seconds.
    """

    attack: float = ATTACK_TIME
    peak: float = PEAK_GAIN
    floor: float = FLOOR_GAIN
    duration: float = NOTE_DURATION

    def __post_init__(self) -> None:
        if not 0 < self.attack < self.duration:
            msg = f"Attack must lie inside the envelope: attack={self.attack}, duration={self.duration}"
            raise ValueError(msg)
        if self.peak <= 0 or self.floor <= 0:
            msg = "Exponential decay needs positive peak and floor gains"
            raise ValueError(msg)

    @overload
    def gain_at(self, t: float) -> float: ...

    @overload
    def gain_at(self, t: NDArray[np.float64]) -> NDArray[np.float64]: ...

    def gain_at(self, t: float | ArrayLike) -> float | NDArray[np.float64]:
        """Evaluate the envelope at time(s) relative to its start.

        Examples
        --------
        >>> env = Envelope()
        >>> env.gain_at(0.0), env.gain_at(0.05)
        (0.0, 0.15)
        """
        times = np.asarray(t, dtype=np.float64)
        attack_gain = self.peak * times / self.attack
        progress = np.clip((times - self.attack) / (self.duration - self.attack), 0.0, 1.0)
        decay_gain = self.peak * (self.floor / self.peak) ** progress
        gain = np.where(times < self.attack, attack_gain, decay_gain)
        gain = np.where((times < 0) | (times > self.duration + END_TOLERANCE), 0.0, gain)
        if gain.ndim == 0:
            return float(gain)
        return gain

    def breakpoints(self) -> tuple[tuple[float, float, RampKind], ...]:
        """Ramp schedule as (time, gain, ramp kind) for scheduling backends."""
        return (
            (0.0, 0.0, "set"),
            (self.attack, self.peak, "linear"),
            (self.duration, self.floor, "exponential"),
        )


@dataclass(frozen=True)
class ToneEvent:
    """A single scheduled tone.

    Parameters
    ----------
    note : str
        Note name.
    octave : int
        Octave the note sounds in.
    frequency : float
        Frequency in Hz.
    onset : float
        Start time in seconds.
    duration : float
        Length in seconds.
    envelope : Envelope
        Amplitude envelope, relative to the onset.
    waveform : str
        Oscillator shape.
    """

    note: str
    octave: int
    frequency: float
    onset: float = 0.0
    duration: float = NOTE_DURATION
    envelope: Envelope = field(default_factory=Envelope)
    waveform: str = WAVEFORM

    @property
    def end(self) -> float:
        """Stop time in seconds."""
        return self.onset + self.duration

    def gain_at(self, t: float) -> float:
        """Envelope gain at absolute time ``t``."""
        return self.envelope.gain_at(t - self.onset)
