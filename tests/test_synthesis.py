import numpy as np
import pytest
import soundfile as sf

from modal_harmony import Chord, ChordLookupError, ChordQuality, frequency
from modal_harmony.synthesis import (
    ATTACK_TIME,
    FLOOR_GAIN,
    NOTE_DURATION,
    PEAK_GAIN,
    Envelope,
    ToneEvent,
    render,
    render_chord,
    synthesize,
    write_wav,
)


class TestEnvelope:
    def test_policy_constants(self):
        assert (ATTACK_TIME, PEAK_GAIN, FLOOR_GAIN, NOTE_DURATION) == (0.05, 0.15, 0.01, 1.2)

    def test_starts_silent(self):
        assert Envelope().gain_at(0.0) == 0.0

    def test_peak_at_end_of_attack(self):
        assert Envelope().gain_at(ATTACK_TIME) == pytest.approx(PEAK_GAIN)

    def test_linear_attack(self):
        assert Envelope().gain_at(ATTACK_TIME / 2) == pytest.approx(PEAK_GAIN / 2)

    def test_floor_at_end(self):
        assert Envelope().gain_at(NOTE_DURATION) == pytest.approx(FLOOR_GAIN)

    def test_exponential_decay_midpoint(self):
        midpoint = (ATTACK_TIME + NOTE_DURATION) / 2
        expected = PEAK_GAIN * (FLOOR_GAIN / PEAK_GAIN) ** 0.5
        assert Envelope().gain_at(midpoint) == pytest.approx(expected)

    def test_floor_survives_rounding_at_end(self):
        assert Envelope().gain_at(NOTE_DURATION + 1e-12) == pytest.approx(FLOOR_GAIN)

    def test_silent_outside_span(self):
        env = Envelope()
        assert env.gain_at(-0.1) == 0.0
        assert env.gain_at(NOTE_DURATION + 0.1) == 0.0

    def test_rises_then_falls(self):
        times = np.linspace(0.0, NOTE_DURATION, 2401)
        gains = Envelope().gain_at(times)
        peak = int(np.argmax(gains))
        assert times[peak] == pytest.approx(ATTACK_TIME, abs=1e-3)
        assert np.all(np.diff(gains[: peak + 1]) >= 0)
        assert np.all(np.diff(gains[peak:]) <= 0)

    def test_breakpoints(self):
        assert Envelope().breakpoints() == (
            (0.0, 0.0, "set"),
            (0.05, 0.15, "linear"),
            (1.2, 0.01, "exponential"),
        )

    def test_attack_must_fit(self):
        with pytest.raises(ValueError, match="Attack must lie inside"):
            Envelope(attack=2.0, duration=1.0)

    def test_floor_must_be_positive(self):
        with pytest.raises(ValueError, match="positive"):
            Envelope(floor=0.0)


class TestSynthesize:
    def test_three_events_in_triad_order(self):
        events = synthesize(Chord("C", ChordQuality.MAJOR))
        assert [e.note for e in events] == ["C", "E", "G"]

    def test_root_one_octave_below(self):
        root, third, fifth = synthesize("C")
        assert (root.octave, third.octave, fifth.octave) == (3, 4, 4)
        assert root.frequency == frequency("C", 4) / 2
        assert third.frequency == frequency("E", 4)
        assert fifth.frequency == frequency("G", 4)

    def test_shared_onset_and_duration(self):
        events = synthesize("Am", onset=2.5)
        assert {e.onset for e in events} == {2.5}
        assert {e.duration for e in events} == {NOTE_DURATION}
        assert all(e.end == pytest.approx(3.7) for e in events)

    def test_sine_waveform(self):
        assert {e.waveform for e in synthesize("B°")} == {"sine"}

    def test_envelope_relative_to_onset(self):
        event = synthesize("C", onset=1.0)[0]
        assert event.gain_at(1.0) == 0.0
        assert event.gain_at(1.0 + ATTACK_TIME) == pytest.approx(PEAK_GAIN)
        assert event.gain_at(1.0 + NOTE_DURATION) == pytest.approx(FLOOR_GAIN)

    @pytest.mark.parametrize("onset", [0.1, 0.7, 1.0, 2.5, 10.3])
    def test_floor_at_event_end(self, onset):
        for event in synthesize("Am", onset=onset):
            assert event.gain_at(event.end) == pytest.approx(FLOOR_GAIN)

    def test_malformed_symbol_raises(self):
        with pytest.raises(ChordLookupError):
            synthesize("C9")

    def test_no_shared_state_between_calls(self):
        assert synthesize("G") == synthesize("G")


class TestRender:
    def test_length_covers_events(self):
        samples = render(synthesize("C"), sample_rate=8000)
        assert samples.dtype == np.float32
        assert len(samples) == int(np.ceil(NOTE_DURATION * 8000))

    def test_starts_silent_and_bounded(self):
        samples = render_chord("C", sample_rate=8000)
        assert samples[0] == 0.0
        assert np.max(np.abs(samples)) <= 3 * PEAK_GAIN + 1e-6

    def test_overlapping_events_are_additive(self):
        single = render(synthesize("C"), sample_rate=8000)
        doubled = render(synthesize("C") + synthesize("C"), sample_rate=8000)
        np.testing.assert_allclose(doubled, single * 2, atol=1e-6)

    def test_offset_onset_extends_buffer(self):
        events = synthesize("C") + synthesize("G", onset=0.5)
        samples = render(events, sample_rate=8000)
        assert len(samples) == int(np.ceil((0.5 + NOTE_DURATION) * 8000))

    def test_empty(self):
        assert len(render(())) == 0

    def test_unsupported_waveform(self):
        event = ToneEvent(note="A", octave=4, frequency=440.0, waveform="square")
        with pytest.raises(ValueError, match="Unsupported waveform"):
            render([event])


class TestWriteWav:
    def test_writes_readable_file(self, tmp_path):
        path = write_wav(tmp_path / "c.wav", synthesize("C"), sample_rate=8000)
        data, sample_rate = sf.read(str(path))
        assert sample_rate == 8000
        assert len(data) == int(np.ceil(NOTE_DURATION * 8000))
