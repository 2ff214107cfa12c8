import pytest

from modal_harmony import MODES, NOTES, ModeLookupError, generate_diatonic_chords, generate_scale
from modal_harmony.modes import IONIAN, LYDIAN, PHRYGIAN
from modal_harmony.scales import diatonic_symbols, mode_grid


class TestGenerateScale:
    def test_c_major(self):
        assert generate_scale("C", IONIAN) == ("C", "D", "E", "F", "G", "A", "B")

    def test_e_phrygian(self):
        assert generate_scale("E", PHRYGIAN) == ("E", "F", "G", "A", "B", "C", "D")

    def test_mode_by_name(self):
        assert generate_scale("F", "Lydian") == ("F", "G", "A", "B", "C", "D", "E")

    def test_flat_tonic(self):
        assert generate_scale("Bb", IONIAN) == ("A#", "C", "D", "D#", "F", "G", "A")


class TestGenerateDiatonicChords:
    def test_c_ionian_symbols(self):
        chords = generate_diatonic_chords("C", IONIAN)
        assert [c.symbol for c in chords] == ["C", "Dm", "Em", "F", "G", "Am", "B°"]

    def test_c_ionian_numerals(self):
        chords = generate_diatonic_chords("C", IONIAN)
        assert [c.roman_numeral for c in chords] == list(IONIAN.roman_numerals)

    def test_characteristic_flags(self):
        chords = generate_diatonic_chords("C", IONIAN)
        assert [c.degree for c in chords if c.is_characteristic] == [0, 3]

    def test_a_aeolian(self):
        assert diatonic_symbols("A", "Aeolian") == ("Am", "B°", "C", "Dm", "Em", "F", "G")

    def test_f_lydian_characteristic_chords(self):
        chords = generate_diatonic_chords("F", LYDIAN)
        assert [c.symbol for c in chords if c.is_characteristic] == ["G", "B°"]

    def test_unknown_mode_raises(self):
        with pytest.raises(ModeLookupError):
            generate_diatonic_chords("C", "Bebop")

    @pytest.mark.parametrize("tonic", NOTES)
    @pytest.mark.parametrize("mode", MODES, ids=lambda m: m.short_name)
    def test_roots_follow_scale_intervals(self, tonic, mode):
        chords = generate_diatonic_chords(tonic, mode)
        assert len(chords) == 7
        for i, chord in enumerate(chords):
            assert chord.degree == i
            assert chord.chord.root == NOTES[(NOTES.index(tonic) + mode.intervals[i]) % 12]
            assert chord.quality is mode.qualities[i]

    def test_deterministic(self):
        assert generate_diatonic_chords("G", "Dorian") == generate_diatonic_chords("G", "Dorian")


class TestModeGrid:
    def test_one_row_per_mode(self):
        grid = mode_grid("D")
        assert [mode for mode, _ in grid] == list(MODES)
        assert all(len(chords) == 7 for _, chords in grid)

    def test_rows_start_on_tonic(self):
        assert {chords[0].chord.root for _, chords in mode_grid("D")} == {"D"}
