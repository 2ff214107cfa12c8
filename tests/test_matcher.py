import pytest

from modal_harmony import (
    MAX_RESULTS,
    Chord,
    ChordQuality,
    analyze_selection,
    match_keys_and_modes,
)
from modal_harmony.matcher import score_key
from modal_harmony.modes import IONIAN, MODES


class TestPerfectMatch:
    def test_c_f_g_ranks_c_ionian_first(self):
        best = match_keys_and_modes(["C", "F", "G"])[0]
        assert best.tonic == "C"
        assert best.mode is IONIAN
        assert best.is_perfect
        assert best.match_fraction == 1.0
        assert set(best.characteristic_chords) >= {"C", "F"}
        assert best.missing_chords == ()

    def test_c_f_g_ranking_order(self):
        labels = [r.label for r in match_keys_and_modes(["C", "F", "G"])[:7]]
        # Seven perfect matches: two characteristic chords first, then one, each in generation order
        assert labels == [
            "C Ionian",
            "E Phrygian",
            "G Mixolydian",
            "A Aeolian",
            "D Dorian",
            "F Lydian",
            "B Locrian",
        ]

    def test_partial_matches_follow_perfect(self):
        results = match_keys_and_modes(["C", "F", "G"], limit=None)
        flags = [r.is_perfect for r in results]
        assert flags == sorted(flags, reverse=True)
        assert sum(flags) == 7

    def test_accepts_chord_objects(self):
        selection = [Chord("A", ChordQuality.MINOR), Chord("E", ChordQuality.MINOR)]
        results = match_keys_and_modes(selection)
        assert results[0].matching_chords == ("Am", "Em")


class TestPartialMatch:
    def test_fraction_and_missing(self):
        result = score_key(("C", "F", "F#"), "C", IONIAN)
        assert result is not None
        assert result.matching_chords == ("C", "F")
        assert result.missing_chords == ("F#",)
        assert result.match_fraction == pytest.approx(2 / 3)
        assert result.match_percentage == pytest.approx(200 / 3)
        assert not result.is_perfect

    def test_no_overlap_is_discarded(self):
        assert score_key(("F#",), "C", IONIAN) is None

    def test_fractions_descend_within_partials(self):
        results = match_keys_and_modes(["C", "E", "F#m", "A#"], limit=None)
        partial = [r.match_fraction for r in results if not r.is_perfect]
        assert partial == sorted(partial, reverse=True)

    def test_characteristic_count_breaks_ties(self):
        results = match_keys_and_modes(["C", "Dm", "C#"], limit=None)
        for a, b in zip(results, results[1:]):
            if (a.is_perfect, a.match_fraction) == (b.is_perfect, b.match_fraction):
                assert len(a.characteristic_chords) >= len(b.characteristic_chords)


class TestSelectionHandling:
    def test_empty_selection(self):
        assert match_keys_and_modes([]) == ()

    def test_duplicates_ignored(self):
        assert match_keys_and_modes(["C", "C", "F"]) == match_keys_and_modes(["C", "F"])

    def test_flat_symbols_canonicalized(self):
        results = match_keys_and_modes(["Ab", "Bb", "Eb"])
        assert results[0].matching_chords == ("G#", "A#", "D#")

    def test_selection_order_preserved(self):
        result = match_keys_and_modes(["G", "C"])[0]
        assert result.matching_chords == ("G", "C")

    def test_unknown_symbol_never_matches(self):
        assert match_keys_and_modes(["X"]) == ()

    def test_unknown_symbol_counted_as_missing(self):
        best = match_keys_and_modes(["C", "X"])[0]
        assert best.missing_chords == ("X",)
        assert best.match_fraction == 0.5


class TestCap:
    def test_single_chord_capped_at_twenty(self):
        # C major appears in 21 key/mode combinations
        assert len(match_keys_and_modes(["C"], limit=None)) == 21
        results = match_keys_and_modes(["C"])
        assert len(results) == MAX_RESULTS == 20

    def test_single_chord_ranked_by_characteristic_then_generation(self):
        results = match_keys_and_modes(["C"], limit=None)
        counts = [len(r.characteristic_chords) for r in results]
        assert counts == sorted(counts, reverse=True)
        assert results[0].label == "C Ionian"
        assert results[1].label == "C Mixolydian"

    def test_generation_order_for_ties(self):
        results = match_keys_and_modes(["C"], limit=None)
        order = {(tonic, mode.short_name): i for i, (tonic, mode) in enumerate(
            (t, m) for t in ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B") for m in MODES
        )}
        with_char = [order[(r.tonic, r.mode.short_name)] for r in results if r.characteristic_chords]
        without_char = [order[(r.tonic, r.mode.short_name)] for r in results if not r.characteristic_chords]
        assert with_char == sorted(with_char)
        assert without_char == sorted(without_char)

    def test_custom_limit(self):
        assert len(match_keys_and_modes(["C"], limit=5)) == 5

    @pytest.mark.parametrize("limit", [0, -1])
    def test_limit_below_one_rejected(self, limit):
        with pytest.raises(ValueError, match="at least 1"):
            match_keys_and_modes(["C"], limit=limit)

    def test_report_rejects_zero_limit(self):
        with pytest.raises(ValueError, match="at least 1"):
            analyze_selection(["C"], limit=0)

    def test_report_with_limit_one_is_matched(self):
        report = analyze_selection(["C"], limit=1)
        assert report.status == "matched"
        assert [r.label for r in report.results] == ["C Ionian"]


class TestAnalyzeSelection:
    def test_no_input(self):
        report = analyze_selection([])
        assert report.status == "no_input"
        assert report.results == ()
        assert report.best is None

    def test_no_matches_distinct_from_no_input(self):
        report = analyze_selection(["Nope"])
        assert report.status == "no_matches"
        assert report.results == ()

    def test_matched(self):
        report = analyze_selection(["Am", "Dm", "E"])
        assert report.status == "matched"
        assert report.best is not None
        assert report.best is report.results[0]
