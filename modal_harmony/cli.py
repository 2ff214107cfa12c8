"""Command-line front end for modal-harmony.

Examples:
  modal-harmony modes D
  modal-harmony match C F G
  modal-harmony progression --key C C Ab F G
  modal-harmony render Am -o am.wav
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from modal_harmony.converter import all_chords, resolve_chord
from modal_harmony.exceptions import ModalHarmonyError
from modal_harmony.log import setup_logging
from modal_harmony.matcher import MAX_RESULTS
from modal_harmony.models import Chord, DiatonicChord, MatchReport, ProgressionAnalysis
from modal_harmony.pitch_class import canonical_note, display_name, note_index
from modal_harmony.scales import mode_grid
from modal_harmony.session import ChordSelection, Progression
from modal_harmony.synthesis import NOTE_DURATION, SAMPLE_RATE, ChordPlayer, synthesize, write_wav

logger = logging.getLogger(__name__)

NO_INPUT_MESSAGE = "Select chords to discover possible keys and modes."
NO_MATCHES_MESSAGE = "No matches found. None of these chords appear together in any diatonic scale."

NOTATIONS = {
    "symbol": Chord.__str__,
    "harte": Chord.to_harte,
    "pychord": Chord.to_pychord,
}


class InputError(ModalHarmonyError):
    """Command-line input that does not resolve."""


def _chords(texts: list[str]) -> list[Chord]:
    chords = []
    for text in texts:
        chord = resolve_chord(text)
        if chord is None:
            msg = f"Unknown chord: {text}"
            raise InputError(msg)
        chords.append(chord)
    return chords


def _note(text: str) -> str:
    if note_index(text) is None:
        msg = f"Unknown note: {text}"
        raise InputError(msg)
    return canonical_note(text)


def _spell(chord: DiatonicChord, prefer_flats: bool) -> str:
    return display_name(chord.chord.root, prefer_flats=prefer_flats) + chord.quality.suffix


def _positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        msg = f"must be at least 1, got {value}"
        raise argparse.ArgumentTypeError(msg)
    return value


def format_match_report(report: MatchReport) -> str:
    """Render a matcher report as text."""
    if report.status == "no_input":
        return NO_INPUT_MESSAGE
    if report.status == "no_matches":
        return NO_MATCHES_MESSAGE

    lines = []
    for result in report.results:
        badge = "Perfect match" if result.is_perfect else f"{round(result.match_percentage)}% match"
        lines.append(f"{result.label:<16} {badge}")
        lines.append(f"  {result.mode.description}")
        if result.missing_chords:
            lines.append(f"  Not in scale: {', '.join(result.missing_chords)}")
        if result.is_perfect and result.characteristic_chords:
            lines.append(f"  Uses characteristic chords: {', '.join(result.characteristic_chords)}")
    return "\n".join(lines)


def format_progression(analysis: ProgressionAnalysis) -> str:
    """Render a progression analysis as text."""
    if not analysis.steps:
        return "Select chords and a key to see Roman numeral analysis."
    lines = []
    for step in analysis.steps:
        badge = "  (borrowed)" if step.is_borrowed else ""
        lines.append(f"{step.symbol:<6} {step.display_numeral}{badge}")
    lines.append("")
    lines.append(f"Progression in {analysis.key} major: {analysis.formula}")
    return "\n".join(lines)


def cmd_modes(args: argparse.Namespace) -> int:
    tonic = _note(args.tonic)
    for mode, chords in mode_grid(tonic):
        cells = []
        for chord in chords:
            star = "*" if chord.is_characteristic else ""
            cells.append(f"{_spell(chord, args.flats)}{star}".ljust(6))
        print(f"{mode.short_name:<11} {' '.join(cells).rstrip()}")
    return 0


def cmd_chords(args: argparse.Namespace) -> int:
    chords = sorted(all_chords(), key=lambda chord: chord.symbol)
    print(" ".join(NOTATIONS[args.notation](chord) for chord in chords))
    return 0


def cmd_match(args: argparse.Namespace) -> int:
    selection = ChordSelection()
    for chord in _chords(args.chords):
        selection.add(chord)
    print(format_match_report(selection.analyze(limit=args.limit)))
    return 0


def cmd_progression(args: argparse.Namespace) -> int:
    progression = Progression(_note(args.key))
    for chord in _chords(args.chords):
        progression.append(chord)
    print(format_progression(progression.analyze()))
    return 0


def cmd_play(args: argparse.Namespace) -> int:
    player = ChordPlayer()
    for chord in _chords(args.chords):
        print(chord.symbol)
        handle = player.play(chord)
        if handle is None:
            print("Audio output is unavailable.", file=sys.stderr)
            return 1
        time.sleep(args.gap)
    time.sleep(NOTE_DURATION)
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    events = []
    for index, chord in enumerate(_chords(args.chords)):
        events.extend(synthesize(chord, onset=index * args.gap))
    path = write_wav(args.output, events, sample_rate=args.sample_rate)
    print(f"Wrote output to {path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="modal-harmony",
        description="Explore modes, find keys for chords and analyze progressions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("\n", 1)[1] if __doc__ else None,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    modes = sub.add_parser("modes", help="Show the diatonic chords of every mode on a tonic")
    modes.add_argument("tonic", help="Tonic note (e.g., C, F#, Bb)")
    modes.add_argument("--flats", action="store_true", help="Spell accidentals with flats")
    modes.set_defaults(func=cmd_modes)

    chords = sub.add_parser("chords", help="List every supported chord symbol")
    chords.add_argument(
        "--notation", choices=sorted(NOTATIONS), default="symbol", help="Chord notation (default: %(default)s)"
    )
    chords.set_defaults(func=cmd_chords)

    match = sub.add_parser("match", help="Find keys and modes containing the chords")
    match.add_argument("chords", nargs="+", help="Chord symbols (e.g., C Am F G)")
    match.add_argument("--limit", type=_positive_int, default=MAX_RESULTS, help="Maximum results (default: %(default)s)")
    match.set_defaults(func=cmd_match)

    progression = sub.add_parser("progression", help="Roman numeral analysis in a major key")
    progression.add_argument("chords", nargs="+", help="Chord symbols in order")
    progression.add_argument("-k", "--key", default="C", help="Major key tonic (default: %(default)s)")
    progression.set_defaults(func=cmd_progression)

    play = sub.add_parser("play", help="Play chords through the audio device")
    play.add_argument("chords", nargs="+", help="Chord symbols in order")
    play.add_argument("--gap", type=float, default=0.6, help="Seconds between chords (default: %(default)s)")
    play.set_defaults(func=cmd_play)

    render = sub.add_parser("render", help="Render chords to a WAV file")
    render.add_argument("chords", nargs="+", help="Chord symbols in order")
    render.add_argument("-o", "--output", type=Path, required=True, help="Output WAV file")
    render.add_argument("--gap", type=float, default=0.6, help="Seconds between chords (default: %(default)s)")
    render.add_argument("--sample-rate", type=int, default=SAMPLE_RATE, help="Sample rate (default: %(default)s)")
    render.set_defaults(func=cmd_render)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    logger.debug("Running %s", args.command)

    try:
        return args.func(args)
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
