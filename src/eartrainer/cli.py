#!/usr/bin/env python3
"""eartrainer - Explore note names, frequencies and how they sound."""

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

from pitchtone import (
    NoteWithOctave,
    PitchToneError,
    Scale,
    ScaleType,
    ToneSettingsError,
    extract_note_tokens,
    frequency_to_note,
    parse_note,
    play_note,
    play_scale,
    play_tone,
    render_tone,
    samples_to_wav,
)
from pitchtone.notes import validate_frequency

from .config import get_interactive_config, get_playback_config

log = logging.getLogger(__name__)

QUIT_WORDS = {"q", "quit", "exit"}
DEMO_SCALE = ["C4", "D4", "E4", "F4", "G4", "A4", "B4", "C5"]
DEMO_CHORD = ["C4", "E4", "G4"]
DEMO_FREQUENCIES = [440.0, 523.25, 659.25]  # A4, C5, E5
PROMPT = "Enter a note (e.g. C4, A#3, Bb2) or 'q' to quit:"


def error(message: str) -> None:
    print(f"[ERROR] {message}", file=sys.stderr)


def describe(note: NoteWithOctave) -> str:
    return f"{note} = {note.frequency:.2f} Hz"


def _playback_setting(key: str, default, convert):
    """Read one playback config value, converted with `convert`."""
    value = get_playback_config().get(key, default)
    try:
        return convert(value)
    except (TypeError, ValueError, OverflowError):
        raise ToneSettingsError(f"Invalid playback.{key} in config: {value!r}") from None


def _playback_options() -> dict:
    """Synthesis options from the playback config."""
    return {
        "sample_rate": _playback_setting("sample_rate", 44100, int),
        "amplitude": _playback_setting("amplitude", 0.3, float),
    }


def _note_duration(args: argparse.Namespace) -> float:
    duration = getattr(args, "duration", None)
    if duration is not None:
        return duration
    return _playback_setting("note_duration", 1.0, float)


def _scale_note_duration(args: argparse.Namespace) -> float:
    duration = getattr(args, "duration", None)
    if duration is not None:
        return duration
    return _playback_setting("scale_note_duration", 0.5, float)


def play_demo_scale(duration: float, options: dict) -> None:
    """Play the C major demo scale, reporting (not raising) audio errors."""
    print("Playing C major scale...\n")
    for text in DEMO_SCALE:
        note = parse_note(text)
        print(f"Playing {note} ({note.frequency:.1f} Hz)")
        try:
            play_note(note, duration, **options)
        except PitchToneError as e:
            error(f"Error playing {note}: {e}")
            break
    print("Demo complete!\n")


def handle_line(line: str, play: bool, duration: float, options: dict) -> None:
    """Handle one line of interactive input: parse, describe and play notes."""
    notes, rejected = extract_note_tokens(line)
    for token in rejected:
        error(f"Invalid input: {token!r}. Please enter a valid note (e.g. C4, A#3, Bb2).")

    for note in notes:
        print(describe(note))
        if not play:
            continue
        try:
            print(f"Playing {note}...")
            play_note(note, duration, **options)
        except PitchToneError as e:
            error(f"Error playing {note}: {e}")


def run_interactive(
    stdin: TextIO,
    play: bool = True,
    demo: bool | None = None,
    duration: float = 1.0,
    scale_duration: float = 0.5,
    options: dict | None = None,
) -> int:
    """Read notes from `stdin` until a quit word or EOF. Returns exit code."""
    options = options or {}

    def read(prompt: str) -> str | None:
        print(prompt)
        line = stdin.readline()
        return line if line else None

    print("Music Note Frequency Calculator")
    print("===============================\n")

    if demo is None:
        answer = read("Would you like to hear a C major scale demo? (y/n):")
        demo = answer is not None and answer.strip().lower() == "y"
    if demo and play:
        play_demo_scale(scale_duration, options)

    print("Interactive Mode:")
    while True:
        line = read(f"\n{PROMPT}")
        if line is None:
            break
        text = line.strip()
        if text.lower() in QUIT_WORDS:
            break
        if not text:
            continue
        handle_line(text, play, duration, options)

    print("Goodbye!")
    return 0


def cmd_interactive(args: argparse.Namespace) -> int:
    settings = get_interactive_config()
    demo = args.demo if args.demo is not None else settings.get("demo")
    play = settings.get("play", True) and not args.no_play
    log.debug("interactive: play=%s demo=%s", play, demo)
    try:
        duration = _note_duration(args)
        scale_duration = _playback_setting("scale_note_duration", 0.5, float)
        options = _playback_options()
    except PitchToneError as e:
        error(str(e))
        return 1
    return run_interactive(
        sys.stdin,
        play=play,
        demo=demo,
        duration=duration,
        scale_duration=scale_duration,
        options=options,
    )


def cmd_freq(args: argparse.Namespace) -> int:
    status = 0
    for text in args.notes:
        try:
            print(describe(parse_note(text)))
        except PitchToneError as e:
            error(str(e))
            status = 1
    return status


def cmd_note(args: argparse.Namespace) -> int:
    status = 0
    for text in args.frequencies:
        try:
            note = frequency_to_note(text)
        except PitchToneError as e:
            error(str(e))
            status = 1
            continue
        print(f"{float(text):.2f} Hz ~ {describe(note)}")
    return status


def cmd_play(args: argparse.Namespace) -> int:
    try:
        duration = _note_duration(args)
        options = _playback_options()
        notes = [parse_note(text) for text in args.notes]
        for note in notes:
            if not args.quiet:
                print(f"Playing {describe(note)}")
            play_note(note, duration, **options)
    except PitchToneError as e:
        error(str(e))
        return 1
    return 0


def cmd_tone(args: argparse.Namespace) -> int:
    try:
        freq = validate_frequency(args.frequency)
        if not args.quiet:
            print(f"Playing {freq:.2f} Hz (nearest {frequency_to_note(freq)})")
        play_tone(freq, _note_duration(args), **_playback_options())
    except PitchToneError as e:
        error(str(e))
        return 1
    return 0


def cmd_scale(args: argparse.Namespace) -> int:
    try:
        scale = Scale(parse_note(args.root), ScaleType.parse(args.type))
        notes = scale.notes()
    except PitchToneError as e:
        error(str(e))
        return 1

    print(scale)
    if not args.play:
        for note in notes:
            print(f"  {describe(note)}")
        return 0

    try:
        play_scale(
            scale,
            _scale_note_duration(args),
            on_note=lambda note: print(f"  {describe(note)}"),
            **_playback_options(),
        )
    except PitchToneError as e:
        error(str(e))
        return 1
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    """Play single notes, raw frequencies and two scales."""
    try:
        options = _playback_options()
        print("Playing individual notes:")
        for text in DEMO_CHORD:
            note = parse_note(text)
            print(f"  Playing {note} ({note.frequency:.1f} Hz)")
            play_note(note, 0.8, **options)

        print("\nPlaying raw frequencies:")
        for freq in DEMO_FREQUENCIES:
            print(f"  Playing {freq:.1f} Hz")
            play_tone(freq, 0.6, **options)

        for root in ("C4", "F#4"):
            scale = Scale(parse_note(root), ScaleType.MAJOR)
            print(f"\nPlaying {scale} scale:")
            play_scale(scale, 0.5, on_note=lambda note: print(f"  {note}"), **options)
    except PitchToneError as e:
        error(str(e))
        return 1

    print("\nAudio demo complete!")
    return 0


def cmd_wav(args: argparse.Namespace) -> int:
    """Render a note to a WAV file without touching the audio device."""
    output = Path(args.output)
    try:
        options = _playback_options()
        note = parse_note(args.note)
        samples = render_tone(note.frequency, _note_duration(args), **options)
        samples_to_wav(samples, output, options["sample_rate"])
    except PitchToneError as e:
        error(str(e))
        return 1
    except OSError as e:
        error(f"Could not write {output}: {e}")
        return 1

    print(f"Wrote {describe(note)} to {output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="eartrainer",
        description="Convert between note names and frequencies, and hear them",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print debug logging to stderr")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # interactive command
    interactive_parser = subparsers.add_parser("interactive", help="Enter notes at a prompt and hear them")
    demo_group = interactive_parser.add_mutually_exclusive_group()
    demo_group.add_argument("--demo", dest="demo", action="store_true", default=None, help="Play the scale demo first")
    demo_group.add_argument("--no-demo", dest="demo", action="store_false", help="Skip the scale demo")
    interactive_parser.add_argument("--no-play", action="store_true", help="Only print frequencies")
    interactive_parser.add_argument("-d", "--duration", type=float, help="Seconds per note")
    interactive_parser.set_defaults(func=cmd_interactive)

    # freq command
    freq_parser = subparsers.add_parser("freq", help="Print the frequency of notes")
    freq_parser.add_argument("notes", nargs="+", help="Notes such as A4, C#3, Bb2")
    freq_parser.set_defaults(func=cmd_freq)

    # note command
    note_parser = subparsers.add_parser("note", help="Print the nearest note to frequencies")
    note_parser.add_argument("frequencies", nargs="+", help="Frequencies in Hz")
    note_parser.set_defaults(func=cmd_note)

    # play command
    play_parser = subparsers.add_parser("play", help="Play notes")
    play_parser.add_argument("notes", nargs="+", help="Notes such as A4, C#3, Bb2")
    play_parser.add_argument("-d", "--duration", type=float, help="Seconds per note")
    play_parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress messages")
    play_parser.set_defaults(func=cmd_play)

    # tone command
    tone_parser = subparsers.add_parser("tone", help="Play a raw frequency")
    tone_parser.add_argument("frequency", help="Frequency in Hz")
    tone_parser.add_argument("-d", "--duration", type=float, help="Seconds to play")
    tone_parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress messages")
    tone_parser.set_defaults(func=cmd_tone)

    # scale command
    scale_parser = subparsers.add_parser("scale", help="List (and optionally play) a scale")
    scale_parser.add_argument("root", help="Root note, e.g. C4")
    scale_parser.add_argument("-t", "--type", default="major", help="major/maj or minor/min (default: major)")
    scale_parser.add_argument("--play", action="store_true", help="Play the scale")
    scale_parser.add_argument("-d", "--duration", type=float, help="Seconds per note")
    scale_parser.set_defaults(func=cmd_scale)

    # demo command
    demo_parser = subparsers.add_parser("demo", help="Play the audio demo")
    demo_parser.set_defaults(func=cmd_demo)

    # wav command
    wav_parser = subparsers.add_parser("wav", help="Render a note to a WAV file")
    wav_parser.add_argument("note", help="Note such as A4")
    wav_parser.add_argument("-o", "--output", required=True, help="Output WAV path")
    wav_parser.add_argument("-d", "--duration", type=float, help="Seconds to render")
    wav_parser.set_defaults(func=cmd_wav)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
