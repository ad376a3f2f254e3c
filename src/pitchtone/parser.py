"""Parse musical note names from text."""

import re

from .errors import ParseError
from .notes import DEFAULT_OCTAVE, MAX_OCTAVE, NoteWithOctave, PitchClass

# Letter, optional accidental, then whatever is left (must be an octave)
NOTE_PATTERN = re.compile(r"^([A-Za-z])([#b]?)(.*)$", re.DOTALL)
OCTAVE_PATTERN = re.compile(r"[0-9]+")


def parse_note(text: str) -> NoteWithOctave:
    """Parse a note name like 'A4', 'c#', 'Bb2' into a NoteWithOctave.

    Format: [A-G][#b]?[0-9]*  (letter is case-insensitive, octave defaults to 4)
    Flats are normalized to the equivalent sharp, e.g. 'Db4' -> C#4.

    Raises:
        ParseError: empty text, unknown letter, invalid accidental, trailing
            text that is not an unsigned octave number, or an octave above
            MAX_OCTAVE
    """
    if not text:
        raise ParseError("Empty note")

    match = NOTE_PATTERN.match(text)
    if not match:
        raise ParseError(f"Invalid note letter in {text!r}")

    letter, accidental, rest = match.groups()
    if letter.upper() not in "ABCDEFG":
        raise ParseError(f"Invalid note letter {letter!r} in {text!r} (expected A-G)")

    pitch_class = PitchClass.from_name(letter + accidental)

    if not rest:
        octave = DEFAULT_OCTAVE
    elif OCTAVE_PATTERN.fullmatch(rest):
        try:
            octave = int(rest)
        except ValueError:
            # Past the interpreter's int digit limit
            raise ParseError(f"Octave out of range in {text!r}") from None
    else:
        raise ParseError(f"Invalid octave {rest!r} in {text!r}")

    if octave > MAX_OCTAVE:
        raise ParseError(f"Octave out of range in {text!r} (max {MAX_OCTAVE})")

    return NoteWithOctave(pitch_class, octave)


def extract_note_tokens(text: str) -> tuple[list[NoteWithOctave], list[str]]:
    """Split whitespace-separated text into parsed notes and rejected tokens.

    Example: "C4 E4 x G4" -> ([C4, E4, G4], ["x"])
    """
    notes = []
    rejected = []

    for token in text.split():
        try:
            notes.append(parse_note(token))
        except ParseError:
            rejected.append(token)

    return notes, rejected
