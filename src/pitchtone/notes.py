"""Pitch classes, notes with octave, and equal-temperament conversion."""

import math
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidFrequencyError, OctaveRangeError, ParseError

# Reference pitch: A4 = 440 Hz
REFERENCE_FREQUENCY = 440.0
REFERENCE_OCTAVE = 4
DEFAULT_OCTAVE = 4
SEMITONES_PER_OCTAVE = 12
# Octaves whose frequencies stay finite and positive as floats
MIN_OCTAVE = -1000
MAX_OCTAVE = 1000


class PitchClass(Enum):
    """The 12 chromatic pitch classes, valued by semitones above C."""

    C = 0
    C_SHARP = 1
    D = 2
    D_SHARP = 3
    E = 4
    F = 5
    F_SHARP = 6
    G = 7
    G_SHARP = 8
    A = 9
    A_SHARP = 10
    B = 11

    @property
    def semitone(self) -> int:
        return self.value

    @property
    def name_str(self) -> str:
        """Canonical spelling, sharps only (e.g. 'C#')."""
        return _CANONICAL_NAMES[self.value]

    @classmethod
    def from_semitone(cls, semitone: int) -> "PitchClass":
        """Pitch class for a semitone count above C, wrapping every octave."""
        return cls(semitone % SEMITONES_PER_OCTAVE)

    @classmethod
    def from_name(cls, name: str) -> "PitchClass":
        """Look up a pitch class by spelling, e.g. 'C#', 'db', 'A'.

        Only the 5 sharps and 5 flats that fall on a black key are accepted,
        so 'Cb', 'Fb', 'E#' and 'B#' raise ParseError.
        """
        if not name:
            raise ParseError("Empty note name")
        key = name[0].upper() + name[1:]
        try:
            return _NAME_LOOKUP[key]
        except KeyError:
            raise ParseError(f"Invalid note: {name}") from None

    def __str__(self) -> str:
        return self.name_str


_CANONICAL_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

_NAME_LOOKUP = {
    # Naturals and sharps
    **{spelling: PitchClass(i) for i, spelling in enumerate(_CANONICAL_NAMES)},
    # Flats (enharmonic equivalents)
    "Db": PitchClass.C_SHARP,
    "Eb": PitchClass.D_SHARP,
    "Gb": PitchClass.F_SHARP,
    "Ab": PitchClass.G_SHARP,
    "Bb": PitchClass.A_SHARP,
}


@dataclass(frozen=True)
class NoteWithOctave:
    """A specific pitch, e.g. A in octave 4."""

    pitch_class: PitchClass
    octave: int = DEFAULT_OCTAVE

    def __post_init__(self):
        if not MIN_OCTAVE <= self.octave <= MAX_OCTAVE:
            raise OctaveRangeError(
                f"Octave {self.octave} out of range ({MIN_OCTAVE} to {MAX_OCTAVE})"
            )

    @classmethod
    def parse(cls, text: str) -> "NoteWithOctave":
        from .parser import parse_note
        return parse_note(text)

    @property
    def semitones_from_a4(self) -> int:
        """Signed semitone distance from A4."""
        return (
            (self.octave - REFERENCE_OCTAVE) * SEMITONES_PER_OCTAVE
            + self.pitch_class.semitone
            - PitchClass.A.semitone
        )

    @property
    def frequency(self) -> float:
        return note_to_frequency(self)

    @property
    def midi_number(self) -> int:
        """MIDI note number (A4 = 69)."""
        return self.semitones_from_a4 + 69

    def transpose(self, semitones: int) -> "NoteWithOctave":
        """Return the note `semitones` above (or below, if negative) this one."""
        return note_from_offset(self.semitones_from_a4 + semitones)

    def __str__(self) -> str:
        return format_note(self)


def semitone_offset(note: NoteWithOctave) -> int:
    """Signed semitone distance of `note` from A4."""
    return note.semitones_from_a4


def note_from_offset(offset: int) -> NoteWithOctave:
    """Rebuild a note from its signed semitone distance from A4.

    Raises OctaveRangeError if the note lands outside MIN_OCTAVE..MAX_OCTAVE.
    """
    # Count from C4 so floor division yields the octave directly
    from_c4 = offset + PitchClass.A.semitone
    octave = REFERENCE_OCTAVE + from_c4 // SEMITONES_PER_OCTAVE
    return NoteWithOctave(PitchClass.from_semitone(from_c4), octave)


def format_note(note: NoteWithOctave) -> str:
    """Render a note as e.g. 'A#3' (sharps only)."""
    return f"{note.pitch_class.name_str}{note.octave}"


def note_to_frequency(note: NoteWithOctave) -> float:
    """Frequency in Hz of `note` in 12-TET with A4 = 440 Hz.

    Always a finite positive float, since octaves are bounded on construction.
    Examples: A4=440.0, C4=261.63, A5=880.0
    """
    return REFERENCE_FREQUENCY * (2.0 ** (note.semitones_from_a4 / 12.0))


def validate_frequency(frequency: float) -> float:
    """Return `frequency` as a float, or raise InvalidFrequencyError."""
    try:
        value = float(frequency)
    except (TypeError, ValueError):
        raise InvalidFrequencyError(f"Frequency must be a number, got {frequency!r}") from None
    if not math.isfinite(value):
        raise InvalidFrequencyError(f"Frequency must be finite, got {value}")
    if value <= 0:
        raise InvalidFrequencyError(f"Frequency must be positive, got {value}")
    return value


def frequency_to_note(frequency: float) -> NoteWithOctave:
    """Convert a frequency to the nearest note, snapping to the semitone.

    Raises:
        InvalidFrequencyError: frequency is zero, negative, NaN or infinite,
            or so extreme that its note falls outside MIN_OCTAVE..MAX_OCTAVE
    """
    value = validate_frequency(frequency)
    offset = round(12 * math.log2(value / REFERENCE_FREQUENCY))
    try:
        return note_from_offset(offset)
    except OctaveRangeError as e:
        raise InvalidFrequencyError(f"Frequency {value} Hz is out of range: {e}") from e
