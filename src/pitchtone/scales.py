"""Major and minor scales built from a root note."""

from dataclasses import dataclass
from enum import Enum

from .errors import ParseError
from .notes import NoteWithOctave


class ScaleType(Enum):
    MAJOR = "Major"
    MINOR = "Minor"

    @property
    def intervals(self) -> list[int]:
        """Semitones above the root for each scale degree."""
        return list(_INTERVALS[self])

    @classmethod
    def parse(cls, text: str) -> "ScaleType":
        """Parse 'major'/'maj' or 'minor'/'min' (case-insensitive)."""
        try:
            return _ALIASES[text.strip().lower()]
        except KeyError:
            raise ParseError(f"Invalid scale type: {text}") from None

    def __str__(self) -> str:
        return self.value


_INTERVALS = {
    ScaleType.MAJOR: (0, 2, 4, 5, 7, 9, 11),
    ScaleType.MINOR: (0, 2, 3, 5, 7, 8, 10),
}

_ALIASES = {
    "major": ScaleType.MAJOR,
    "maj": ScaleType.MAJOR,
    "minor": ScaleType.MINOR,
    "min": ScaleType.MINOR,
}


@dataclass(frozen=True)
class Scale:
    root: NoteWithOctave
    scale_type: ScaleType = ScaleType.MAJOR

    def notes(self) -> list[NoteWithOctave]:
        """The seven notes of the scale, ascending from the root."""
        return [self.root.transpose(interval) for interval in self.scale_type.intervals]

    def __str__(self) -> str:
        return f"{self.root} {self.scale_type}"
