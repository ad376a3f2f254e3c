"""pitchtone - Note/frequency conversion and sine tone playback."""

from .errors import (
    PitchToneError,
    ParseError,
    InvalidFrequencyError,
    AudioDeviceError,
    OctaveRangeError,
    ToneSettingsError,
)
from .notes import (
    PitchClass,
    NoteWithOctave,
    format_note,
    note_to_frequency,
    frequency_to_note,
    semitone_offset,
)
from .parser import parse_note, extract_note_tokens
from .scales import Scale, ScaleType
from .synthesis import (
    SAMPLE_RATE,
    AMPLITUDE,
    sine_wave,
    render_tone,
    samples_to_wav,
)
from .playback import play_tone, play_note, play_scale

__version__ = "0.1.0"
__all__ = [
    "PitchToneError",
    "ParseError",
    "InvalidFrequencyError",
    "AudioDeviceError",
    "OctaveRangeError",
    "ToneSettingsError",
    "PitchClass",
    "NoteWithOctave",
    "parse_note",
    "extract_note_tokens",
    "format_note",
    "note_to_frequency",
    "frequency_to_note",
    "semitone_offset",
    "Scale",
    "ScaleType",
    "SAMPLE_RATE",
    "AMPLITUDE",
    "sine_wave",
    "render_tone",
    "samples_to_wav",
    "play_tone",
    "play_note",
    "play_scale",
]
