"""Error kinds raised by pitchtone."""


class PitchToneError(Exception):
    """Base class for all pitchtone errors."""


class ParseError(PitchToneError, ValueError):
    """A note or scale name could not be parsed."""


class InvalidFrequencyError(PitchToneError, ValueError):
    """A frequency (or duration) is zero, negative, or not finite."""


class AudioDeviceError(PitchToneError, RuntimeError):
    """No audio output is available, or the player rejected the stream."""


class OctaveRangeError(PitchToneError, ValueError):
    """An octave is too far from A4 for its frequency to be a finite positive float."""


class ToneSettingsError(PitchToneError, ValueError):
    """A synthesis setting such as sample rate or amplitude is invalid."""
