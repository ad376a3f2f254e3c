"""Sine tone synthesis."""

import logging
import math
from collections.abc import Iterable, Iterator
from pathlib import Path

import numpy as np
from scipy.io import wavfile

from .errors import InvalidFrequencyError, ToneSettingsError
from .notes import validate_frequency

log = logging.getLogger(__name__)

SAMPLE_RATE = 44100
# 30% of full scale, well clear of clipping
AMPLITUDE = 0.3


def validate_duration(duration: float) -> float:
    """Return `duration` in seconds as a float, or raise InvalidFrequencyError."""
    try:
        value = float(duration)
    except (TypeError, ValueError):
        raise InvalidFrequencyError(f"Duration must be a number, got {duration!r}") from None
    if not math.isfinite(value) or value <= 0:
        raise InvalidFrequencyError(f"Duration must be positive and finite, got {value}")
    return value


def sample_count(duration: float, sample_rate: int = SAMPLE_RATE) -> int:
    """Number of samples in a tone: every i with i / sample_rate < duration."""
    seconds = validate_duration(duration)
    n_samples = math.ceil(seconds * sample_rate)
    # Undo float round-up, e.g. 0.1 * 44100 landing just above 4410
    if n_samples > 0 and (n_samples - 1) / sample_rate >= seconds:
        n_samples -= 1
    return n_samples


def sine_wave(
    frequency: float,
    duration: float,
    sample_rate: int = SAMPLE_RATE,
    amplitude: float = AMPLITUDE,
) -> Iterator[float]:
    """Lazily generate a sine tone.

    sample[i] = amplitude * sin(2 * pi * frequency * i / sample_rate),
    stopping once i / sample_rate >= duration.

    Arguments are validated on call, not on the first next().

    Args:
        frequency: Tone frequency in Hz
        duration: Duration in seconds
        sample_rate: Sample rate in Hz
        amplitude: Peak amplitude in [0, 1]

    Returns:
        A fresh iterator of float samples in [-amplitude, amplitude]
    """
    freq = validate_frequency(frequency)
    if not (math.isfinite(sample_rate) and sample_rate > 0):
        raise ToneSettingsError(f"Sample rate must be positive and finite, got {sample_rate}")
    n_samples = sample_count(duration, sample_rate)
    if not 0 <= amplitude <= 1:
        raise ToneSettingsError(f"Amplitude must be within [0, 1], got {amplitude}")
    return _sine_samples(freq, n_samples, sample_rate, amplitude)


def _sine_samples(freq: float, n_samples: int, sample_rate: int, amplitude: float) -> Iterator[float]:
    step = 2 * math.pi * freq / sample_rate
    for i in range(n_samples):
        yield amplitude * math.sin(step * i)


def render_tone(
    frequency: float,
    duration: float,
    sample_rate: int = SAMPLE_RATE,
    amplitude: float = AMPLITUDE,
) -> np.ndarray:
    """Generate a whole tone into a float32 buffer.

    Same samples as sine_wave(), collected for playback or file output.
    """
    samples = np.fromiter(
        sine_wave(frequency, duration, sample_rate, amplitude),
        dtype=np.float32,
        count=sample_count(duration, sample_rate),
    )
    log.debug("rendered %.2f Hz for %ss: %d samples @ %d Hz", frequency, duration, len(samples), sample_rate)
    return samples


def samples_to_pcm16(samples: Iterable[float]) -> np.ndarray:
    """Convert float samples in [-1, 1] to 16-bit PCM, clipping overs."""
    audio = np.asarray(list(samples), dtype=np.float64)
    audio = np.clip(audio, -1.0, 1.0)
    return (audio * 32767).astype(np.int16)


def samples_to_wav(samples: Iterable[float], path: Path, sample_rate: int = SAMPLE_RATE) -> None:
    """Write samples to a mono 16-bit WAV file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    wavfile.write(str(path), sample_rate, samples_to_pcm16(samples))


def samples_to_bytes(samples: Iterable[float]) -> bytes:
    """Convert samples to raw little-endian 16-bit PCM bytes."""
    return samples_to_pcm16(samples).astype("<i2").tobytes()
