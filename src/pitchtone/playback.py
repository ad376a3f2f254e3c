"""Play synthesized tones through the platform's audio player.

Samples are written to a temporary WAV and handed to a command-line player
(afplay, paplay, aplay, ffplay or PowerShell). Playback is synchronous: the
call returns once the player exits, i.e. after the tone has finished.
"""

import logging
import os
import platform
import shutil
import subprocess
import tempfile
from collections.abc import Callable, Iterable
from pathlib import Path

from .errors import AudioDeviceError
from .notes import NoteWithOctave, validate_frequency
from .scales import Scale
from .synthesis import AMPLITUDE, SAMPLE_RATE, render_tone, samples_to_wav, validate_duration

log = logging.getLogger(__name__)

DEFAULT_NOTE_DURATION = 1.0
DEFAULT_SCALE_NOTE_DURATION = 0.5

FFPLAY = ["ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"]

# Preferred players per platform, tried before the ffplay fallback
PLATFORM_PLAYERS = {
    "Darwin": [["afplay"]],
    "Linux": [["paplay"], ["aplay", "-q"]],
}


def get_audio_player() -> list[str] | None:
    """Get the audio player command for this platform, without the file argument.

    Returns None when nothing is installed, and on Windows when PowerShell
    is there to play the file instead.
    """
    system = platform.system()
    if system == "Windows" and shutil.which("powershell"):
        return None

    for command in [*PLATFORM_PLAYERS.get(system, []), FFPLAY]:
        if shutil.which(command[0]):
            return list(command)

    return None


def _player_command(audio_path: Path) -> list[str]:
    player = get_audio_player()
    if player is not None:
        return [*player, str(audio_path)]

    if platform.system() == "Windows" and shutil.which("powershell"):
        ps_cmd = f'(New-Object Media.SoundPlayer "{audio_path}").PlaySync()'
        return ["powershell", "-c", ps_cmd]

    raise AudioDeviceError("No audio player found (tried afplay, paplay, aplay, ffplay)")


def play_audio(audio_path: Path) -> None:
    """Play an audio file, blocking until it finishes.

    Raises:
        AudioDeviceError: file missing, no player, or the player failed
    """
    if not audio_path.exists():
        raise AudioDeviceError(f"Audio file not found: {audio_path}")

    cmd = _player_command(audio_path)
    log.debug("play: %s", " ".join(cmd))

    try:
        subprocess.run(cmd, check=True, capture_output=True)
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode(errors="replace").strip() if e.stderr else ""
        raise AudioDeviceError(
            f"Audio playback failed ({cmd[0]} exited with {e.returncode})" + (f": {stderr}" if stderr else "")
        ) from e
    except FileNotFoundError as e:
        raise AudioDeviceError(f"Audio player not found: {cmd[0]}") from e


def play_samples(samples: Iterable[float], sample_rate: int = SAMPLE_RATE) -> None:
    """Play float samples in [-1, 1] as mono audio, blocking until done."""
    fd, name = tempfile.mkstemp(prefix="pitchtone_", suffix=".wav")
    os.close(fd)
    wav_path = Path(name)
    try:
        samples_to_wav(samples, wav_path, sample_rate)
        play_audio(wav_path)
    finally:
        try:
            wav_path.unlink()
        except OSError:
            pass


def play_tone(
    frequency: float,
    duration: float = DEFAULT_NOTE_DURATION,
    sample_rate: int = SAMPLE_RATE,
    amplitude: float = AMPLITUDE,
) -> None:
    """Play a sine tone of `frequency` Hz for `duration` seconds.

    Raises:
        InvalidFrequencyError: frequency or duration is not positive and finite
        ToneSettingsError: sample rate or amplitude out of range
        AudioDeviceError: no audio output, or the player rejected the tone
    """
    freq = validate_frequency(frequency)
    seconds = validate_duration(duration)
    log.debug("tone: %.2f Hz for %.2fs", freq, seconds)
    play_samples(render_tone(freq, seconds, sample_rate, amplitude), sample_rate)


def play_note(note: NoteWithOctave, duration: float = DEFAULT_NOTE_DURATION, **kwargs) -> None:
    """Play a note for `duration` seconds (1 second by default)."""
    play_tone(note.frequency, duration, **kwargs)


def play_scale(
    scale: Scale,
    note_duration: float = DEFAULT_SCALE_NOTE_DURATION,
    on_note: Callable[[NoteWithOctave], None] | None = None,
    **kwargs,
) -> None:
    """Play each note of a scale in turn, stopping at the first failure.

    Args:
        scale: Scale to play
        note_duration: Seconds per note
        on_note: Called with each note just before it sounds
    """
    for note in scale.notes():
        if on_note is not None:
            on_note(note)
        play_note(note, note_duration, **kwargs)
