#!/usr/bin/env python3
"""Unit tests for playback.py - audio output via the platform player."""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from pitchtone.errors import AudioDeviceError, InvalidFrequencyError, ToneSettingsError
from pitchtone.notes import NoteWithOctave, PitchClass, frequency_to_note, note_to_frequency
from pitchtone.playback import (
    get_audio_player,
    play_audio,
    play_note,
    play_samples,
    play_scale,
    play_tone,
)
from pitchtone.scales import Scale, ScaleType


class TestGetAudioPlayer:
    """Tests for get_audio_player function."""

    @patch("pitchtone.playback.platform.system")
    @patch("pitchtone.playback.shutil.which")
    def test_get_audio_player_macos(self, mock_which, mock_system):
        """Test returns afplay on macOS."""
        mock_system.return_value = "Darwin"
        mock_which.return_value = "/usr/bin/afplay"
        assert get_audio_player() == ["afplay"]

    @patch("pitchtone.playback.platform.system")
    @patch("pitchtone.playback.shutil.which")
    def test_get_audio_player_linux_paplay(self, mock_which, mock_system):
        """Test prefers paplay on Linux."""
        mock_system.return_value = "Linux"
        mock_which.return_value = "/usr/bin/paplay"
        assert get_audio_player() == ["paplay"]

    @patch("pitchtone.playback.platform.system")
    @patch("pitchtone.playback.shutil.which")
    def test_get_audio_player_linux_aplay(self, mock_which, mock_system):
        """Test returns aplay on Linux when paplay is missing."""
        mock_system.return_value = "Linux"
        mock_which.side_effect = lambda x: "/usr/bin/aplay" if x == "aplay" else None
        assert get_audio_player() == ["aplay", "-q"]

    @patch("pitchtone.playback.platform.system")
    @patch("pitchtone.playback.shutil.which")
    def test_get_audio_player_linux_ffplay(self, mock_which, mock_system):
        """Test returns ffplay on Linux when others not available."""
        mock_system.return_value = "Linux"
        mock_which.side_effect = lambda x: "/usr/bin/ffplay" if x == "ffplay" else None
        assert get_audio_player() == ["ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"]

    @patch("pitchtone.playback.platform.system")
    @patch("pitchtone.playback.shutil.which")
    def test_get_audio_player_windows(self, mock_which, mock_system):
        """Test returns None on Windows (PowerShell is used instead)."""
        mock_system.return_value = "Windows"
        mock_which.return_value = "C:/Windows/powershell.exe"
        assert get_audio_player() is None

    @patch("pitchtone.playback.platform.system")
    @patch("pitchtone.playback.shutil.which")
    def test_get_audio_player_not_found(self, mock_which, mock_system):
        """Test returns None when no player is installed."""
        mock_system.return_value = "Linux"
        mock_which.return_value = None
        assert get_audio_player() is None

    @patch("pitchtone.playback.platform.system")
    @patch("pitchtone.playback.shutil.which")
    def test_get_audio_player_macos_falls_back_to_ffplay(self, mock_which, mock_system):
        """Test macOS without afplay uses ffplay."""
        mock_system.return_value = "Darwin"
        mock_which.side_effect = lambda x: "/usr/local/bin/ffplay" if x == "ffplay" else None
        assert get_audio_player() == ["ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"]

    @patch("pitchtone.playback.platform.system")
    @patch("pitchtone.playback.shutil.which")
    def test_get_audio_player_windows_without_powershell(self, mock_which, mock_system):
        """Test Windows without PowerShell falls back to ffplay."""
        mock_system.return_value = "Windows"
        mock_which.side_effect = lambda x: "C:/ffmpeg/ffplay.exe" if x == "ffplay" else None
        assert get_audio_player() == ["ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"]

    @patch("pitchtone.playback.platform.system")
    @patch("pitchtone.playback.shutil.which")
    def test_get_audio_player_returns_fresh_list(self, mock_which, mock_system):
        """Test callers can extend the command without changing later results."""
        mock_system.return_value = "Linux"
        mock_which.return_value = "/usr/bin/aplay"
        get_audio_player().append("tone.wav")
        assert get_audio_player() == ["paplay"]


class TestPlayAudio:
    """Tests for play_audio function."""

    def test_play_audio_file_not_found(self, tmp_path):
        with pytest.raises(AudioDeviceError):
            play_audio(tmp_path / "missing.wav")

    @patch("pitchtone.playback.subprocess.run")
    @patch("pitchtone.playback.get_audio_player", return_value=["aplay", "-q"])
    def test_play_audio_success(self, mock_player, mock_run, tmp_path):
        audio = tmp_path / "tone.wav"
        audio.write_bytes(b"RIFF")
        play_audio(audio)
        mock_run.assert_called_once()
        assert mock_run.call_args[0][0] == ["aplay", "-q", str(audio)]

    @patch("pitchtone.playback.subprocess.run")
    @patch("pitchtone.playback.get_audio_player", return_value=["aplay", "-q"])
    def test_play_audio_player_fails(self, mock_player, mock_run, tmp_path):
        """Test a non-zero player exit becomes AudioDeviceError."""
        audio = tmp_path / "tone.wav"
        audio.write_bytes(b"RIFF")
        mock_run.side_effect = subprocess.CalledProcessError(1, "aplay", stderr=b"no soundcards found")
        with pytest.raises(AudioDeviceError, match="no soundcards found"):
            play_audio(audio)

    @patch("pitchtone.playback.subprocess.run", side_effect=FileNotFoundError)
    @patch("pitchtone.playback.get_audio_player", return_value=["paplay"])
    def test_play_audio_player_missing(self, mock_player, mock_run, tmp_path):
        audio = tmp_path / "tone.wav"
        audio.write_bytes(b"RIFF")
        with pytest.raises(AudioDeviceError, match="paplay"):
            play_audio(audio)

    @patch("pitchtone.playback.platform.system", return_value="Linux")
    @patch("pitchtone.playback.get_audio_player", return_value=None)
    def test_play_audio_no_player(self, mock_player, mock_system, tmp_path):
        audio = tmp_path / "tone.wav"
        audio.write_bytes(b"RIFF")
        with pytest.raises(AudioDeviceError, match="No audio player"):
            play_audio(audio)

    @patch("pitchtone.playback.subprocess.run")
    @patch("pitchtone.playback.shutil.which", return_value="powershell")
    @patch("pitchtone.playback.platform.system", return_value="Windows")
    @patch("pitchtone.playback.get_audio_player", return_value=None)
    def test_play_audio_windows_powershell(self, mock_player, mock_system, mock_which, mock_run, tmp_path):
        audio = tmp_path / "tone.wav"
        audio.write_bytes(b"RIFF")
        play_audio(audio)
        cmd = mock_run.call_args[0][0]
        assert cmd[0] == "powershell"
        assert "PlaySync" in cmd[2]


class TestPlaySamples:
    """Tests for play_samples."""

    @patch("pitchtone.playback.play_audio")
    def test_writes_temp_wav_and_removes_it(self, mock_play):
        played = []

        def capture(path):
            assert path.exists()
            assert path.suffix == ".wav"
            played.append(path)

        mock_play.side_effect = capture
        play_samples([0.0, 0.1, -0.1], 8000)

        assert len(played) == 1
        assert not played[0].exists()

    @patch("pitchtone.playback.play_audio", side_effect=AudioDeviceError("busy"))
    def test_removes_temp_wav_on_failure(self, mock_play):
        with pytest.raises(AudioDeviceError):
            play_samples([0.0, 0.1], 8000)
        path = mock_play.call_args[0][0]
        assert not Path(path).exists()


class TestPlayTone:
    """Tests for play_tone and its wrappers."""

    @patch("pitchtone.playback.play_samples")
    def test_play_tone_renders_duration(self, mock_play):
        play_tone(440.0, 0.5, sample_rate=8000)
        samples, rate = mock_play.call_args[0]
        assert len(samples) == 4000
        assert rate == 8000

    @pytest.mark.parametrize("freq", [0.0, -5.0, float("nan")])
    @patch("pitchtone.playback.play_samples")
    def test_play_tone_invalid_frequency(self, mock_play, freq):
        """Test invalid frequencies fail before any audio is produced."""
        with pytest.raises(InvalidFrequencyError):
            play_tone(freq, 1.0)
        mock_play.assert_not_called()

    @patch("pitchtone.playback.play_samples")
    def test_play_tone_invalid_duration(self, mock_play):
        with pytest.raises(InvalidFrequencyError):
            play_tone(440.0, 0)
        mock_play.assert_not_called()

    @patch("pitchtone.playback.play_samples")
    def test_play_tone_invalid_settings(self, mock_play):
        """Test out-of-range amplitude or sample rate never reaches the player."""
        with pytest.raises(ToneSettingsError):
            play_tone(440.0, 0.1, amplitude=5)
        with pytest.raises(ToneSettingsError):
            play_tone(440.0, 0.1, sample_rate=0)
        mock_play.assert_not_called()

    def test_failure_isolation(self):
        """Test conversions still work after a playback failure."""
        with pytest.raises(InvalidFrequencyError):
            play_tone(0.0, 1.0)

        with patch("pitchtone.playback.play_audio", side_effect=AudioDeviceError("no device")):
            with pytest.raises(AudioDeviceError):
                play_tone(440.0, 0.01)

        assert frequency_to_note(440.0) == NoteWithOctave(PitchClass.A, 4)
        assert note_to_frequency(NoteWithOctave(PitchClass.A, 4)) == 440.0

    @patch("pitchtone.playback.play_tone")
    def test_play_note(self, mock_tone):
        play_note(NoteWithOctave(PitchClass.A, 4))
        mock_tone.assert_called_once_with(440.0, 1.0)

    @patch("pitchtone.playback.play_tone")
    def test_play_scale(self, mock_tone):
        """Test every scale note is played in order with the callback."""
        seen = []
        scale = Scale(NoteWithOctave(PitchClass.C, 4), ScaleType.MAJOR)
        play_scale(scale, on_note=seen.append)

        assert [str(n) for n in seen] == ["C4", "D4", "E4", "F4", "G4", "A4", "B4"]
        assert mock_tone.call_count == 7
        assert all(call.args[1] == 0.5 for call in mock_tone.call_args_list)

    @patch("pitchtone.playback.play_tone", side_effect=AudioDeviceError("no device"))
    def test_play_scale_stops_on_failure(self, mock_tone):
        scale = Scale(NoteWithOctave(PitchClass.C, 4), ScaleType.MAJOR)
        with pytest.raises(AudioDeviceError):
            play_scale(scale)
        assert mock_tone.call_count == 1
