"""Configuration management for eartrainer."""

import copy
import json
import logging

from .paths import config_dir, config_file, ensure_dir

log = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "playback": {
        "note_duration": 1.0,  # seconds, single notes
        "scale_note_duration": 0.5,  # seconds per note when playing scales
        "amplitude": 0.3,
        "sample_rate": 44100,
    },
    "interactive": {
        "demo": None,  # None = ask, True/False = always/never play the demo
        "play": True,  # play each note entered
    },
}


def get_config() -> dict:
    """Load configuration, creating default if needed."""
    ensure_dir(config_dir())
    cfg_file = config_file()

    if cfg_file.exists():
        try:
            with open(cfg_file) as f:
                config = json.load(f)
            # Merge with defaults for any missing keys
            merged = copy.deepcopy(DEFAULT_CONFIG)
            if not isinstance(config, dict):
                log.warning("ignoring config %s: expected an object, got %s", cfg_file, type(config).__name__)
                return merged
            for key, value in config.items():
                if isinstance(merged.get(key), dict):
                    if isinstance(value, dict):
                        merged[key] = {**merged[key], **value}
                    else:
                        log.warning("ignoring config section %r: expected an object, got %r", key, value)
                else:
                    merged[key] = value
            return merged
        except (json.JSONDecodeError, IOError) as e:
            log.warning("ignoring unreadable config %s: %s", cfg_file, e)
            return copy.deepcopy(DEFAULT_CONFIG)
    else:
        save_config(DEFAULT_CONFIG)
        return copy.deepcopy(DEFAULT_CONFIG)


def save_config(config: dict) -> None:
    """Save configuration to file."""
    ensure_dir(config_dir())
    with open(config_file(), "w") as f:
        json.dump(config, f, indent=2)


def get_playback_config() -> dict:
    """Get playback configuration (durations, amplitude, sample rate)."""
    config = get_config()
    return config.get("playback", {})


def get_interactive_config() -> dict:
    """Get interactive-mode configuration."""
    config = get_config()
    return config.get("interactive", {})
