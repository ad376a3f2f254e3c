"""Path management for eartrainer.

All path functions (not constants) so EARTRAINER_DIR is checked at call time.
When EARTRAINER_DIR is set, everything lives under it.
Otherwise, platformdirs determines the OS-appropriate location.
"""

import os
from pathlib import Path

from platformdirs import user_config_dir

_APP_NAME = "eartrainer"


def _override_root() -> Path | None:
    """Return the EARTRAINER_DIR override path, or None."""
    val = os.environ.get("EARTRAINER_DIR")
    return Path(val) if val else None


def config_dir() -> Path:
    """Config directory (config.json)."""
    root = _override_root()
    if root:
        return root / "config"
    return Path(user_config_dir(_APP_NAME))


def config_file() -> Path:
    return config_dir() / "config.json"


def ensure_dir(path: Path) -> Path:
    """Create *path* (and parents) if missing, then return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path
