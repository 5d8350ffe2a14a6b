# asmhex/utils/settings.py
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

SETTINGS_ENV = "ASMHEX_SETTINGS"
SETTINGS_NAME = "asmhex_settings.json"

def _top_dir() -> Path:
    # checkout root: asmhex/utils/settings.py → two levels above the package
    return Path(__file__).resolve().parents[2]

APP_SETTINGS_FILE = _top_dir() / SETTINGS_NAME

DEFAULT_SETTINGS = {
    # External tools
    "nasm_path": "nasm",
    "objcopy_path": "objcopy",
    "tool_timeout": 120,               # seconds per external call

    # Conversion
    "output_folder": "",               # empty → current directory
    "bits_mode": "64",                 # "16", "32" or "64"
    "auto_insert_bits": True,          # prefix [bits N] when the source has none

    # UI
    "dark_mode": False,
    "last_dir": str(Path.home()),
    "poll_interval_ms": 100,
    # layout persistence:
    # "split_sizes": [...],
}

def settings_path() -> Path:
    if env := os.environ.get(SETTINGS_ENV, "").strip():
        return Path(env)
    return APP_SETTINGS_FILE

def _write(data: dict) -> bool:
    p = settings_path()
    text = json.dumps(data, indent=2)
    try:
        p.write_text(text)
        return True
    except OSError as e:
        # An explicit ASMHEX_SETTINGS path is never redirected elsewhere.
        if os.environ.get(SETTINGS_ENV, "").strip():
            logger.warning("Could not write settings to %s: %s", p, e)
            return False
    try:
        Path(SETTINGS_NAME).write_text(text)
        return True
    except OSError as e:
        logger.warning("Could not write settings to %s or ./%s: %s", p, SETTINGS_NAME, e)
        return False

def load_settings(persist: bool = True) -> dict:
    """
    Settings file merged over DEFAULT_SETTINGS.

    With ``persist`` a missing or broken file is replaced by the defaults;
    the headless CLI passes False and never touches the disk.
    """
    p = settings_path()
    if p.exists():
        try:
            data = json.loads(p.read_text())
            return {**DEFAULT_SETTINGS, **data}
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", p, e)
    if persist:
        _write(DEFAULT_SETTINGS)
    return DEFAULT_SETTINGS.copy()

def save_settings(data: dict) -> bool:
    return _write(data)
