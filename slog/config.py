import os
import platform
from pathlib import Path
from dotenv import dotenv_values, set_key
from slog.errors import ConfigError

APP_NAME = "StreamLogger"
LOG_EXT = "csv"
SETTINGS_FILE = Path.home() / ".slog" / "settings"


def load_settings():
    """Load slog settings from ~/.slog/settings into os.environ.

    Format: KEY=VALUE, one per line, parsed with python-dotenv.
    Variables already present in the environment win over the file.
    """
    if not SETTINGS_FILE.exists():
        return {}

    settings = {}
    for key, value in dotenv_values(SETTINGS_FILE).items():
        if value is None:
            continue
        settings[key] = value
        if key not in os.environ:
            os.environ[key] = value

    return settings


def save_setting(key, value):
    """Save or update a single setting in ~/.slog/settings. Returns the file written."""
    try:
        SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
        SETTINGS_FILE.touch(exist_ok=True)
        set_key(SETTINGS_FILE, key, value, quote_mode="never")
    except OSError as e:
        raise ConfigError(SETTINGS_FILE, e.strerror or str(e))
    os.environ[key] = value
    return SETTINGS_FILE


def log_location():
    """Directory holding the stream logs.

    SLOG_DIR overrides the per-platform application data directory.
    """
    override = os.environ.get("SLOG_DIR")
    if override:
        return Path(override).expanduser()

    system = platform.system()
    if system == "Darwin":
        home = os.environ.get("HOME", "/tmp")
        return Path(home) / "Library" / "Application Support" / APP_NAME
    if system == "Windows":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("TEMP") or "."
        return Path(base) / APP_NAME
    if system == "Linux":
        xdg = os.environ.get("XDG_DATA_HOME")
        if xdg:
            return Path(xdg)
        home = os.environ.get("HOME", "/tmp")
        return Path(home) / ".local" / "share" / APP_NAME
    return Path(".")
