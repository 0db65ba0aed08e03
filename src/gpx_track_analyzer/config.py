import json
from pathlib import Path

CONFIG_DIR = Path.home() / ".config" / "gpx-track-analyzer"
CONFIG_PATH = CONFIG_DIR / "gpx-track-analyzer.json"
LOCAL_CONFIG_PATH = Path("gpx-track-analyzer.json")

DEFAULTS = {
    "smoothing": 0.0,  # meters; 0 disables smoothing
    "profile_interval": 0.1,  # miles between chart samples
    "loop_tolerance_m": 50.0,
    "fetch_timeout": 30.0,  # seconds
    "cache_size": 50,
    "cache_ttl": 300.0,  # seconds
    "metric": False,
}


def load_config() -> dict:
    """Load configuration from config files.

    Merges config from global and local files:
    1. ~/.config/gpx-track-analyzer/gpx-track-analyzer.json (global, loaded first)
    2. ./gpx-track-analyzer.json (local, overrides global)

    Returns:
        Dict with merged config values, empty dict if no files exist.
    """
    config = {}
    for config_path in [CONFIG_PATH, LOCAL_CONFIG_PATH]:
        if config_path.exists():
            try:
                with config_path.open() as f:
                    config.update(json.load(f))
            except (json.JSONDecodeError, OSError):
                continue
    return config


def get_setting(key: str, config: dict | None = None):
    """Look up a setting, falling back to DEFAULTS."""
    if config is None:
        config = load_config()
    return config.get(key, DEFAULTS[key])
