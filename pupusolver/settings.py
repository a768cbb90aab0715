"""
Solver settings stored as JSON.

The settings file holds the search options the CLI falls back to when a
flag is not given: strategy, state cap, timeout, worker threads and
progress interval. Values of the wrong type are replaced by defaults.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple, Union

logger = logging.getLogger(__name__)

SETTINGS_FILE = Path("config.json")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "strategy_name": "bfs",
    "max_states": None,
    "timeout_sec": None,
    "workers": 4,
    "progress_interval": 100000,
}

# Accepted value types per key
SETTING_TYPES: Dict[str, Tuple[type, ...]] = {
    "debug_enabled": (bool,),
    "strategy_name": (str,),
    "max_states": (int, type(None)),
    "timeout_sec": (int, float, type(None)),
    "workers": (int,),
    "progress_interval": (int,),
}


def _checked(raw: Mapping[str, Any], source: Path) -> Dict[str, Any]:
    """Overlay the valid entries of raw on the defaults."""
    settings = DEFAULT_SETTINGS.copy()
    for key, value in raw.items():
        if key not in SETTING_TYPES:
            logger.warning(f"{source}: ignoring unknown setting '{key}'")
        elif isinstance(value, bool) and bool not in SETTING_TYPES[key]:
            logger.warning(f"{source}: '{key}' must not be a boolean, keeping {settings[key]!r}")
        elif not isinstance(value, SETTING_TYPES[key]):
            logger.warning(f"{source}: '{key}' has invalid value {value!r}, keeping {settings[key]!r}")
        else:
            settings[key] = value
    return settings


def load_settings(path: Union[str, Path] = SETTINGS_FILE) -> Dict[str, Any]:
    """
    Read the settings file.

    A missing file is normal and yields the defaults silently. An
    unreadable or malformed file yields the defaults with a warning.

    Args:
        path: Settings file, config.json in the working directory by default

    Returns:
        A new dictionary with every key of DEFAULT_SETTINGS
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No settings file at {path}")
        return DEFAULT_SETTINGS.copy()

    try:
        raw = json.loads(path.read_text(encoding='utf-8'))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring settings file {path}: {e}")
        return DEFAULT_SETTINGS.copy()

    if not isinstance(raw, dict):
        logger.warning(f"Ignoring settings file {path}: expected a JSON object")
        return DEFAULT_SETTINGS.copy()

    settings = _checked(raw, path)
    logger.debug(f"Settings from {path}: {settings}")
    return settings


def save_settings(settings: Mapping[str, Any], path: Union[str, Path] = SETTINGS_FILE) -> None:
    """
    Write the known keys of settings to the settings file.

    Write errors are logged, not raised.
    """
    known = {key: value for key, value in settings.items() if key in SETTING_TYPES}
    try:
        Path(path).write_text(json.dumps(known, indent=2) + "\n", encoding='utf-8')
    except OSError as e:
        logger.error(f"Cannot write settings file {path}: {e}")
        return
    logger.debug(f"Settings written to {path}: {known}")
