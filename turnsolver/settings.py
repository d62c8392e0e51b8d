"""
Settings Module for turnsolver

Provides persistent storage for bot tuning parameters using JSON.
Settings are stored in config.json in the working directory unless
another path is given.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "first_turn_time_ms": 500,
    "turn_time_ms": 50,
    "solutions_count_to_log": 3,
    "pipeline": "hill_climbing",
    "base_solver_time_fraction": 0.1,
    "greedy_fraction": 0.1,
    "seed": None,
    "log_level": "INFO",
}

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file (defaults to SETTINGS_FILE)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError(f"expected a JSON object, got {type(settings).__name__}")

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to SETTINGS_FILE)
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def resolve_log_level(name: Any) -> int:
    """
    Map a log_level setting to a logging level number.

    Args:
        name: Level name such as "debug" or "WARNING", or a level number

    Returns:
        The level number, logging.INFO for anything that is not a level
    """
    if isinstance(name, int) and not isinstance(name, bool):
        return name
    level = logging.getLevelName(str(name).upper())
    if not isinstance(level, int):
        logger.warning(f"Unknown log level {name!r}, using INFO")
        return logging.INFO
    return level


def configure_logging(settings: Optional[Dict[str, Any]] = None) -> None:
    """
    Configure root logging for a bot process.

    Diagnostics go to stderr; stdout is left to the game protocol.

    Args:
        settings: Settings dictionary (log_level key), defaults if None
    """
    settings = settings or DEFAULT_SETTINGS
    level = resolve_log_level(settings.get("log_level", "INFO"))
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
