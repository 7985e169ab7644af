"""
Settings Module for Puzzle Arcade

Stores default puzzle parameters and driving preferences in a JSON file
(config.json in the working directory) and resolves them into the
initialize() arguments each engine expects.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)

# Settings file location (project root)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "default_puzzle": "queens",
    "queens_size": 8,
    "knight_size": 8,
    "knight_start": [0, 0],
    "knight_ordering": "fixed",
    "hanoi_disks": 5,
    "step_delay_ms": 0,
}


def _sanitize(raw: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge raw values over the defaults, keeping only well-typed keys.

    Unknown keys are carried through untouched; known keys whose type
    differs from the default's are dropped with a warning.
    """
    result = DEFAULT_SETTINGS.copy()
    for key, value in raw.items():
        default = DEFAULT_SETTINGS.get(key)
        if default is not None and type(value) is not type(default):
            logger.warning(f"Ignoring setting {key}={value!r}: expected {type(default).__name__}")
            continue
        result[key] = value
    return result


def load_settings(path: Path = SETTINGS_FILE) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file (defaults to config.json)

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    if not path.exists():
        logger.debug(f"Settings file {path} not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()

    if not isinstance(raw, dict):
        logger.warning(f"Settings file {path} does not hold an object, using defaults")
        return DEFAULT_SETTINGS.copy()

    settings = _sanitize(raw)
    logger.debug(f"Settings loaded: {settings}")
    return settings


def save_settings(settings: Dict[str, Any], path: Path = SETTINGS_FILE) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings dictionary to save
        path: Settings file (defaults to config.json)
    """
    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved to {path}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def puzzle_params(settings: Dict[str, Any], puzzle: str) -> Tuple[Tuple[int, ...], Dict[str, Any]]:
    """
    Resolve the saved defaults for one puzzle.

    Args:
        settings: Loaded settings
        puzzle: "queens", "knight" or "hanoi"

    Returns:
        (initialize() arguments, engine constructor keyword arguments)

    Raises:
        ValueError: If the puzzle name is unknown
    """
    if puzzle == "queens":
        return (settings["queens_size"],), {}
    if puzzle == "knight":
        start_x, start_y = settings["knight_start"]
        return (settings["knight_size"], start_x, start_y), {"ordering": settings["knight_ordering"]}
    if puzzle == "hanoi":
        return (settings["hanoi_disks"],), {}
    raise ValueError(f"No saved parameters for puzzle: {puzzle}")
