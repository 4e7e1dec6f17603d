"""
Configuration loading and runtime settings.

The configuration file is TOML. It lists the watched roots under
``[[paths]]`` and may carry an optional ``[settings]`` table with
runtime tuning values.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from folder_organizer.config.constants import (
    DEFAULT_BACKOFF_MULTIPLIER,
    DEFAULT_JITTER_SECONDS,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_WAIT_SECONDS,
    DEFAULT_WAIT_SECONDS,
    DEFAULT_WORKERS,
    LOG_LEVELS,
    PARTIAL_SUFFIX,
    WATCHER_TYPE_COPY,
    WATCHER_TYPE_SYNC,
)
from folder_organizer.errors import ConfigError


class WatchMode(Enum):
    """How a root is handled."""

    # Copies completed objects from source to destination, never deletes
    COPY = WATCHER_TYPE_COPY
    # Reconciles both trees once, then mirrors creations and removals
    MIRROR = WATCHER_TYPE_SYNC

    @classmethod
    def from_config(cls, value: Any) -> "WatchMode":
        for mode in cls:
            if mode.value == value:
                return mode
        raise ConfigError(
            f"Unknown watcher_type {value!r} "
            f"(expected {WATCHER_TYPE_SYNC!r} or {WATCHER_TYPE_COPY!r})"
        )


@dataclass(frozen=True)
class WatchedRoot:
    """One configured source/destination pair."""

    source: Path
    destination: Path
    place_in_subfolder: bool
    name: str
    mode: WatchMode


class Settings:
    """Runtime settings manager."""

    def __init__(self):
        """Initialize default settings."""
        self.reset_to_defaults()

    def reset_to_defaults(self):
        """Reset all settings to default values."""
        self._settings = {
            # Completion detection
            "wait_seconds": DEFAULT_WAIT_SECONDS,
            "partial_suffix": PARTIAL_SUFFIX,
            # Retry
            "max_attempts": DEFAULT_MAX_ATTEMPTS,
            "backoff_multiplier": DEFAULT_BACKOFF_MULTIPLIER,
            "max_wait_seconds": DEFAULT_MAX_WAIT_SECONDS,
            "jitter_seconds": DEFAULT_JITTER_SECONDS,
            # Performance
            "workers": DEFAULT_WORKERS,
            # Output
            "log_level": DEFAULT_LOG_LEVEL,
        }

    def get(self, key: str, default: Any = None) -> Any:
        """Get a setting value."""
        return self._settings.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Set a setting value."""
        self._settings[key] = value

    def update(self, settings: Dict[str, Any]) -> None:
        """Update multiple settings at once."""
        self._settings.update(settings)

    def to_dict(self) -> Dict[str, Any]:
        """Export settings as dictionary."""
        return self._settings.copy()

    @property
    def wait_seconds(self) -> float:
        return self._settings["wait_seconds"]

    @property
    def partial_suffix(self) -> str:
        return self._settings["partial_suffix"]

    @property
    def max_attempts(self) -> int:
        return self._settings["max_attempts"]

    @property
    def backoff_multiplier(self) -> float:
        return self._settings["backoff_multiplier"]

    @property
    def max_wait_seconds(self) -> float:
        return self._settings["max_wait_seconds"]

    @property
    def jitter_seconds(self) -> float:
        return self._settings["jitter_seconds"]

    @property
    def workers(self) -> int:
        return self._settings["workers"]

    @property
    def log_level(self) -> str:
        return self._settings["log_level"]


@dataclass
class AppConfig:
    """Parsed configuration file."""

    roots: List[WatchedRoot]
    settings: Settings = field(default_factory=Settings)


# Expected type of every [settings] key; ints are accepted for floats
_SETTING_TYPES: Dict[str, Tuple[type, ...]] = {
    "wait_seconds": (int, float),
    "partial_suffix": (str,),
    "max_attempts": (int,),
    "backoff_multiplier": (int, float),
    "max_wait_seconds": (int, float),
    "jitter_seconds": (int, float),
    "workers": (int,),
    "log_level": (str,),
}

_NON_NEGATIVE_SETTINGS = (
    "wait_seconds",
    "max_attempts",
    "backoff_multiplier",
    "max_wait_seconds",
    "jitter_seconds",
)

_ROOT_KEYS = ("source", "destination", "place_in_sub", "name", "watcher_type")


def load_config(filepath: Union[str, Path]) -> AppConfig:
    """Load and validate a configuration file.

    Args:
        filepath: Path to the TOML configuration file.

    Returns:
        The parsed configuration.

    Raises:
        ConfigError: If the file is missing, unreadable or invalid.
    """
    filepath = Path(filepath).expanduser()
    if not filepath.is_file():
        raise ConfigError(f"Config file not found: {filepath}")

    try:
        with open(filepath, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {filepath}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read {filepath}: {e}") from e

    return parse_config(data)


def parse_config(data: Dict[str, Any]) -> AppConfig:
    """Build an AppConfig from already-decoded TOML data.

    Raises:
        ConfigError: If required keys are missing or have the wrong type.
    """
    settings = Settings()
    settings.update(_parse_settings(data.get("settings", {})))

    entries = data.get("paths")
    if not isinstance(entries, list):
        raise ConfigError("Config must contain a [[paths]] array")

    roots = [_parse_root(entry, index) for index, entry in enumerate(entries)]

    seen = set()
    for root in roots:
        if root.name in seen:
            raise ConfigError(f"Duplicate root name: {root.name!r}")
        seen.add(root.name)

    return AppConfig(roots=roots, settings=settings)


def _parse_settings(table: Any) -> Dict[str, Any]:
    if not isinstance(table, dict):
        raise ConfigError("[settings] must be a table")

    parsed = {}
    for key, value in table.items():
        expected = _SETTING_TYPES.get(key)
        if expected is None:
            raise ConfigError(f"Unknown setting: {key!r}")
        # bool is an int subclass, reject it explicitly
        if isinstance(value, bool) or not isinstance(value, expected):
            raise ConfigError(f"Setting {key!r} has invalid value {value!r}")
        parsed[key] = value

    for key in _NON_NEGATIVE_SETTINGS:
        if parsed.get(key, 0) < 0:
            raise ConfigError(f"Setting {key!r} must not be negative")
    if parsed.get("partial_suffix") == "":
        raise ConfigError("Setting 'partial_suffix' must not be empty")
    if "workers" in parsed and parsed["workers"] < 1:
        raise ConfigError("Setting 'workers' must be at least 1")
    if "log_level" in parsed:
        parsed["log_level"] = parsed["log_level"].upper()
        if parsed["log_level"] not in LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {table['log_level']!r}")

    return parsed


def _parse_root(entry: Any, index: int) -> WatchedRoot:
    if not isinstance(entry, dict):
        raise ConfigError(f"paths[{index}] must be a table")

    missing = [key for key in _ROOT_KEYS if key not in entry]
    if missing:
        raise ConfigError(f"paths[{index}] is missing: {', '.join(missing)}")

    for key in ("source", "destination", "name"):
        if not isinstance(entry[key], str) or not entry[key]:
            raise ConfigError(f"paths[{index}].{key} must be a non-empty string")
    if not isinstance(entry["place_in_sub"], bool):
        raise ConfigError(f"paths[{index}].place_in_sub must be a boolean")

    return WatchedRoot(
        source=Path(entry["source"]).expanduser(),
        destination=Path(entry["destination"]).expanduser(),
        place_in_subfolder=entry["place_in_sub"],
        name=entry["name"],
        mode=WatchMode.from_config(entry["watcher_type"]),
    )
