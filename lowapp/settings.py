"""
LoWAPP Simulator Settings

Handles loading and validation of simulator settings from a TOML file.

These settings describe where node configurations live, not the node
configurations themselves (see lowapp.config).
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import toml

from . import DEFAULT_NODE_SUBDIR


# Default settings path
DEFAULT_SETTINGS_PATH = Path("~/.config/lowapp/settings.toml")

# Environment variable overriding the default settings path
SETTINGS_ENV_VAR = "LOWAPP_SETTINGS"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_settings_path() -> Path:
    """Settings path from the environment, or the per-user default."""
    return Path(os.environ.get(SETTINGS_ENV_VAR, str(DEFAULT_SETTINGS_PATH))).expanduser()


def _typed(data: Dict[str, Any], key: str, expected: type) -> Any:
    value = data[key]
    if not isinstance(value, expected):
        raise ValueError(
            f"Invalid value for {key}: {value!r} (expected {expected.__name__})"
        )
    return value


@dataclass
class Settings:
    """
    Simulator settings.
    """
    # Subdirectory of the simulation directory holding per-UUID files
    node_subdir: str = DEFAULT_NODE_SUBDIR

    # Simulation directory used when --directory is not given
    directory: Optional[str] = None

    # Raise on malformed configuration values instead of skipping them
    strict: bool = True

    # Logging
    log_level: str = "INFO"

    settings_path: Optional[Path] = None

    @classmethod
    def load(cls, settings_path: Optional[Path] = None) -> 'Settings':
        """
        Load settings from file.

        Args:
            settings_path: Path to settings file (default: $LOWAPP_SETTINGS
                or ~/.config/lowapp/settings.toml)

        Returns:
            Loaded settings; defaults if the file does not exist

        Raises:
            toml.TomlDecodeError: If the file is not valid TOML
            ValueError: If a setting has the wrong type
        """
        path = Path(settings_path).expanduser() if settings_path else default_settings_path()
        settings = cls()
        settings.settings_path = path

        if not path.exists():
            return settings

        settings._apply_dict(toml.load(path))
        return settings

    def _apply_dict(self, data: Dict[str, Any]) -> None:
        """
        Apply dictionary data to settings.

        Raises:
            ValueError: If a value has the wrong TOML type
        """
        if "node_subdir" in data:
            self.node_subdir = _typed(data, "node_subdir", str)
        if "directory" in data:
            self.directory = _typed(data, "directory", str)
        if "strict" in data:
            self.strict = _typed(data, "strict", bool)
        if "log_level" in data:
            self.log_level = _typed(data, "log_level", str).upper()

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    def validate(self) -> None:
        """
        Validate settings.

        Raises:
            ValueError: If settings are invalid
        """
        if self.log_level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {self.log_level}")

        if not self.node_subdir:
            raise ValueError("Node subdirectory must not be empty")
