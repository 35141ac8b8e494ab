"""YAML configuration for segment-bidi.

Example file::

    settings:
      direction: rtl
      reset_whitespace: true
      log_level: INFO
      output_format: json
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from segment_bidi.exceptions import ConfigError
from segment_bidi.text.segments import DIRECTIONS

ENV_VAR = "SEGMENT_BIDI_CONFIG"
DEFAULT_PATH = Path("~/.config/segment-bidi/config.yaml")

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
OUTPUT_FORMATS = ("table", "json")


@dataclass
class Config:
    """Settings shared by the resolver facade and the CLI."""

    direction: str = "ltr"
    reset_whitespace: bool = True
    log_level: str = "WARNING"
    output_format: str = "table"

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load configuration from ``path``, the environment, or the user config.

        Resolution order: ``path``, then ``$SEGMENT_BIDI_CONFIG``, then
        ``~/.config/segment-bidi/config.yaml`` if it exists, else defaults.

        Raises:
            FileNotFoundError: If an explicitly given file does not exist.
            ConfigError: If the file is not valid YAML or has invalid values.
        """
        if path is None and os.environ.get(ENV_VAR):
            path = os.environ[ENV_VAR]

        if path is None:
            default = DEFAULT_PATH.expanduser()
            if not default.is_file():
                return cls()
            path = default

        config_path = Path(path)
        if not config_path.is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax in {config_path}: {e}") from e

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        """Build and validate a Config from parsed YAML."""
        if not isinstance(data, dict):
            raise ConfigError("Config root must be a mapping")

        settings = data.get("settings", {}) or {}
        if not isinstance(settings, dict):
            raise ConfigError("settings: expected a mapping")

        unknown = set(settings) - {"direction", "reset_whitespace", "log_level", "output_format"}
        if unknown:
            raise ConfigError(f"settings: unknown keys {', '.join(sorted(unknown))}")

        config = cls()
        if "direction" in settings:
            config.direction = _choice(settings["direction"], "direction", DIRECTIONS)
        if "reset_whitespace" in settings:
            value = settings["reset_whitespace"]
            if not isinstance(value, bool):
                raise ConfigError(
                    f"settings.reset_whitespace: expected boolean, got {type(value).__name__}"
                )
            config.reset_whitespace = value
        if "log_level" in settings:
            config.log_level = _choice(
                settings["log_level"], "log_level", LOG_LEVELS, upper=True
            )
        if "output_format" in settings:
            config.output_format = _choice(
                settings["output_format"], "output_format", OUTPUT_FORMATS
            )
        return config


def _choice(value: Any, name: str, allowed: tuple[str, ...], upper: bool = False) -> str:
    if not isinstance(value, str):
        raise ConfigError(
            f"settings.{name}: expected string, got {type(value).__name__}"
        )
    normalized = value.upper() if upper else value.lower()
    if normalized not in allowed:
        raise ConfigError(
            f"settings.{name}: must be one of {', '.join(allowed)}, got {value!r}"
        )
    return normalized
