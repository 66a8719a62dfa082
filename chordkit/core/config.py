"""Configuration loading for chordkit.

Reads an optional YAML file and environment variables into a typed settings
object using Pydantic v2. The engine itself never reads settings; only the
command-line front end does, and it passes values into engine calls
explicitly.

Sources (later wins):
- built-in defaults
- YAML file named by CHORDKIT_CONFIG
- environment variables

Env variables:
- CHORDKIT_CONFIG (optional path to a YAML file)
- CHORDKIT_LOG_LEVEL (default: WARNING)
- CHORDKIT_LOG_JSON (default: false)
- CHORDKIT_OCTAVE_OFFSET (default: 0)
- CHORDKIT_DEFAULT_KEY (default: C)
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from chordkit.theory.pitch import is_known_key


SETTING_NAMES = (
    "CHORDKIT_LOG_LEVEL",
    "CHORDKIT_LOG_JSON",
    "CHORDKIT_OCTAVE_OFFSET",
    "CHORDKIT_DEFAULT_KEY",
)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    CHORDKIT_LOG_LEVEL: str = Field(default="WARNING", description="Logging level")
    CHORDKIT_LOG_JSON: bool = Field(default=False, description="Emit JSON log lines")
    CHORDKIT_OCTAVE_OFFSET: int = Field(
        default=0, ge=-3, le=3, description="Octave offset applied to realized chords"
    )
    CHORDKIT_DEFAULT_KEY: str = Field(
        default="C", description="Source key assumed when transposing progressions"
    )

    @field_validator("CHORDKIT_LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of {VALID_LOG_LEVELS}. Got: '{v}'")
        return v_upper

    @field_validator("CHORDKIT_DEFAULT_KEY")
    @classmethod
    def validate_default_key(cls, v: str) -> str:
        v = v.strip()
        if not is_known_key(v):
            raise ValueError(f"Default key must be a recognised key (e.g. 'C', 'Bb', 'F#m'). Got: '{v}'")
        return v


def load_yaml_config(path: str | Path) -> Dict[str, Any]:
    """Read a YAML settings file.

    Keys may be given with or without the CHORDKIT_ prefix and in any case,
    so ``octave_offset: -1`` and ``CHORDKIT_OCTAVE_OFFSET: -1`` are the same.

    Raises:
        ValueError: if the file is missing or does not hold a mapping.
    """
    path = Path(path)
    if not path.is_file():
        raise ValueError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping, got {type(data).__name__}: {path}")

    values = {}
    for key, value in data.items():
        name = str(key).upper()
        if not name.startswith("CHORDKIT_"):
            name = "CHORDKIT_" + name
        values[name] = value
    return values


def load_settings(config_path: Optional[str] = None) -> Settings:
    """Build settings from defaults, the YAML file and the environment."""
    values: Dict[str, Any] = {}

    config_path = config_path or os.getenv("CHORDKIT_CONFIG")
    if config_path:
        values.update(load_yaml_config(config_path))

    for name in SETTING_NAMES:
        env_value = os.getenv(name)
        if env_value is not None and env_value != "":
            values[name] = env_value

    return Settings.model_validate(values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once and memoize.

    Raises:
        ValueError: if the config file is unreadable or a value is invalid.
    """
    return load_settings()


__all__ = ["Settings", "get_settings", "load_settings", "load_yaml_config"]
