"""Configuration loading with validation.

Priority, lowest to highest: defaults, TOML config file, environment
variables, explicit overrides.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from b3propagation.errors import ConfigError

CONFIG_FILE_NAME = "b3propagation.toml"
HOME_CONFIG_PATH = Path("~/.b3propagation/config.toml")
ENV_PREFIX = "B3_PROPAGATION_"
SECTION = "propagation"

_BOOL_TRUE = {"1", "true", "yes", "on"}
_BOOL_FALSE = {"0", "false", "no", "off"}


class B3Config(BaseModel):
    """Validated propagation settings."""

    model_config = ConfigDict(extra="forbid")

    default_format: Literal["text_map", "http_headers"] = Field(
        default="http_headers",
        description="Carrier format used when a caller does not name one",
    )
    debug: bool = Field(default=False, description="Log codec decisions at DEBUG level")


def find_config_file() -> Optional[str]:
    """Return the first config file found in the working directory, then the home directory."""
    candidates = [Path.cwd() / CONFIG_FILE_NAME, HOME_CONFIG_PATH.expanduser()]
    for path in candidates:
        if path.is_file():
            return str(path)
    return None


def load_toml_config(path: str) -> Dict[str, Any]:
    """
    Load a TOML config file.

    Returns an empty dict when the file does not exist.

    Raises:
        ConfigError: If the file is not valid TOML
    """
    config_path = Path(path)
    if not config_path.is_file():
        return {}
    try:
        with config_path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in config file: {e}", {"path": str(config_path)}) from e


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _BOOL_TRUE:
        return True
    if value in _BOOL_FALSE:
        return False
    raise ConfigError(f"Invalid boolean in environment variable {name}", {"value": raw})


def load_config_from_env(flat: bool = False) -> Dict[str, Any]:
    """
    Read settings from ``B3_PROPAGATION_*`` environment variables.

    Returns a flat dict when ``flat`` is true, otherwise nested under the
    ``propagation`` section like the TOML file.
    """
    settings: Dict[str, Any] = {}

    fmt = os.environ.get(ENV_PREFIX + "DEFAULT_FORMAT")
    if fmt:
        settings["default_format"] = fmt.strip().lower()

    debug = os.environ.get(ENV_PREFIX + "DEBUG")
    if debug:
        settings["debug"] = _parse_bool(ENV_PREFIX + "DEBUG", debug)

    if flat:
        return settings
    return {SECTION: settings} if settings else {}


def load_config_with_priority(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Merge every config source into one flat dict, highest priority last."""
    merged: Dict[str, Any] = {}

    path = config_file or find_config_file()
    if path:
        file_config = load_toml_config(path)
        section = file_config.get(SECTION, {})
        if not isinstance(section, dict):
            raise ConfigError(f"[{SECTION}] must be a table", {"path": path})
        merged.update(section)

    merged.update(load_config_from_env(flat=True))

    if overrides:
        merged.update({k: v for k, v in overrides.items() if v is not None})

    return merged


def validate_config(settings: Dict[str, Any]) -> B3Config:
    """Validate a flat settings dict, wrapping pydantic failures in ConfigError."""
    try:
        return B3Config(**settings)
    except PydanticValidationError as e:
        raise ConfigError("Invalid b3propagation configuration", {"errors": e.errors()}) from e


def load_config(
    config_file: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> B3Config:
    """Load and validate configuration from all sources."""
    return validate_config(load_config_with_priority(config_file=config_file, overrides=overrides))
