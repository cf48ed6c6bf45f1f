"""
Settings loader — reads the optional sysup config file.

The file is YAML, validated against a Pydantic model. It is optional:
with no file every default applies.

Search order:
    explicit path (--config)  >  SYSUP_CONFIG env var  >  ~/.config/sysup/config.yml
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SYSUP_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/sysup/config.yml")


class ConfigError(Exception):
    """Raised when the settings file is unreadable or invalid."""


class Settings(BaseModel):
    """User settings.

    skip: step ids to drop from the plan (e.g. ``nvim``, ``yay-orphans``).
    aur: include the AUR helper (yay) steps on Arch-family systems.
    """

    model_config = ConfigDict(extra="forbid")

    skip: list[str] = Field(default_factory=list)
    aur: bool = True


def find_config_file(explicit: Path | None = None) -> Path | None:
    """Resolve which settings file to use.

    An explicit path is returned as-is even if it doesn't exist, so
    ``load_settings`` can complain about it. The env var and default
    location only count when the file is there.
    """
    if explicit is not None:
        return explicit

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path).expanduser()
        if candidate.is_file():
            return candidate
        logger.debug("%s points at a missing file: %s", CONFIG_ENV_VAR, candidate)

    default = DEFAULT_CONFIG_PATH.expanduser()
    if default.is_file():
        return default

    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit settings file. If None, searches the usual places.

    Returns:
        Validated Settings (defaults when no file is found).

    Raises:
        ConfigError: If the file is missing (when named explicitly) or invalid.
    """
    path = find_config_file(path)
    if path is None:
        logger.debug("No settings file, using defaults")
        return Settings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is a valid "all defaults"
    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
