"""Application configuration for Rofi Manager."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

APP_NAME = "rofi-manager"

ALL_MODES = ("run", "drun", "window", "ssh", "filebrowser", "key")
DEFAULT_MODES = ("run", "drun", "window")

SCRIPT_SUFFIX = ".sh"
THEME_SUFFIX = ".rasi"
SCRIPT_MODE = 0o755
THEME_MODE = 0o644
DIRECTORY_MODE = 0o755


class ConfigError(Exception):
    """Raised when the application configuration cannot be used."""


def default_base_dir() -> Path:
    """Return the per-user configuration root."""

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg_config) if xdg_config else Path.home() / ".config"
    return base / APP_NAME


class AppConfig(BaseModel):
    """Locations and external programs used by the manager."""

    base_dir: Path = Field(default_factory=default_base_dir)
    selector: str = "rofi"

    @field_validator("base_dir")
    @classmethod
    def _expand_base_dir(cls, value: Path) -> Path:
        return value.expanduser()

    @field_validator("selector")
    @classmethod
    def _require_selector(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Selector command cannot be empty")
        return value

    @property
    def themes_dir(self) -> Path:
        return self.base_dir / "themes"

    @property
    def scripts_dir(self) -> Path:
        return self.base_dir / "scripts"

    @property
    def settings_path(self) -> Path:
        return self.base_dir / "config.conf"

    @property
    def log_path(self) -> Path:
        return self.base_dir / f"{APP_NAME}.log"


def resolve_config(base_dir: Optional[Path] = None, selector: Optional[str] = None) -> AppConfig:
    """Build an :class:`AppConfig`, falling back to defaults for missing values."""

    values = {}
    if base_dir is not None:
        values["base_dir"] = base_dir
    if selector is not None:
        values["selector"] = selector
    try:
        return AppConfig(**values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc


def ensure_directories(config: AppConfig) -> None:
    """Create the configuration root and the managed asset directories."""

    for directory in (config.base_dir, config.themes_dir, config.scripts_dir):
        if directory.exists() and not directory.is_dir():
            raise ConfigError(f"Not a directory: {directory}")
        try:
            directory.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"Cannot create {directory}: {exc}") from exc


__all__ = [
    "ALL_MODES",
    "DEFAULT_MODES",
    "AppConfig",
    "ConfigError",
    "default_base_dir",
    "ensure_directories",
    "resolve_config",
]
