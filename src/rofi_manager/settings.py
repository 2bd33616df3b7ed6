"""Persisted user preferences."""

from __future__ import annotations

import configparser
from pathlib import Path
from typing import Iterable, List, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, field_validator

from .config import ALL_MODES, DEFAULT_MODES

_SECTION_MODES = "modes"
_SECTION_SCRIPTS = "scripts"
_SECTION_THEME = "theme"
_KEY = "enabled"


def parse_list(value: str) -> List[str]:
    """Split a comma separated field, trimming blanks and dropping empty entries."""

    items: List[str] = []
    for item in value.split(","):
        item = item.strip()
        if item:
            items.append(item)
    return items


def _unique(items: Iterable[str]) -> Tuple[str, ...]:
    seen: set[str] = set()
    ordered: List[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return tuple(ordered)


class Settings(BaseModel):
    """Enabled modes, scripts and theme."""

    model_config = ConfigDict(frozen=True)

    enabled_modes: Tuple[str, ...] = DEFAULT_MODES
    enabled_scripts: Tuple[str, ...] = ()
    enabled_theme: str = ""

    @field_validator("enabled_modes", mode="before")
    @classmethod
    def _known_modes(cls, value: Iterable[str]) -> Tuple[str, ...]:
        modes = []
        for mode in value:
            if mode in ALL_MODES:
                modes.append(mode)
            else:
                logger.warning("Ignoring unknown mode '{}'", mode)
        return _unique(modes)

    @field_validator("enabled_scripts", mode="before")
    @classmethod
    def _unique_scripts(cls, value: Iterable[str]) -> Tuple[str, ...]:
        scripts = []
        for script in value:
            if "," in script:
                logger.warning("Cannot enable '{}': commas are not allowed in names", script)
            else:
                scripts.append(script)
        return _unique(scripts)

    @field_validator("enabled_theme")
    @classmethod
    def _strip_theme(cls, value: str) -> str:
        return value.strip()


def _to_parser(settings: Settings) -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    parser[_SECTION_MODES] = {_KEY: ",".join(settings.enabled_modes)}
    parser[_SECTION_SCRIPTS] = {_KEY: ",".join(settings.enabled_scripts)}
    parser[_SECTION_THEME] = {_KEY: settings.enabled_theme}
    return parser


def _from_parser(parser: configparser.ConfigParser) -> Settings:
    def _value(section: str) -> str:
        return parser.get(section, _KEY, fallback="")

    return Settings(
        enabled_modes=parse_list(_value(_SECTION_MODES)),
        enabled_scripts=parse_list(_value(_SECTION_SCRIPTS)),
        enabled_theme=_value(_SECTION_THEME),
    )


class SettingsStore:
    """Load and save :class:`Settings` to an INI file.

    Persistence is best effort: read failures fall back to defaults and
    write failures are logged, never raised.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._settings = Settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    def load(self) -> Settings:
        parser = configparser.ConfigParser(interpolation=None)
        try:
            with self.path.open(encoding="utf-8", errors="surrogateescape") as handle:
                parser.read_file(handle)
            self._settings = _from_parser(parser)
        except FileNotFoundError:
            logger.info("No settings at {}; writing defaults", self.path)
            self._reset()
        except (OSError, UnicodeDecodeError, configparser.Error) as exc:
            logger.warning("Unreadable settings at {} ({}); writing defaults", self.path, exc)
            self._reset()
        return self._settings

    def save(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8", errors="surrogateescape") as handle:
                _to_parser(self._settings).write(handle)
        except OSError as exc:
            logger.warning("Failed to save settings to {}: {}", self.path, exc)

    def _reset(self) -> None:
        self._settings = Settings()
        self.save()

    def _update(self, **changes) -> Settings:
        self._settings = Settings(**{**self._settings.model_dump(), **changes})
        self.save()
        return self._settings

    def get_enabled_modes(self) -> List[str]:
        return list(self._settings.enabled_modes)

    def get_enabled_scripts(self) -> List[str]:
        return list(self._settings.enabled_scripts)

    def get_enabled_theme(self) -> str:
        return self._settings.enabled_theme

    def set_enabled_modes(self, modes: Iterable[str]) -> Settings:
        return self._update(enabled_modes=list(modes))

    def set_enabled_scripts(self, scripts: Iterable[str]) -> Settings:
        return self._update(enabled_scripts=list(scripts))

    def set_enabled_theme(self, theme: str) -> Settings:
        return self._update(enabled_theme=theme)


__all__ = ["Settings", "SettingsStore", "parse_list"]
