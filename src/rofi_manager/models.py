"""Shared models for menu entries, assets and launch outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .config import SCRIPT_MODE, SCRIPT_SUFFIX, THEME_MODE, THEME_SUFFIX, AppConfig


class AssetKind(str, Enum):
    """Kinds of files kept in the managed directories."""

    SCRIPT = "script"
    THEME = "theme"

    @property
    def suffix(self) -> str:
        return SCRIPT_SUFFIX if self is AssetKind.SCRIPT else THEME_SUFFIX

    @property
    def file_mode(self) -> int:
        return SCRIPT_MODE if self is AssetKind.SCRIPT else THEME_MODE

    def directory(self, config: AppConfig) -> Path:
        return config.scripts_dir if self is AssetKind.SCRIPT else config.themes_dir


@dataclass(frozen=True, slots=True)
class MenuOption:
    """A line shown in the selector paired with the value it stands for."""

    label: str
    key: str


@dataclass(frozen=True, slots=True)
class LaunchRequest:
    """Terminal outcome of the main loop: show ``mode`` and exit."""

    mode: str


__all__ = ["AssetKind", "MenuOption", "LaunchRequest"]
