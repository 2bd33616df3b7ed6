"""User facing workflows built on the store, scanner and menu client."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from loguru import logger

from .assets import AssetScanner, asset_destination, install_asset, validate_asset_source
from .config import ALL_MODES, AppConfig
from .menu import MenuClient, checkbox_options
from .models import AssetKind, LaunchRequest, MenuOption
from .settings import Settings, SettingsStore

TOGGLE_MODES_PROMPT = "Toggle modes (Enter to finish)"
TOGGLE_SCRIPTS_PROMPT = "Toggle scripts (Enter to finish)"
SELECT_THEME_PROMPT = "Select theme (Enter to escape)"
SELECT_MODE_PROMPT = "Select mode"

_SOURCE_PROMPTS = {
    AssetKind.SCRIPT: "Path to script (.sh)",
    AssetKind.THEME: "Path to theme (.rasi)",
}


@dataclass
class ActionContext:
    """Everything a workflow needs, passed in explicitly."""

    config: AppConfig
    store: SettingsStore
    scanner: AssetScanner
    menu: MenuClient

    @property
    def theme(self) -> str:
        return self.store.get_enabled_theme()

    def info(self, message: str) -> None:
        self.menu.show_info(message, self.theme)


def toggle_member(items: Sequence[str], name: str) -> List[str]:
    """Remove ``name`` when present, otherwise append it."""

    if name in items:
        return [item for item in items if item != name]
    return [*items, name]


def select_mode(ctx: ActionContext) -> Optional[LaunchRequest]:
    """Pick one enabled mode; the caller launches it and exits."""

    modes = ctx.store.get_enabled_modes()
    if not modes:
        ctx.info("No modes enabled.")
        return None
    options = [MenuOption(mode, mode) for mode in modes]
    choice = ctx.menu.choose(SELECT_MODE_PROMPT, options, ctx.theme)
    if choice is None:
        return None
    return LaunchRequest(mode=choice)


def toggle_modes(ctx: ActionContext) -> Settings:
    while True:
        enabled = ctx.store.get_enabled_modes()
        choice = ctx.menu.choose(TOGGLE_MODES_PROMPT, checkbox_options(ALL_MODES, enabled), ctx.theme)
        if choice is None:
            return ctx.store.settings
        logger.debug("Toggling mode {}", choice)
        ctx.store.set_enabled_modes(toggle_member(enabled, choice))


def enable_script(ctx: ActionContext) -> Settings:
    scripts = ctx.scanner.list_scripts()
    if not scripts:
        ctx.info("No scripts found.")
        return ctx.store.settings
    while True:
        enabled = ctx.store.get_enabled_scripts()
        choice = ctx.menu.choose(TOGGLE_SCRIPTS_PROMPT, checkbox_options(scripts, enabled), ctx.theme)
        if choice is None:
            return ctx.store.settings
        logger.debug("Toggling script {}", choice)
        ctx.store.set_enabled_scripts(toggle_member(enabled, choice))


def enable_theme(ctx: ActionContext) -> Settings:
    """Single select over the themes; choosing the active theme clears it."""

    themes = ctx.scanner.list_themes()
    if not themes:
        ctx.info("No themes found.")
        return ctx.store.settings
    while True:
        active = ctx.store.get_enabled_theme()
        options = checkbox_options(themes, [active] if active else [])
        choice = ctx.menu.choose(SELECT_THEME_PROMPT, options, active)
        if choice is None:
            return ctx.store.settings
        ctx.store.set_enabled_theme("" if choice == active else choice)
        logger.debug("Active theme is now '{}'", ctx.store.get_enabled_theme())


def _add_asset(ctx: ActionContext, kind: AssetKind, source: Optional[Path]) -> Optional[Path]:
    if source is None:
        raw = ctx.menu.select(_SOURCE_PROMPTS[kind], [""], ctx.theme)
        if not raw:
            return None
        source = Path(raw).expanduser()

    error = validate_asset_source(source, kind)
    if error:
        ctx.info(error)
        return None

    destination = asset_destination(source, kind, ctx.config)
    if destination.exists() and not ctx.menu.confirm(f"Overwrite {destination.name}?", ctx.theme):
        logger.debug("Kept existing {}", destination)
        return None

    try:
        return install_asset(source, kind, ctx.config)
    except OSError as exc:
        logger.warning("Failed to install {}: {}", source, exc)
        ctx.info(f"Error copying file:\n{exc}")
        return None


def add_script(ctx: ActionContext, source: Optional[Path] = None) -> Optional[Path]:
    return _add_asset(ctx, AssetKind.SCRIPT, source)


def add_theme(ctx: ActionContext, source: Optional[Path] = None) -> Optional[Path]:
    return _add_asset(ctx, AssetKind.THEME, source)


__all__ = [
    "ActionContext",
    "add_script",
    "add_theme",
    "enable_script",
    "enable_theme",
    "select_mode",
    "toggle_member",
    "toggle_modes",
]
