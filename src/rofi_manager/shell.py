"""Top level menu loop."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

from loguru import logger

from . import actions
from .actions import ActionContext
from .assets import AssetScanner
from .config import AppConfig
from .menu import MenuClient
from .models import LaunchRequest
from .settings import SettingsStore

TITLE = "Rofi Manager"
EXIT = "Exit"

Handler = Callable[[ActionContext], object]

MAIN_MENU: List[Tuple[str, Optional[Handler]]] = [
    ("Select Mode", actions.select_mode),
    ("Enable/Disable Modes", actions.toggle_modes),
    ("Enable Script", actions.enable_script),
    ("Enable Theme", actions.enable_theme),
    ("Add Script", actions.add_script),
    ("Add Theme", actions.add_theme),
    (EXIT, None),
]


def build_context(config: AppConfig) -> ActionContext:
    """Wire a loaded store, a scanner and a menu client for ``config``."""

    store = SettingsStore(config.settings_path)
    store.load()
    return ActionContext(
        config=config,
        store=store,
        scanner=AssetScanner(config),
        menu=MenuClient(config),
    )


def run_shell(ctx: ActionContext) -> Optional[LaunchRequest]:
    """Loop over the main menu until Exit, dismissal or a mode launch.

    A :class:`LaunchRequest` return value means the caller should start that
    mode and terminate.
    """

    labels = [label for label, _ in MAIN_MENU]
    handlers: Dict[str, Optional[Handler]] = dict(MAIN_MENU)
    while True:
        choice = ctx.menu.select(TITLE, labels, ctx.theme)
        if not choice or choice == EXIT:
            logger.debug("Leaving main menu")
            return None
        handler = handlers.get(choice)
        if handler is None:
            logger.debug("Ignoring unknown entry '{}'", choice)
            continue
        outcome = handler(ctx)
        if isinstance(outcome, LaunchRequest):
            return outcome


__all__ = ["MAIN_MENU", "build_context", "run_shell"]
