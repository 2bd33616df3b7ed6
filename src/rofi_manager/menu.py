"""Thin wrapper around the external selector process."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from loguru import logger

from .config import AppConfig
from .models import MenuOption

CHECKED = "[x]"
UNCHECKED = "[ ]"


class SelectorNotFound(Exception):
    """Raised when the selector binary cannot be started."""

    def __init__(self, selector: str) -> None:
        super().__init__(f"Selector '{selector}' not found on PATH")
        self.selector = selector


def checkbox_options(names: Iterable[str], enabled: Iterable[str]) -> List[MenuOption]:
    """Build ``[x] name`` / ``[ ] name`` entries keyed by ``name``."""

    active = set(enabled)
    return [
        MenuOption(f"{CHECKED if name in active else UNCHECKED} {name}", name)
        for name in names
    ]


class MenuClient:
    """Run the selector in dmenu mode and read back one line."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def theme_path(self, theme: str) -> Optional[Path]:
        if not theme:
            return None
        path = self.config.themes_dir / theme
        return path if path.is_file() else None

    def _theme_args(self, theme: str) -> List[str]:
        path = self.theme_path(theme)
        return ["-theme", str(path)] if path else []

    def _run(self, args: List[str], stdin: Optional[str] = None) -> subprocess.CompletedProcess:
        command = [self.config.selector, *args]
        logger.debug("Running {}", command)
        try:
            if stdin is None:
                return subprocess.run(command, check=False)
            return subprocess.run(
                command,
                input=stdin,
                encoding="utf-8",
                errors="surrogateescape",
                capture_output=True,
                check=False,
            )
        except FileNotFoundError as exc:
            raise SelectorNotFound(self.config.selector) from exc

    def select(self, prompt: str, options: Sequence[str], theme: str = "") -> str:
        """Show ``options`` and return the chosen line, or ``""`` when dismissed."""

        args = ["-dmenu", "-p", prompt, *self._theme_args(theme)]
        result = self._run(args, stdin="\n".join(options))
        if result.returncode != 0:
            return ""
        return (result.stdout or "").strip()

    def choose(self, prompt: str, options: Sequence[MenuOption], theme: str = "") -> Optional[str]:
        """Like :meth:`select` but returns the key paired with the chosen label.

        Returns ``None`` only when the menu is dismissed; a line matching no
        entry shows the same options again.
        """

        by_label = {option.label: option.key for option in options}
        labels = [option.label for option in options]
        while True:
            choice = self.select(prompt, labels, theme)
            if not choice:
                return None
            if choice in by_label:
                return by_label[choice]
            logger.debug("No entry matches '{}'", choice)

    def show_info(self, message: str, theme: str = "") -> None:
        self.select(message, ["OK"], theme)

    def confirm(self, prompt: str, theme: str = "") -> bool:
        return self.select(prompt, ["No", "Yes"], theme) == "Yes"

    def launch_mode(self, mode: str, theme: str = "") -> int:
        """Hand over to the selector showing ``mode`` and return its exit code."""

        logger.info("Launching mode {}", mode)
        return self._run(["-show", mode, *self._theme_args(theme)]).returncode


__all__ = ["MenuClient", "SelectorNotFound", "checkbox_options", "CHECKED", "UNCHECKED"]
