from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple

import pytest

from rofi_manager.actions import ActionContext
from rofi_manager.assets import AssetScanner
from rofi_manager.config import AppConfig, ensure_directories
from rofi_manager.menu import MenuClient
from rofi_manager.settings import SettingsStore


class ScriptedMenu(MenuClient):
    """Menu client answering from a list of canned selections.

    Each call to :meth:`select` consumes the next answer; once the list is
    exhausted the menu behaves as if the user dismissed it.
    """

    def __init__(self, config: AppConfig, answers: Sequence[str] = ()) -> None:
        super().__init__(config)
        self.answers: List[str] = list(answers)
        self.calls: List[Tuple[str, List[str], str]] = []
        self.launched: List[Tuple[str, str]] = []

    def select(self, prompt: str, options: Sequence[str], theme: str = "") -> str:
        self.calls.append((prompt, list(options), theme))
        return self.answers.pop(0) if self.answers else ""

    def launch_mode(self, mode: str, theme: str = "") -> int:
        self.launched.append((mode, theme))
        return 0

    @property
    def prompts(self) -> List[str]:
        return [prompt for prompt, _, _ in self.calls]


@pytest.fixture()
def app_config(tmp_path: Path) -> AppConfig:
    config = AppConfig(base_dir=tmp_path / "rofi-manager")
    ensure_directories(config)
    return config


@pytest.fixture()
def make_context(app_config: AppConfig):
    def _factory(*answers: str) -> ActionContext:
        store = SettingsStore(app_config.settings_path)
        store.load()
        return ActionContext(
            config=app_config,
            store=store,
            scanner=AssetScanner(app_config),
            menu=ScriptedMenu(app_config, answers),
        )

    return _factory


def write_file(path: Path, text: str = "#!/bin/sh\necho hi\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path
