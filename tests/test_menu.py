from __future__ import annotations

import os
import subprocess
import sys
from typing import List

import pytest

from rofi_manager.config import AppConfig
from rofi_manager.menu import MenuClient, SelectorNotFound, checkbox_options
from rofi_manager.models import MenuOption

from conftest import write_file


class FakeRun:
    def __init__(self, stdout: str = "", returncode: int = 0) -> None:
        self.stdout = stdout
        self.queue: List[str] = []
        self.returncode = returncode
        self.commands: List[List[str]] = []
        self.inputs: List[str | None] = []

    def __call__(self, command, input=None, **kwargs):
        self.commands.append(list(command))
        self.inputs.append(input)
        stdout = self.queue.pop(0) if self.queue else self.stdout
        return subprocess.CompletedProcess(command, self.returncode, stdout=stdout, stderr="")


@pytest.fixture()
def fake_run(monkeypatch: pytest.MonkeyPatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


def test_select_passes_prompt_and_options(app_config: AppConfig, fake_run: FakeRun) -> None:
    fake_run.stdout = "  drun \n"
    menu = MenuClient(app_config)

    assert menu.select("Select mode", ["run", "drun"]) == "drun"
    assert fake_run.commands == [["rofi", "-dmenu", "-p", "Select mode"]]
    assert fake_run.inputs == ["run\ndrun"]


def test_select_adds_theme_only_when_file_exists(app_config: AppConfig, fake_run: FakeRun) -> None:
    menu = MenuClient(app_config)
    menu.select("p", ["a"], "missing.rasi")
    theme = write_file(app_config.themes_dir / "nord.rasi", "* {}\n")
    menu.select("p", ["a"], "nord.rasi")

    assert "-theme" not in fake_run.commands[0]
    assert fake_run.commands[1][-2:] == ["-theme", str(theme)]


def test_dismissed_menu_returns_empty(app_config: AppConfig, fake_run: FakeRun) -> None:
    fake_run.stdout = "run\n"
    fake_run.returncode = 1
    assert MenuClient(app_config).select("p", ["run"]) == ""


def test_choose_maps_label_back_to_key(app_config: AppConfig, fake_run: FakeRun) -> None:
    fake_run.stdout = "[x] my script.sh\n"
    options = checkbox_options(["my script.sh", "other.sh"], ["my script.sh"])

    assert MenuClient(app_config).choose("p", options) == "my script.sh"


def test_choose_shows_options_again_after_free_text(app_config: AppConfig, fake_run: FakeRun) -> None:
    fake_run.queue = ["something typed\n", "run\n"]
    assert MenuClient(app_config).choose("p", [MenuOption("run", "run")]) == "run"
    assert len(fake_run.commands) == 2
    assert fake_run.inputs == ["run", "run"]


def test_choose_returns_none_only_when_dismissed(app_config: AppConfig, fake_run: FakeRun) -> None:
    fake_run.queue = ["typo\n", ""]
    assert MenuClient(app_config).choose("p", [MenuOption("run", "run")]) is None
    assert len(fake_run.commands) == 2


def test_confirm_requires_yes(app_config: AppConfig, fake_run: FakeRun) -> None:
    menu = MenuClient(app_config)
    fake_run.stdout = "Yes"
    assert menu.confirm("Overwrite a.sh?")
    fake_run.stdout = "No"
    assert not menu.confirm("Overwrite a.sh?")
    assert fake_run.inputs[0] == "No\nYes"


def test_launch_mode_runs_show(app_config: AppConfig, fake_run: FakeRun) -> None:
    assert MenuClient(app_config).launch_mode("window") == 0
    assert fake_run.commands == [["rofi", "-show", "window"]]


def test_missing_selector_raises(tmp_path) -> None:
    config = AppConfig(base_dir=tmp_path, selector="rofi-manager-test-no-such-binary")
    with pytest.raises(SelectorNotFound):
        MenuClient(config).select("p", ["a"])


def test_checkbox_options_marks_enabled() -> None:
    options = checkbox_options(["run", "drun"], ["drun"])
    assert options == [MenuOption("[ ] run", "run"), MenuOption("[x] drun", "drun")]


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell selector")
def test_undecodable_names_reach_the_selector(app_config: AppConfig, tmp_path) -> None:
    selector = write_file(tmp_path / "fake-rofi", "#!/bin/sh\nhead -n 1\n")
    selector.chmod(0o755)
    name = os.fsdecode(b"bad\xff.sh")
    config = AppConfig(base_dir=app_config.base_dir, selector=str(selector))

    assert MenuClient(config).select("p", [name, "other.sh"]) == name
