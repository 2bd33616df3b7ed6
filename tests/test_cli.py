from __future__ import annotations

import subprocess
from pathlib import Path

import pytest
from typer.testing import CliRunner

from rofi_manager.cli import app

from conftest import write_file

runner = CliRunner()


@pytest.fixture()
def config_dir(tmp_path: Path) -> Path:
    return tmp_path / "home"


def test_status_creates_layout_and_prints_modes(config_dir: Path) -> None:
    result = runner.invoke(app, ["--config-dir", str(config_dir), "status"])
    assert result.exit_code == 0, result.output
    assert (config_dir / "scripts").is_dir()
    assert (config_dir / "themes").is_dir()
    assert (config_dir / "config.conf").exists()
    assert "filebrowser" in result.stdout


def test_add_script_with_path_argument(config_dir: Path, tmp_path: Path) -> None:
    source = write_file(tmp_path / "hello.sh")
    result = runner.invoke(app, ["--config-dir", str(config_dir), "add-script", str(source)])
    assert result.exit_code == 0, result.output
    assert (config_dir / "scripts" / "hello.sh").read_text() == source.read_text()


def test_run_launches_selected_mode(config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    answers = ["Select Mode", "drun"]
    commands = []

    def fake_run(command, input=None, **kwargs):
        commands.append(list(command))
        stdout = answers.pop(0) if input is not None and answers else ""
        return subprocess.CompletedProcess(command, 0, stdout=stdout, stderr="")

    monkeypatch.setattr(subprocess, "run", fake_run)
    result = runner.invoke(app, ["--config-dir", str(config_dir)])

    assert result.exit_code == 0, result.output
    assert commands[-1] == ["rofi", "-show", "drun"]
    assert len(commands) == 3


def test_missing_selector_exits_127(config_dir: Path) -> None:
    result = runner.invoke(
        app, ["--config-dir", str(config_dir), "--selector", "rofi-manager-test-no-such-binary", "run"]
    )
    assert result.exit_code == 127


def test_config_dir_that_is_a_file(tmp_path: Path) -> None:
    blocker = write_file(tmp_path / "blocker", "")
    result = runner.invoke(app, ["--config-dir", str(blocker), "status"])
    assert result.exit_code == 4
