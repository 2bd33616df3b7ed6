"""Typer-based CLI for rofi manager."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

from . import actions
from .actions import ActionContext
from .config import ALL_MODES, AppConfig, ConfigError, ensure_directories, resolve_config
from .menu import SelectorNotFound
from .models import LaunchRequest
from .shell import build_context, run_shell

app = typer.Typer(help="Manage rofi modes, scripts and themes through rofi itself.")
console = Console(stderr=True)


def _configure_logging(level: str, log_file: Path | None) -> None:
    logger.remove()
    logger.add(console.print, level=level)
    if log_file:
        logger.add(log_file, rotation="1 week", retention=5, level="INFO")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config_dir: Optional[Path] = typer.Option(
        None, "--config-dir", envvar="ROFI_MANAGER_HOME", help="Configuration root directory"
    ),
    selector: Optional[str] = typer.Option(
        None, "--selector", envvar="ROFI_MANAGER_SELECTOR", help="Selector binary (default: rofi)"
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Console logging level"),
) -> None:
    """Load configuration shared by every command; without a command, open the main menu."""

    try:
        config = resolve_config(config_dir, selector)
        ensure_directories(config)
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {exc}")
        raise typer.Exit(code=4)
    _configure_logging(log_level.upper(), config.log_path)
    logger.debug("Using configuration directory {}", config.base_dir)
    ctx.obj = config
    if ctx.invoked_subcommand is None:
        run(ctx)


def _context(ctx: typer.Context) -> ActionContext:
    config: AppConfig = ctx.obj
    return build_context(config)


def _guarded(workflow: Callable[[], object]) -> object:
    try:
        return workflow()
    except SelectorNotFound as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=127)


def _launch(action_ctx: ActionContext, request: LaunchRequest) -> None:
    _guarded(lambda: action_ctx.menu.launch_mode(request.mode, action_ctx.theme))
    raise typer.Exit(code=0)


@app.command()
def run(ctx: typer.Context) -> None:
    """Open the interactive main menu."""

    action_ctx = _context(ctx)
    request = _guarded(lambda: run_shell(action_ctx))
    if isinstance(request, LaunchRequest):
        _launch(action_ctx, request)


@app.command("select-mode")
def select_mode_command(ctx: typer.Context) -> None:
    """Pick an enabled mode and show it."""

    action_ctx = _context(ctx)
    request = _guarded(lambda: actions.select_mode(action_ctx))
    if isinstance(request, LaunchRequest):
        _launch(action_ctx, request)


@app.command("toggle-modes")
def toggle_modes_command(ctx: typer.Context) -> None:
    """Enable or disable modes."""

    action_ctx = _context(ctx)
    _guarded(lambda: actions.toggle_modes(action_ctx))


@app.command("enable-script")
def enable_script_command(ctx: typer.Context) -> None:
    """Enable or disable installed scripts."""

    action_ctx = _context(ctx)
    _guarded(lambda: actions.enable_script(action_ctx))


@app.command("enable-theme")
def enable_theme_command(ctx: typer.Context) -> None:
    """Choose the active theme."""

    action_ctx = _context(ctx)
    _guarded(lambda: actions.enable_theme(action_ctx))


@app.command("add-script")
def add_script_command(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="Script to install; prompts when omitted"),
) -> None:
    """Copy a .sh script into the scripts directory."""

    action_ctx = _context(ctx)
    installed = _guarded(lambda: actions.add_script(action_ctx, path))
    if installed:
        console.print(f"[green]Installed {installed}[/green]")


@app.command("add-theme")
def add_theme_command(
    ctx: typer.Context,
    path: Optional[Path] = typer.Argument(None, help="Theme to install; prompts when omitted"),
) -> None:
    """Copy a .rasi theme into the themes directory."""

    action_ctx = _context(ctx)
    installed = _guarded(lambda: actions.add_theme(action_ctx, path))
    if installed:
        console.print(f"[green]Installed {installed}[/green]")


@app.command()
def status(ctx: typer.Context) -> None:
    """Print the current settings and the installed assets."""

    action_ctx = _context(ctx)
    settings = action_ctx.store.settings
    output = Console()

    table = Table(title=f"Settings ({action_ctx.config.settings_path})")
    table.add_column("Kind")
    table.add_column("Name")
    table.add_column("Enabled")
    for mode in ALL_MODES:
        table.add_row("mode", mode, "yes" if mode in settings.enabled_modes else "")
    for script in action_ctx.scanner.list_scripts():
        table.add_row("script", script, "yes" if script in settings.enabled_scripts else "")
    for theme in action_ctx.scanner.list_themes():
        table.add_row("theme", theme, "yes" if theme == settings.enabled_theme else "")
    output.print(table)

    missing = [name for name in settings.enabled_scripts if not (action_ctx.config.scripts_dir / name).exists()]
    if settings.enabled_theme and not (action_ctx.config.themes_dir / settings.enabled_theme).exists():
        missing.append(settings.enabled_theme)
    for name in missing:
        output.print(f"[yellow]WARNING:[/yellow] {name} is enabled but not installed")


if __name__ == "__main__":
    app()
