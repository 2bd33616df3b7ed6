"""Discovery and installation of scripts and themes."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from loguru import logger

from .config import AppConfig
from .models import AssetKind


def _list_assets(directory: Path, suffix: str) -> List[str]:
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        logger.debug("Cannot list {}: {}", directory, exc)
        return []
    return [entry.name for entry in entries if entry.name.endswith(suffix)]


class AssetScanner:
    """List the files available in the managed directories."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def list_assets(self, kind: AssetKind) -> List[str]:
        return _list_assets(kind.directory(self.config), kind.suffix)

    def list_scripts(self) -> List[str]:
        return self.list_assets(AssetKind.SCRIPT)

    def list_themes(self) -> List[str]:
        return self.list_assets(AssetKind.THEME)


def validate_asset_source(path: Path, kind: AssetKind) -> Optional[str]:
    """Return a user facing error for ``path`` or ``None`` when it can be installed."""

    if not path.exists():
        return "File does not exist."
    if not path.name.endswith(kind.suffix):
        return f"File must end with {kind.suffix}"
    return None


def asset_destination(source: Path, kind: AssetKind, config: AppConfig) -> Path:
    return kind.directory(config) / source.name


def install_asset(source: Path, kind: AssetKind, config: AppConfig) -> Path:
    """Copy ``source`` into the managed directory for ``kind``.

    The copy always ends up with the fixed permission mode of its kind.
    Raises :class:`OSError` when reading or writing fails.
    """

    destination = asset_destination(source, kind, config)
    data = source.read_bytes()
    destination.write_bytes(data)
    destination.chmod(kind.file_mode)
    logger.info("Installed {} {} ({} bytes)", kind.value, destination, len(data))
    return destination


__all__ = ["AssetScanner", "asset_destination", "install_asset", "validate_asset_source"]
