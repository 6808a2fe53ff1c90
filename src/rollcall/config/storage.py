"""Data storage configuration helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

APP_DIR_NAME: Final[str] = "rollcall"
DEFAULT_REGISTRY_FILENAME: Final[str] = "registry.json"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    data_dir: Path
    registry_filename: str = DEFAULT_REGISTRY_FILENAME
    registry_override: Path | None = None

    def resolve_data_dir(self) -> Path:
        return self.data_dir.expanduser().resolve()

    def ensure_data_dir(self) -> Path:
        data_dir = self.resolve_data_dir()
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def registry_path(self, *, ensure: bool = True) -> Path:
        if self.registry_override is not None:
            return self.registry_override.expanduser().resolve()
        base = self.ensure_data_dir() if ensure else self.resolve_data_dir()
        return base / self.registry_filename


def _default_data_dir() -> Path:
    if os.name == "nt":
        base = os.getenv("LOCALAPPDATA")
        base_path = Path(base) if base else (Path.home() / "AppData" / "Local")
    else:
        base = os.getenv("XDG_DATA_HOME")
        base_path = Path(base) if base else (Path.home() / ".local" / "share")
    return (base_path / APP_DIR_NAME).expanduser().resolve()


def get_storage_config() -> StorageConfig:
    env_dir = os.getenv("ROLLCALL_DATA_DIR")
    env_registry = os.getenv("ROLLCALL_REGISTRY")
    data_dir = Path(env_dir) if env_dir else _default_data_dir()
    registry_override = Path(env_registry) if env_registry else None
    return StorageConfig(data_dir=data_dir, registry_override=registry_override)
