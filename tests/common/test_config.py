from __future__ import annotations

from pathlib import Path

import pytest

from rollcall.config import (
    ConfigurationError,
    StorageConfig,
    env_flag,
    get_reconcile_config,
    get_storage_config,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("Yes", True), (" on ", True), ("0", False), ("false", False), ("OFF", False)],
)
def test_env_flag_parses_common_spellings(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool
) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", raw)

    assert env_flag("EXAMPLE_FLAG") is expected


def test_env_flag_uses_default_when_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("EXAMPLE_FLAG", raising=False)

    assert env_flag("EXAMPLE_FLAG", default=True) is True


def test_env_flag_rejects_unknown_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_FLAG", "maybe")

    with pytest.raises(ConfigurationError):
        env_flag("EXAMPLE_FLAG")


def test_reconcile_config_reads_silent_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    assert get_reconcile_config().silent is False

    monkeypatch.setenv("ROLLCALL_SILENT", "true")

    assert get_reconcile_config().silent is True


def test_storage_config_uses_data_dir_from_env(tmp_path: Path) -> None:
    config = get_storage_config()

    path = config.registry_path()

    assert path == (tmp_path / "data" / "registry.json").resolve()
    assert path.parent.is_dir()


def test_storage_config_prefers_registry_override(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    monkeypatch.setenv("ROLLCALL_REGISTRY", str(tmp_path / "custom.json"))

    assert get_storage_config().registry_path() == (tmp_path / "custom.json").resolve()


def test_registry_path_without_ensure_leaves_directory_alone(tmp_path: Path) -> None:
    config = StorageConfig(data_dir=tmp_path / "later")

    path = config.registry_path(ensure=False)

    assert path.name == "registry.json"
    assert not (tmp_path / "later").exists()


def test_reconcile_config_rejects_unknown_silent_value(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ROLLCALL_SILENT", "sometimes")

    with pytest.raises(ConfigurationError):
        get_reconcile_config()
