from __future__ import annotations

import json
from datetime import date
from typing import TYPE_CHECKING, Any

import pytest

from rollcall.domain.model import Person

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("ROLLCALL_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("ROLLCALL_REGISTRY", raising=False)
    monkeypatch.delenv("ROLLCALL_SILENT", raising=False)


@pytest.fixture
def alice() -> Person:
    return Person.registered(
        first_name="Alice",
        last_name="Smith",
        date_of_birth=date(2000, 1, 1),
        government_id="GOV1",
    )


@pytest.fixture
def write_people_file(tmp_path: Path) -> Callable[[str, list[dict[str, Any]]], Path]:
    def write(name: str, records: list[dict[str, Any]]) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps({"people": records, "total": len(records)}), encoding="utf-8")
        return path

    return write
