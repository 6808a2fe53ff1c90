"""Read and write JSON people files."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from rollcall.domain.registry import PeopleRegistry

from .schema import PeopleFile, PersonRecord
from .translator import InvalidRecordError, translate_person, translate_record

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from rollcall.domain.model import Person


log = getLogger(__name__)


class RecordFileError(RuntimeError):
    """Raised when a people file cannot be read or written."""


def load_people(path: Path) -> list[Person]:
    """Load every valid person in ``path``; invalid records are skipped."""

    payload = _read_json(path)
    raw_records = payload if isinstance(payload, list) else _people_file(payload, path).people
    people: list[Person] = []
    for position, raw in enumerate(raw_records):
        person = _person_from_raw(raw)
        if person is None:
            log.warning("Skipping invalid record #%s in %s", position + 1, path)
            continue
        people.append(person)
    log.debug("Loaded %s of %s records from %s", len(people), len(raw_records), path)
    return people


def load_registry(path: Path) -> PeopleRegistry:
    """Load a registry file; a missing file is an empty registry."""

    if not path.exists():
        log.info("No registry at %s yet; starting empty", path)
        return PeopleRegistry()
    return PeopleRegistry(load_people(path))


def save_people(path: Path, people: Iterable[Person]) -> int:
    """Write ``people`` to ``path`` and return how many were written."""

    records = [
        translate_person(person).model_dump(by_alias=True, exclude_none=True) for person in people
    ]
    document = PeopleFile(
        export_date=datetime.now(UTC).isoformat(timespec="seconds"),
        people=records,
        total=len(records),
    )
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(document.model_dump(by_alias=True), indent=2) + "\n", encoding="utf-8"
        )
    except OSError as exc:
        raise RecordFileError(f"Cannot write {path}: {exc}") from exc
    return len(records)


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RecordFileError(f"Cannot read {path}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise RecordFileError(f"{path} is not valid JSON: {exc}") from exc


def _people_file(payload: Any, path: Path) -> PeopleFile:
    try:
        return PeopleFile.model_validate(payload)
    except ValidationError as exc:
        raise RecordFileError(f"{path} is not a people file: {exc}") from exc


def _person_from_raw(raw: Any) -> Person | None:
    if raw is None:
        return None
    try:
        return translate_record(PersonRecord.model_validate(raw))
    except (ValidationError, InvalidRecordError) as exc:
        log.debug("Invalid person record %r: %s", raw, exc)
        return None
