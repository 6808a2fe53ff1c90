"""Translate JSON person records into domain people and back."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rollcall.domain.model import (
    InvalidDateError,
    InvalidIdentityError,
    Person,
    PersonKind,
    format_date,
    normalize_identity_key,
    parse_date,
)

from .schema import PersonRecord

if TYPE_CHECKING:
    from .schema import RecordType


class InvalidRecordError(ValueError):
    """Raised when a record cannot be turned into a person."""


_TYPE_BY_KIND: dict[PersonKind, RecordType] = {
    PersonKind.PERSON: "Person",
    PersonKind.REGISTERED: "RegisteredPerson",
    PersonKind.ENROLLED: "OCCCPerson",
}


def translate_record(record: PersonRecord) -> Person:
    try:
        date_of_birth = parse_date(record.dob)
    except InvalidDateError as exc:
        raise InvalidRecordError(str(exc)) from exc

    government_id = normalize_identity_key(record.government_id or "")
    student_id = normalize_identity_key(record.student_id or "")
    kind = _kind_for(record, government_id=government_id, student_id=student_id)
    common = {
        "first_name": record.first_name,
        "last_name": record.last_name,
        "date_of_birth": date_of_birth,
        "description": record.description,
        "tags": tuple(record.tags),
    }
    try:
        if kind is PersonKind.ENROLLED:
            return Person.enrolled(government_id=government_id, student_id=student_id, **common)
        if kind is PersonKind.REGISTERED:
            return Person.registered(government_id=government_id, **common)
    except InvalidIdentityError as exc:
        raise InvalidRecordError(f"{record.first_name} {record.last_name}: {exc}") from exc
    return Person(**common)


def translate_person(person: Person) -> PersonRecord:
    return PersonRecord(
        first_name=person.first_name,
        last_name=person.last_name,
        dob=format_date(person.date_of_birth),
        government_id=person.government_id,
        student_id=person.student_id,
        type=_TYPE_BY_KIND[person.kind],
        description=person.description,
        tags=list(person.tags),
    )


def _kind_for(record: PersonRecord, *, government_id: str, student_id: str) -> PersonKind:
    if record.type == "OCCCPerson":
        return PersonKind.ENROLLED
    if record.type == "RegisteredPerson":
        return PersonKind.REGISTERED
    if record.type == "Person":
        return PersonKind.PERSON
    if government_id and student_id:
        return PersonKind.ENROLLED
    if government_id:
        return PersonKind.REGISTERED
    return PersonKind.PERSON
