"""JSON file adapter for people exports."""

from __future__ import annotations

from .schema import PeopleFile, PersonRecord
from .store import RecordFileError, load_people, load_registry, save_people
from .translator import InvalidRecordError, translate_person, translate_record

__all__ = [
    "InvalidRecordError",
    "PeopleFile",
    "PersonRecord",
    "RecordFileError",
    "load_people",
    "load_registry",
    "save_people",
    "translate_person",
    "translate_record",
]
