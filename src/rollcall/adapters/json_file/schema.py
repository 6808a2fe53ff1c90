"""Pydantic models for the JSON people export format.

The format is the one written by the desktop application's JSON export::

    {"exportDate": "...", "people": [{"firstName": ..., "type": "OCCCPerson"}], "total": 1}
"""

from __future__ import annotations

from typing import Any, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, field_validator

RecordType: TypeAlias = Literal["Person", "RegisteredPerson", "OCCCPerson"]


class PeopleBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PersonRecord(PeopleBaseModel):
    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(alias="lastName", min_length=1)
    dob: str
    government_id: str | None = Field(default=None, alias="governmentID")
    student_id: str | None = Field(default=None, alias="studentID")
    type: RecordType | None = None
    description: str = ""
    tags: list[str] = Field(default_factory=list["str"])

    @field_validator("first_name", "last_name", "dob", mode="before")
    @classmethod
    def _strip(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> Any:
        # older exports store tags as one comma separated string
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        if value is None:
            return []
        return value


class PeopleFile(PeopleBaseModel):
    export_date: str | None = Field(default=None, alias="exportDate")
    people: list[Any] = Field(default_factory=list["Any"])
    total: int | None = None
