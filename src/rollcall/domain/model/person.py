"""Person records and their identity variants.

A person is either plain, registered (carries a government ID) or enrolled
(carries a government ID and a student ID). The variant is held in
``Person.identity`` and validated when it is constructed.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, TypeAlias

from .enums import PersonKind
from .primitives import format_date

if TYPE_CHECKING:
    from datetime import date

    from .primitives import IdentityKey


class InvalidIdentityError(ValueError):
    """Raised when an identity variant is missing a required key."""


@dataclass(frozen=True, slots=True)
class PlainIdentity:
    """No identity keys."""


@dataclass(frozen=True, slots=True)
class RegisteredIdentity:
    government_id: IdentityKey

    def __post_init__(self) -> None:
        if not self.government_id:
            raise InvalidIdentityError("Registered identity requires a government ID")


@dataclass(frozen=True, slots=True)
class EnrolledIdentity:
    government_id: IdentityKey
    student_id: IdentityKey

    def __post_init__(self) -> None:
        if not self.government_id:
            raise InvalidIdentityError("Enrolled identity requires a government ID")
        if not self.student_id:
            raise InvalidIdentityError("Enrolled identity requires a student ID")


Identity: TypeAlias = PlainIdentity | RegisteredIdentity | EnrolledIdentity


@dataclass(frozen=True, slots=True, kw_only=True)
class Person:
    first_name: str
    last_name: str
    date_of_birth: date
    identity: Identity = field(default_factory=PlainIdentity)
    description: str = ""
    tags: tuple[str, ...] = ()

    @classmethod
    def registered(
        cls,
        *,
        first_name: str,
        last_name: str,
        date_of_birth: date,
        government_id: IdentityKey,
        description: str = "",
        tags: tuple[str, ...] = (),
    ) -> Person:
        return cls(
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
            identity=RegisteredIdentity(government_id),
            description=description,
            tags=tags,
        )

    @classmethod
    def enrolled(
        cls,
        *,
        first_name: str,
        last_name: str,
        date_of_birth: date,
        government_id: IdentityKey,
        student_id: IdentityKey,
        description: str = "",
        tags: tuple[str, ...] = (),
    ) -> Person:
        return cls(
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
            identity=EnrolledIdentity(government_id, student_id),
            description=description,
            tags=tags,
        )

    @property
    def kind(self) -> PersonKind:
        if isinstance(self.identity, EnrolledIdentity):
            return PersonKind.ENROLLED
        if isinstance(self.identity, RegisteredIdentity):
            return PersonKind.REGISTERED
        return PersonKind.PERSON

    @property
    def is_registered(self) -> bool:
        """True for registered and enrolled people alike."""
        return not isinstance(self.identity, PlainIdentity)

    @property
    def is_enrolled(self) -> bool:
        return isinstance(self.identity, EnrolledIdentity)

    @property
    def government_id(self) -> IdentityKey | None:
        if isinstance(self.identity, (RegisteredIdentity, EnrolledIdentity)):
            return self.identity.government_id
        return None

    @property
    def student_id(self) -> IdentityKey | None:
        if isinstance(self.identity, EnrolledIdentity):
            return self.identity.student_id
        return None

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def with_metadata(self, *, description: str, tags: tuple[str, ...]) -> Person:
        return replace(self, description=description, tags=tags)

    def __str__(self) -> str:
        text = f"{self.last_name}, {self.first_name} ({format_date(self.date_of_birth)})"
        if self.government_id is not None:
            text += f" [{self.government_id}]"
        if self.student_id is not None:
            text += f" {{{self.student_id}}}"
        return text
