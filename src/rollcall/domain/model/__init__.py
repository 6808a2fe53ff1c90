"""Public domain model surface."""

from __future__ import annotations

from rollcall.domain.model.enums import PersonKind
from rollcall.domain.model.person import (
    EnrolledIdentity,
    Identity,
    InvalidIdentityError,
    Person,
    PlainIdentity,
    RegisteredIdentity,
)
from rollcall.domain.model.primitives import (
    DATE_FORMAT,
    IdentityKey,
    InvalidDateError,
    format_date,
    normalize_identity_key,
    parse_date,
)

__all__ = [  # noqa: RUF022
    # people
    "Person",
    "Identity",
    "PlainIdentity",
    "RegisteredIdentity",
    "EnrolledIdentity",
    "InvalidIdentityError",
    # enums
    "PersonKind",
    # primitives
    "DATE_FORMAT",
    "IdentityKey",
    "InvalidDateError",
    "format_date",
    "normalize_identity_key",
    "parse_date",
]
