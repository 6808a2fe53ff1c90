"""Domain primitives: identity keys and calendar dates."""

from __future__ import annotations

from datetime import date
from typing import Final, TypeAlias

IdentityKey: TypeAlias = str

DATE_FORMAT: Final[str] = "%m/%d/%Y"


class InvalidDateError(ValueError):
    """Raised when a date of birth cannot be interpreted as a calendar date."""


def normalize_identity_key(value: str) -> IdentityKey:
    """Uppercase ``value`` and keep ASCII letters and digits only."""

    return "".join(char for char in value.upper() if char.isascii() and char.isalnum())


def parse_date(value: str) -> date:
    """Parse a ``MM/dd/yyyy`` date.

    Single digit months and days are accepted (``1/1/2000``), mirroring how the
    exported files were written by hand.
    """

    parts = value.strip().split("/")
    if len(parts) != 3:
        raise InvalidDateError(f"Illegal date format: {value!r}")
    try:
        month, day, year = (int(part) for part in parts)
        return date(year, month, day)
    except ValueError as exc:
        raise InvalidDateError(f"Illegal date: {value!r}") from exc


def format_date(value: date) -> str:
    return value.strftime(DATE_FORMAT)
