"""Structural identity between person records."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rollcall.domain.model import Person


def same_basic_identity(first: Person, second: Person) -> bool:
    """Equal first name, last name and date of birth."""

    return (
        first.first_name == second.first_name
        and first.last_name == second.last_name
        and first.date_of_birth == second.date_of_birth
    )


def identical(first: Person, second: Person) -> bool:
    """Return True when two records describe the same person with the same keys.

    A registered record is never identical to a plain one, and an enrolled
    record never to a merely registered one. Description and tags are ignored.
    """

    if not same_basic_identity(first, second):
        return False
    if first.is_registered != second.is_registered:
        return False
    if not first.is_registered:
        return True
    if first.government_id != second.government_id:
        return False
    if first.is_enrolled != second.is_enrolled:
        return False
    return first.student_id == second.student_id
