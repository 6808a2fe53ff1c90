"""Conflict detection for incoming person records.

Responsibilities of this stage:
- decide whether an incoming record is already present in the registry
- find the registry entry an incoming record collides with, and on which key
- stay read-only: detection never mutates the registry

Key precedence: a government ID match wins over a student ID match, so the
student ID of an enrolled record is only consulted when its government ID is
unknown to the registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from .contracts import Conflict, ConflictInfo, ConflictKind, Duplicate, Novel
from .identity import identical, same_basic_identity

if TYPE_CHECKING:
    from collections.abc import Iterator

    from rollcall.domain.model import Person
    from rollcall.domain.registry import Registry

    from .contracts import Classification


class DetectConflict(Protocol):
    """Classify one incoming record against the registry."""

    def __call__(self, incoming: Person | None, registry: Registry) -> Classification: ...


def is_exact_duplicate(incoming: Person | None, registry: Registry) -> bool:
    """True when some registry entry is ``identical`` to ``incoming``."""

    if incoming is None:
        return False
    return any(identical(existing, incoming) for _index, existing in _entries(registry))


def detect(incoming: Person | None, registry: Registry) -> Classification:
    """Classify ``incoming`` as a duplicate, a conflict, or a novel record."""

    if incoming is None:
        return Novel()

    if incoming.is_registered:
        classification = _match_government_id(incoming, registry)
        if classification is not None:
            return classification

    if incoming.is_enrolled:
        classification = _match_student_id(incoming, registry)
        if classification is not None:
            return classification

    if not incoming.is_registered:
        classification = _match_basic_identity(incoming, registry)
        if classification is not None:
            return classification

    return Novel()


def _match_government_id(incoming: Person, registry: Registry) -> Classification | None:
    government_id = incoming.government_id
    for index, existing in _entries(registry):
        if not existing.is_registered or existing.government_id != government_id:
            continue
        if identical(existing, incoming):
            return Duplicate(existing_index=index)
        return _conflict(existing, incoming, index, ConflictKind.GOVERNMENT_ID, government_id)
    return None


def _match_student_id(incoming: Person, registry: Registry) -> Classification | None:
    student_id = incoming.student_id
    for index, existing in _entries(registry):
        if not existing.is_enrolled or existing.student_id != student_id:
            continue
        if identical(existing, incoming):
            return Duplicate(existing_index=index)
        return _conflict(existing, incoming, index, ConflictKind.STUDENT_ID, student_id)
    return None


def _match_basic_identity(incoming: Person, registry: Registry) -> Classification | None:
    # Reached only for plain records; the engine filters identical ones out
    # first, so through ``reconcile`` this never produces a conflict.
    if not incoming.first_name or not incoming.last_name:
        return None
    for index, existing in _entries(registry):
        if existing.is_registered or not same_basic_identity(existing, incoming):
            continue
        return _conflict(
            existing, incoming, index, ConflictKind.BASIC_IDENTITY, incoming.display_name
        )
    return None


def _conflict(
    existing: Person,
    incoming: Person,
    index: int,
    kind: ConflictKind,
    value: str | None,
) -> Conflict:
    return Conflict(
        info=ConflictInfo(
            existing_record=existing,
            incoming_record=incoming,
            existing_index=index,
            conflict_kind=kind,
            conflicting_value=value or "",
        )
    )


def _entries(registry: Registry) -> Iterator[tuple[int, Person]]:
    for index in range(registry.size()):
        yield index, registry.get(index)
