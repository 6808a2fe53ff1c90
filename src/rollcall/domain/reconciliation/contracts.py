"""Shared reconciliation contract components.

This module intentionally holds only:
- the per-record classification variants produced by conflict detection
- decisions returned by a decision provider
- the summary types handed back to callers
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from rollcall.domain.model import Person


class ConflictKind(StrEnum):
    """Which identity key an incoming record collided on."""

    GOVERNMENT_ID = "government_id"
    STUDENT_ID = "student_id"
    BASIC_IDENTITY = "basic_identity"


class ClassificationStatus(StrEnum):
    DUPLICATE = "duplicate"
    CONFLICT = "conflict"
    NOVEL = "novel"


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictInfo:
    """An incoming record that shares an identity key with a registry entry."""

    existing_record: Person
    incoming_record: Person
    existing_index: int
    conflict_kind: ConflictKind
    conflicting_value: str


@dataclass(frozen=True, slots=True, kw_only=True)
class Duplicate:
    """Incoming record is identical to the registry entry at ``existing_index``."""

    existing_index: int
    status: Literal[ClassificationStatus.DUPLICATE] = ClassificationStatus.DUPLICATE


@dataclass(frozen=True, slots=True, kw_only=True)
class Conflict:
    info: ConflictInfo
    status: Literal[ClassificationStatus.CONFLICT] = ClassificationStatus.CONFLICT


@dataclass(frozen=True, slots=True, kw_only=True)
class Novel:
    """Incoming record matches nothing in the registry."""

    status: Literal[ClassificationStatus.NOVEL] = ClassificationStatus.NOVEL


Classification: TypeAlias = Duplicate | Conflict | Novel


class Decision(StrEnum):
    """Answer a decision provider gives for one conflict (or for all remaining)."""

    KEEP_EXISTING = "keep_existing"
    USE_NEW = "use_new"
    SKIP = "skip"
    APPLY_TO_ALL = "apply_to_all"
    CANCEL = "cancel"


@dataclass(frozen=True, slots=True, kw_only=True)
class ResolutionStep:
    """One conflict consumed by the coordinator, in the order it was consumed.

    ``applied`` is False when the decision had no effect: a cancelled conflict,
    a failed provider call, or a registry that refused the update.
    """

    position: int
    conflict: ConflictInfo
    decision: Decision
    applied: bool


@dataclass(slots=True)
class Tally:
    """Counts reported back to the user after an import."""

    imported: int = 0
    duplicates_skipped: int = 0
    conflicts_resolved: int = 0
    conflicts_skipped: int = 0
    conflicts_unresolved: int = 0


@dataclass(slots=True)
class ReconciliationResult:
    tally: Tally = field(default_factory=Tally)
    steps: list[ResolutionStep] = field(default_factory=list["ResolutionStep"])
