"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class PersonKind(StrEnum):
    """Which identity variant a person carries."""

    PERSON = "person"
    REGISTERED = "registered"
    ENROLLED = "enrolled"
