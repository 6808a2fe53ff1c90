"""Import reconciliation: merge an incoming batch of people into a registry.

Layered flow:
1) classify each incoming record (duplicate / conflict / novel)
2) settle conflicts through a decision provider, optionally "apply to all"
3) insert the records that are still novel and report a tally
"""

from __future__ import annotations

from .contracts import (
    Classification,
    ClassificationStatus,
    Conflict,
    ConflictInfo,
    ConflictKind,
    Decision,
    Duplicate,
    Novel,
    ReconciliationResult,
    ResolutionStep,
    Tally,
)
from .coordinator import DecisionProvider, ResolutionCoordinator, ResolutionState
from .detect import is_exact_duplicate
from .engine import ReconciliationEngine, reconcile
from .identity import identical
from .providers import KeepExistingDecisionProvider, ScriptedDecisionProvider

__all__ = [
    "Classification",
    "ClassificationStatus",
    "Conflict",
    "ConflictInfo",
    "ConflictKind",
    "Decision",
    "DecisionProvider",
    "Duplicate",
    "KeepExistingDecisionProvider",
    "Novel",
    "ReconciliationEngine",
    "ReconciliationResult",
    "ResolutionCoordinator",
    "ResolutionState",
    "ResolutionStep",
    "ScriptedDecisionProvider",
    "Tally",
    "identical",
    "is_exact_duplicate",
    "reconcile",
]
