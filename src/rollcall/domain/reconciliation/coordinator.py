"""Interactive resolution of detected conflicts.

The coordinator walks the detected conflicts in order and asks a decision
provider what to do with each one. Choosing "apply to all" asks the provider
for one global decision that is then reused for every remaining conflict
without further prompts; cancelling that global prompt re-offers the same
conflict instead of consuming it.

Every conflict carries the registry index it was detected at. Those indices
are captured before the first mutation and stay valid because
``Registry.update`` never moves other entries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from .contracts import Decision, ResolutionStep

if TYPE_CHECKING:
    from collections.abc import Sequence

    from rollcall.domain.registry import Registry

    from .contracts import ConflictInfo

log = logging.getLogger(__name__)

_GLOBAL_DECISIONS = frozenset({Decision.KEEP_EXISTING, Decision.USE_NEW, Decision.SKIP})


class DecisionProvider(Protocol):
    """Source of user decisions; calls block until an answer is available."""

    def decide_one(self, conflict: ConflictInfo, remaining_count: int) -> Decision: ...

    def decide_global(self) -> Decision: ...


@dataclass(slots=True)
class ResolutionState:
    """Progress of one coordinator run, including the apply-to-all mode."""

    total: int
    position: int = 0
    applying_globally: bool = False
    global_choice: Decision | None = None
    resolved: int = 0
    skipped: int = 0
    unresolved: int = 0
    steps: list[ResolutionStep] = field(default_factory=list["ResolutionStep"])

    @property
    def remaining(self) -> int:
        return self.total - self.position

    @property
    def finished(self) -> bool:
        return self.position >= self.total

    def enter_global_mode(self, choice: Decision) -> None:
        self.applying_globally = True
        self.global_choice = choice


@dataclass(slots=True)
class ResolutionCoordinator:
    """Drive a decision provider over a list of conflicts and apply the answers."""

    registry: Registry
    provider: DecisionProvider

    def run(self, conflicts: Sequence[ConflictInfo]) -> ResolutionState:
        state = ResolutionState(total=len(conflicts))
        while not state.finished:
            conflict = conflicts[state.position]
            choice = self._next_choice(conflict, state)
            if choice is None:
                log.debug("Global decision cancelled; re-offering conflict %s", state.position)
                continue
            self._commit(conflict, choice, state)
            state.position += 1
        log.debug(
            "Resolved conflicts: resolved=%s, skipped=%s, unresolved=%s",
            state.resolved,
            state.skipped,
            state.unresolved,
        )
        return state

    def _next_choice(self, conflict: ConflictInfo, state: ResolutionState) -> Decision | None:
        """Return the decision for the current conflict, or None to ask again."""

        if state.applying_globally and state.global_choice is not None:
            return state.global_choice

        try:
            choice = _coerce(self.provider.decide_one(conflict, state.remaining))
        except Exception:  # noqa: BLE001
            log.exception("Decision provider failed for conflict %s", state.position)
            return Decision.CANCEL
        if choice is not Decision.APPLY_TO_ALL:
            return choice

        try:
            global_choice = _coerce(self.provider.decide_global())
        except Exception:  # noqa: BLE001
            log.exception("Decision provider failed to choose for all remaining conflicts")
            return Decision.CANCEL
        if global_choice not in _GLOBAL_DECISIONS:
            return None
        state.enter_global_mode(global_choice)
        return global_choice

    def _commit(self, conflict: ConflictInfo, choice: Decision, state: ResolutionState) -> None:
        applied = False
        if choice is Decision.USE_NEW:
            applied = self.registry.update(conflict.existing_index, conflict.incoming_record)
            if applied:
                state.resolved += 1
            else:
                log.warning(
                    "Registry refused to replace entry %s with %s",
                    conflict.existing_index,
                    conflict.incoming_record,
                )
                state.unresolved += 1
        elif choice is Decision.KEEP_EXISTING:
            applied = True
            state.resolved += 1
        elif choice is Decision.SKIP:
            applied = True
            state.skipped += 1
        else:
            state.unresolved += 1
        state.steps.append(
            ResolutionStep(
                position=state.position,
                conflict=conflict,
                decision=choice,
                applied=applied,
            )
        )


def _coerce(value: object) -> Decision:
    if isinstance(value, Decision):
        return value
    log.warning("Ignoring out-of-contract decision %r; treating it as cancel", value)
    return Decision.CANCEL
