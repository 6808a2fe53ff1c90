"""Orchestrator for importing a batch of people into a registry.

Flow of one run:
1) scan the batch; exact duplicates are counted and set aside, conflicts are
   collected with the registry index they collide with
2) let the resolution coordinator settle the conflicts
3) re-check every remaining record against the (possibly updated) registry and
   add the ones that are still novel

A record that only became a duplicate or a conflict because of step 2 is
dropped, never re-queued for another round of decisions.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from rollcall.domain.model import Person

from .contracts import Conflict, ConflictInfo, Novel, ReconciliationResult
from .coordinator import ResolutionCoordinator
from .detect import detect, is_exact_duplicate
from .providers import KeepExistingDecisionProvider

if TYPE_CHECKING:
    from collections.abc import Iterable

    from rollcall.domain.registry import Registry

    from .coordinator import DecisionProvider
    from .detect import DetectConflict

IsExactDuplicate: TypeAlias = "Callable[[Person | None, Registry], bool]"

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ReconciliationEngine:
    """Merge incoming person records into a registry."""

    detect: DetectConflict = detect
    is_exact_duplicate: IsExactDuplicate = is_exact_duplicate

    def reconcile(
        self,
        incoming_batch: Iterable[object],
        registry: Registry,
        decision_provider: DecisionProvider | None = None,
        *,
        silent: bool = False,
    ) -> ReconciliationResult:
        """Import ``incoming_batch`` into ``registry`` and report what happened.

        ``silent`` (or a missing provider) resolves every conflict by keeping
        the existing entry without asking.
        """

        result = ReconciliationResult()
        tally = result.tally
        records = _valid_records(incoming_batch)
        if not records:
            return result

        handled: set[int] = set()
        conflicts: list[ConflictInfo] = []
        for record in records:
            if self.is_exact_duplicate(record, registry):
                handled.add(id(record))
                tally.duplicates_skipped += 1
                continue
            classification = self.detect(record, registry)
            if isinstance(classification, Conflict):
                conflicts.append(classification.info)
                handled.add(id(record))

        if conflicts:
            provider = decision_provider
            if silent or provider is None:
                provider = KeepExistingDecisionProvider()
            state = ResolutionCoordinator(registry=registry, provider=provider).run(conflicts)
            tally.conflicts_resolved = state.resolved
            tally.conflicts_skipped = state.skipped
            tally.conflicts_unresolved = state.unresolved
            result.steps.extend(state.steps)

        for record in records:
            if id(record) in handled:
                continue
            if self.is_exact_duplicate(record, registry):
                tally.duplicates_skipped += 1
                continue
            classification = self.detect(record, registry)
            if not isinstance(classification, Novel):
                log.debug("Dropping %s; it collides with an updated entry", record)
                continue
            if registry.add(record):
                tally.imported += 1
            else:
                log.warning("Registry refused to add %s", record)

        log.info(
            "Import finished: imported=%s, duplicates=%s, resolved=%s, skipped=%s, unresolved=%s",
            tally.imported,
            tally.duplicates_skipped,
            tally.conflicts_resolved,
            tally.conflicts_skipped,
            tally.conflicts_unresolved,
        )
        return result


def reconcile(
    incoming_batch: Iterable[object],
    registry: Registry,
    decision_provider: DecisionProvider | None = None,
    *,
    silent: bool = False,
) -> ReconciliationResult:
    """Run the default engine once."""

    return ReconciliationEngine().reconcile(
        incoming_batch, registry, decision_provider, silent=silent
    )


def _valid_records(incoming_batch: Iterable[object]) -> list[Person]:
    records: list[Person] = []
    for record in incoming_batch:
        if isinstance(record, Person):
            records.append(record)
        else:
            log.debug("Dropping malformed incoming record: %r", record)
    return records
