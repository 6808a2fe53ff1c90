"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from rollcall.adapters.json_file import load_people, load_registry, save_people
from rollcall.config import get_reconcile_config, get_storage_config
from rollcall.domain.reconciliation import ReconciliationEngine

if TYPE_CHECKING:
    from pathlib import Path

    from rollcall.domain.model import Person
    from rollcall.domain.reconciliation import DecisionProvider, ReconciliationResult


log = getLogger(__name__)


def resolve_registry_path(registry_path: Path | None = None) -> Path:
    return registry_path or get_storage_config().registry_path()


def import_people_file(
    batch_path: Path,
    *,
    registry_path: Path | None = None,
    decision_provider: DecisionProvider | None = None,
    silent: bool | None = None,
    dry_run: bool = False,
    engine: ReconciliationEngine | None = None,
) -> ReconciliationResult:
    """Reconcile the people in ``batch_path`` into the registry file.

    The registry is only written back when the run changed it and ``dry_run``
    is off.
    """

    effective_registry_path = resolve_registry_path(registry_path)
    effective_silent = get_reconcile_config().silent if silent is None else silent
    effective_engine = engine or ReconciliationEngine()
    log.info(
        "Starting import: batch=%s, registry=%s, silent=%s, dry_run=%s",
        batch_path,
        effective_registry_path,
        effective_silent,
        dry_run,
    )

    registry = load_registry(effective_registry_path)
    batch = load_people(batch_path)
    result = effective_engine.reconcile(
        batch,
        registry,
        decision_provider,
        silent=effective_silent,
    )

    if registry.modified and not dry_run:
        written = save_people(effective_registry_path, registry)
        log.info("Saved %s people to %s", written, effective_registry_path)
    return result


def list_registry(registry_path: Path | None = None) -> tuple[Person, ...]:
    """Return the people currently stored in the registry file."""

    return load_registry(resolve_registry_path(registry_path)).people()
