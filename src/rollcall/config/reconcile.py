"""Defaults for import reconciliation runs."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    silent: bool = False


def get_reconcile_config() -> ReconcileConfig:
    return ReconcileConfig(silent=env_flag("ROLLCALL_SILENT"))
