from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from rollcall.app import import_people_file, list_registry
from rollcall.config import configure_logging
from rollcall.ui.prompt import TerminalDecisionProvider

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from rollcall.domain.reconciliation import Tally

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Manage a registry of people")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    importer = subparsers.add_parser("import", help="Import people from a JSON export")
    importer.add_argument(
        "batch",
        type=Path,
        help="JSON file with the people to import",
    )
    importer.add_argument(
        "--registry",
        type=Path,
        help="Registry file to import into (defaults to config)",
    )
    importer.add_argument(
        "--silent",
        action="store_true",
        default=None,
        help="Keep existing entries for every conflict without asking",
    )
    importer.add_argument(
        "--dry-run",
        action="store_true",
        help="Reconcile without writing the registry back",
    )

    show = subparsers.add_parser("show", help="List the people in the registry")
    show.add_argument(
        "--registry",
        type=Path,
        help="Registry file to read (defaults to config)",
    )

    return parser.parse_args(list(argv))


def describe_tally(tally: Tally) -> str:
    if not any(
        (
            tally.imported,
            tally.duplicates_skipped,
            tally.conflicts_resolved,
            tally.conflicts_skipped,
            tally.conflicts_unresolved,
        )
    ):
        return "No changes were made during import."
    parts = [
        f"{tally.imported} imported",
        f"{tally.duplicates_skipped} duplicates skipped",
        f"{tally.conflicts_resolved} conflicts resolved",
    ]
    if tally.conflicts_skipped:
        parts.append(f"{tally.conflicts_skipped} conflicts skipped")
    if tally.conflicts_unresolved:
        parts.append(f"{tally.conflicts_unresolved} conflicts left unresolved")
    return "Import complete: " + ", ".join(parts)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "import":
            result = import_people_file(
                parsed_args.batch,
                registry_path=parsed_args.registry,
                decision_provider=TerminalDecisionProvider(),
                silent=parsed_args.silent,
                dry_run=parsed_args.dry_run,
            )
            log.info("%s", describe_tally(result.tally))
        elif parsed_args.command == "show":
            people = list_registry(parsed_args.registry)
            for position, person in enumerate(people, start=1):
                print(f"{position:>4}. {person}")  # noqa: T201
            log.info("%s people in registry", len(people))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
