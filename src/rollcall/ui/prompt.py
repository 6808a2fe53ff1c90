"""Terminal prompts for resolving import conflicts."""

# ruff: noqa: T201

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rollcall.domain.model import format_date
from rollcall.domain.reconciliation import ConflictKind, Decision

if TYPE_CHECKING:
    from collections.abc import Callable

    from rollcall.domain.model import Person
    from rollcall.domain.reconciliation import ConflictInfo


_KIND_LABELS: dict[ConflictKind, str] = {
    ConflictKind.GOVERNMENT_ID: "Government ID",
    ConflictKind.STUDENT_ID: "Student ID",
    ConflictKind.BASIC_IDENTITY: "Person",
}

_ONE_CHOICES: dict[str, Decision] = {
    "k": Decision.KEEP_EXISTING,
    "u": Decision.USE_NEW,
    "s": Decision.SKIP,
    "a": Decision.APPLY_TO_ALL,
    "c": Decision.CANCEL,
}

_GLOBAL_CHOICES: dict[str, Decision] = {
    "k": Decision.KEEP_EXISTING,
    "i": Decision.USE_NEW,
    "s": Decision.SKIP,
    "c": Decision.CANCEL,
}


def _print(text: str) -> None:
    print(text)


@dataclass(slots=True)
class TerminalDecisionProvider:
    """Ask on the terminal how to resolve each conflict.

    End of input answers ``cancel``, which leaves the conflict unresolved.
    """

    read: Callable[[str], str] = input
    write: Callable[[str], None] = _print

    def decide_one(self, conflict: ConflictInfo, remaining_count: int) -> Decision:
        label = _KIND_LABELS[conflict.conflict_kind]
        header = f"Conflict detected: {label} '{conflict.conflicting_value}' already exists."
        if remaining_count > 1:
            header += f" ({remaining_count} conflicts remaining)"
        self.write(header)
        for line in comparison_lines(conflict.existing_record, conflict.incoming_record):
            self.write(line)
        return self._ask(
            "[k]eep existing, [u]se new, [s]kip, [a]pply to all..., [c]ancel: ",
            _ONE_CHOICES,
        )

    def decide_global(self) -> Decision:
        self.write("How do you want to resolve all remaining conflicts?")
        return self._ask(
            "[k]eep all existing, [i]mport all new, [s]kip all, [c]ancel: ",
            _GLOBAL_CHOICES,
        )

    def _ask(self, prompt: str, choices: dict[str, Decision]) -> Decision:
        while True:
            try:
                answer = self.read(prompt)
            except EOFError:
                return Decision.CANCEL
            choice = choices.get(answer.strip().lower()[:1])
            if choice is not None:
                return choice
            self.write(f"Please answer one of: {', '.join(choices)}")


def comparison_lines(existing: Person, incoming: Person) -> list[str]:
    """Rows comparing the existing entry with the imported one; differences get a ``*``."""

    rows = [
        ("Name", existing.display_name, incoming.display_name),
        ("DOB", format_date(existing.date_of_birth), format_date(incoming.date_of_birth)),
    ]
    if existing.is_registered and incoming.is_registered:
        rows.append(("Government ID", existing.government_id or "", incoming.government_id or ""))
    if existing.is_enrolled and incoming.is_enrolled:
        rows.append(("Student ID", existing.student_id or "", incoming.student_id or ""))

    width = max(len(row[1]) for row in rows)
    width = max(width, len("Existing"))
    lines = [f"  {'':<14} {'Existing':<{width}}  New (Import)"]
    for field_name, old, new in rows:
        marker = "*" if old != new else " "
        lines.append(f"{marker} {field_name:<14} {old:<{width}}  {new}")
    return lines
