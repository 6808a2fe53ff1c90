"""Non-interactive decision providers."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .contracts import Decision

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .contracts import ConflictInfo


@dataclass(frozen=True, slots=True)
class KeepExistingDecisionProvider:
    """Silent policy: every conflict keeps the registry entry."""

    def decide_one(self, conflict: ConflictInfo, remaining_count: int) -> Decision:
        return Decision.KEEP_EXISTING

    def decide_global(self) -> Decision:
        return Decision.KEEP_EXISTING


@dataclass(slots=True)
class ScriptedDecisionProvider:
    """Replay fixed answers in order and record every prompt.

    Once a script runs dry the provider answers ``fallback``.
    """

    one: deque[Decision] = field(default_factory=deque["Decision"])
    global_: deque[Decision] = field(default_factory=deque["Decision"])
    fallback: Decision = Decision.CANCEL
    one_calls: list[tuple[ConflictInfo, int]] = field(
        default_factory=list[tuple["ConflictInfo", int]]
    )
    global_calls: int = 0

    @classmethod
    def from_script(
        cls,
        one: Iterable[Decision] = (),
        global_: Iterable[Decision] = (),
        *,
        fallback: Decision = Decision.CANCEL,
    ) -> ScriptedDecisionProvider:
        return cls(one=deque(one), global_=deque(global_), fallback=fallback)

    def decide_one(self, conflict: ConflictInfo, remaining_count: int) -> Decision:
        self.one_calls.append((conflict, remaining_count))
        return self.one.popleft() if self.one else self.fallback

    def decide_global(self) -> Decision:
        self.global_calls += 1
        return self.global_.popleft() if self.global_ else self.fallback
