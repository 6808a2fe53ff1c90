from __future__ import annotations

from datetime import date

from rollcall.domain.model import Person
from rollcall.domain.reconciliation import (
    ConflictInfo,
    ConflictKind,
    Decision,
    ResolutionCoordinator,
    ScriptedDecisionProvider,
)
from rollcall.domain.registry import PeopleRegistry


def _person(first: str, government_id: str) -> Person:
    return Person.registered(
        first_name=first,
        last_name="Doe",
        date_of_birth=date(1985, 6, 7),
        government_id=government_id,
    )


def _setup(count: int) -> tuple[PeopleRegistry, list[ConflictInfo]]:
    existing = [_person(f"Old{index}", f"G{index}") for index in range(count)]
    registry = PeopleRegistry(existing)
    conflicts = [
        ConflictInfo(
            existing_record=person,
            incoming_record=_person(f"New{index}", f"G{index}"),
            existing_index=index,
            conflict_kind=ConflictKind.GOVERNMENT_ID,
            conflicting_value=f"G{index}",
        )
        for index, person in enumerate(existing)
    ]
    return registry, conflicts


class _ExplodingProvider:
    def __init__(self) -> None:
        self.calls = 0

    def decide_one(self, conflict: ConflictInfo, remaining_count: int) -> Decision:
        self.calls += 1
        if self.calls == 1:
            raise RuntimeError("prompt closed")
        return Decision.USE_NEW

    def decide_global(self) -> Decision:
        raise AssertionError("decide_global should not be called")


def test_each_decision_is_applied_per_conflict() -> None:
    registry, conflicts = _setup(3)
    provider = ScriptedDecisionProvider.from_script(
        [Decision.USE_NEW, Decision.KEEP_EXISTING, Decision.SKIP]
    )

    state = ResolutionCoordinator(registry=registry, provider=provider).run(conflicts)

    assert (state.resolved, state.skipped, state.unresolved) == (2, 1, 0)
    assert [person.first_name for person in registry] == ["New0", "Old1", "Old2"]
    assert [remaining for _conflict, remaining in provider.one_calls] == [3, 2, 1]
    assert [step.decision for step in state.steps] == [
        Decision.USE_NEW,
        Decision.KEEP_EXISTING,
        Decision.SKIP,
    ]


def test_cancel_consumes_conflict_without_credit() -> None:
    registry, conflicts = _setup(2)
    provider = ScriptedDecisionProvider.from_script([Decision.CANCEL, Decision.USE_NEW])

    state = ResolutionCoordinator(registry=registry, provider=provider).run(conflicts)

    assert (state.resolved, state.skipped, state.unresolved) == (1, 0, 1)
    assert registry.get(0).first_name == "Old0"
    assert registry.get(1).first_name == "New1"
    assert state.steps[0].applied is False
    assert len(provider.one_calls) == 2


def test_apply_to_all_reuses_global_choice_without_further_prompts() -> None:
    registry, conflicts = _setup(4)
    provider = ScriptedDecisionProvider.from_script(
        [Decision.SKIP, Decision.APPLY_TO_ALL], [Decision.USE_NEW]
    )

    state = ResolutionCoordinator(registry=registry, provider=provider).run(conflicts)

    assert len(provider.one_calls) == 2
    assert provider.global_calls == 1
    assert state.applying_globally
    assert state.global_choice is Decision.USE_NEW
    assert (state.resolved, state.skipped) == (3, 1)
    assert [person.first_name for person in registry] == ["Old0", "New1", "New2", "New3"]


def test_cancelled_global_choice_reoffers_the_same_conflict() -> None:
    registry, conflicts = _setup(2)
    provider = ScriptedDecisionProvider.from_script(
        [Decision.APPLY_TO_ALL, Decision.USE_NEW, Decision.KEEP_EXISTING],
        [Decision.CANCEL],
    )

    state = ResolutionCoordinator(registry=registry, provider=provider).run(conflicts)

    offered = [(conflict.existing_index, remaining) for conflict, remaining in provider.one_calls]
    assert offered == [(0, 2), (0, 2), (1, 1)]
    assert not state.applying_globally
    assert state.resolved == 2
    assert registry.get(0).first_name == "New0"
    assert len(state.steps) == 2


def test_use_new_targets_indices_captured_before_mutation() -> None:
    registry, conflicts = _setup(3)
    provider = ScriptedDecisionProvider.from_script(fallback=Decision.USE_NEW)

    state = ResolutionCoordinator(registry=registry, provider=provider).run(conflicts)

    assert [step.conflict.existing_index for step in state.steps] == [0, 1, 2]
    assert [person.first_name for person in registry] == ["New0", "New1", "New2"]


def test_out_of_contract_decision_is_treated_as_cancel() -> None:
    registry, conflicts = _setup(1)
    provider = ScriptedDecisionProvider.from_script(["use_new"])  # type: ignore[list-item]

    state = ResolutionCoordinator(registry=registry, provider=provider).run(conflicts)

    assert state.unresolved == 1
    assert state.steps[0].decision is Decision.CANCEL
    assert registry.get(0).first_name == "Old0"


def test_apply_to_all_is_not_a_valid_global_choice() -> None:
    registry, conflicts = _setup(1)
    provider = ScriptedDecisionProvider.from_script(
        [Decision.APPLY_TO_ALL, Decision.KEEP_EXISTING], [Decision.APPLY_TO_ALL]
    )

    state = ResolutionCoordinator(registry=registry, provider=provider).run(conflicts)

    assert len(provider.one_calls) == 2
    assert state.resolved == 1


def test_provider_failure_aborts_only_the_current_conflict() -> None:
    registry, conflicts = _setup(2)
    provider = _ExplodingProvider()

    state = ResolutionCoordinator(registry=registry, provider=provider).run(conflicts)

    assert (state.resolved, state.unresolved) == (1, 1)
    assert registry.get(0).first_name == "Old0"
    assert registry.get(1).first_name == "New1"


class _FailingGlobalProvider:
    def __init__(self) -> None:
        self.offered: list[int] = []
        self.global_calls = 0

    def decide_one(self, conflict: ConflictInfo, remaining_count: int) -> Decision:
        self.offered.append(conflict.existing_index)
        if len(self.offered) == 1:
            return Decision.APPLY_TO_ALL
        return Decision.USE_NEW

    def decide_global(self) -> Decision:
        self.global_calls += 1
        raise RuntimeError("prompt closed")


def test_global_choice_failure_aborts_only_the_current_conflict() -> None:
    registry, conflicts = _setup(2)
    provider = _FailingGlobalProvider()

    state = ResolutionCoordinator(registry=registry, provider=provider).run(conflicts)

    assert provider.global_calls == 1
    assert provider.offered == [0, 1]
    assert not state.applying_globally
    assert state.global_choice is None
    assert (state.resolved, state.unresolved) == (1, 1)
    assert state.steps[0].decision is Decision.CANCEL
    assert registry.get(0).first_name == "Old0"
    assert registry.get(1).first_name == "New1"


def test_refused_update_is_not_counted_as_resolved() -> None:
    registry, _conflicts = _setup(2)
    clashing = ConflictInfo(
        existing_record=registry.get(0),
        incoming_record=_person("Clash", "G1"),
        existing_index=0,
        conflict_kind=ConflictKind.GOVERNMENT_ID,
        conflicting_value="G0",
    )
    provider = ScriptedDecisionProvider.from_script(fallback=Decision.USE_NEW)

    state = ResolutionCoordinator(registry=registry, provider=provider).run([clashing])

    assert state.resolved == 0
    assert state.unresolved == 1
    assert state.steps[0].applied is False
    assert registry.get(0).first_name == "Old0"


def test_empty_conflict_list_never_prompts() -> None:
    registry, _conflicts = _setup(1)
    provider = ScriptedDecisionProvider.from_script()

    state = ResolutionCoordinator(registry=registry, provider=provider).run([])

    assert state.finished
    assert provider.one_calls == []
    assert state.steps == []
