# tests/test_mutations.py

from __future__ import annotations

from taskview.core.mutations import toggle_complete
from taskview.core.state import SyncPhase, SyncState

from .fakes import BUY_MILK, PAY_BILLS, WALK_DOG


def _ready(*tasks) -> SyncState:
    return SyncState(tasks=tuple(tasks), phase=SyncPhase.READY)


def test_toggle_flips_only_the_matching_task() -> None:
    state = _ready(BUY_MILK, PAY_BILLS, WALK_DOG)

    new_state = toggle_complete(state, PAY_BILLS.id)

    assert new_state is not state
    assert new_state.tasks[1].completed is False
    assert new_state.tasks[1].title == PAY_BILLS.title
    # Untouched tasks are the very same objects.
    assert new_state.tasks[0] is BUY_MILK
    assert new_state.tasks[2] is WALK_DOG
    # The previous state value is not modified.
    assert state.tasks[1] is PAY_BILLS


def test_toggle_twice_restores_original_value() -> None:
    state = _ready(BUY_MILK, PAY_BILLS)

    twice = toggle_complete(toggle_complete(state, BUY_MILK.id), BUY_MILK.id)

    assert twice.tasks == state.tasks


def test_toggle_unknown_id_is_a_noop() -> None:
    state = _ready(BUY_MILK)

    assert toggle_complete(state, 999) is state


def test_controller_toggle_does_not_touch_cache_or_source(state) -> None:
    controller = state.controller
    controller._set_state(_ready(BUY_MILK))

    controller.toggle_complete(BUY_MILK.id)

    assert controller.state.tasks[0].completed is True
    assert state.cache.writes == []
    assert state.source.calls == 0
