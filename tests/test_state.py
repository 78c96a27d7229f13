import dataclasses

import pytest

from srtlingo.errors import StateTransitionError
from srtlingo.state import TranslationState, TranslationStatus


def test_initial_state():
    state = TranslationState.initial()

    assert state.status is TranslationStatus.IDLE
    assert state.progress == 0
    assert state.error is None
    assert state.result is None
    assert not state.is_translating


def test_successful_lifecycle():
    state = TranslationState.initial().start()
    assert state.is_translating

    state = state.advance(34).advance(67).advance(100)
    state = state.succeed("1\nT\nText\n")

    assert state.status is TranslationStatus.SUCCEEDED
    assert state.progress == 100
    assert state.result == "1\nT\nText\n"
    assert state.error is None
    assert not state.is_translating
    assert state.is_finished


def test_failure_keeps_last_progress():
    state = TranslationState.initial().start().advance(34).fail("quota exceeded")

    assert state.status is TranslationStatus.FAILED
    assert state.progress == 34
    assert state.error == "quota exceeded"
    assert state.result is None


def test_progress_cannot_decrease():
    state = TranslationState.initial().start().advance(50)

    with pytest.raises(StateTransitionError):
        state.advance(49)
    assert state.advance(50).progress == 50


@pytest.mark.parametrize("value", [-1, 101])
def test_progress_must_be_a_percentage(value):
    with pytest.raises(StateTransitionError):
        TranslationState.initial().start().advance(value)


def test_transitions_require_running_state():
    idle = TranslationState.initial()

    with pytest.raises(StateTransitionError):
        idle.advance(10)
    with pytest.raises(StateTransitionError):
        idle.succeed("x")
    with pytest.raises(StateTransitionError):
        idle.fail("x")


def test_cannot_start_twice():
    with pytest.raises(StateTransitionError):
        TranslationState.initial().start().start()


def test_new_run_and_reset_clear_previous_outcome():
    failed = TranslationState.initial().start().advance(20).fail("boom")

    restarted = failed.start()
    assert restarted == TranslationState(status=TranslationStatus.RUNNING)

    assert failed.reset() == TranslationState.initial()


def test_state_is_immutable():
    state = TranslationState.initial()

    with pytest.raises(dataclasses.FrozenInstanceError):
        state.progress = 10  # type: ignore[misc]
