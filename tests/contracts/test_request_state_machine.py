"""Contract checks for per-request validation lifecycle transitions."""

from __future__ import annotations

import pytest

from ura_validator.validation.request_state_machine import (
    INITIAL_REQUEST_STATE,
    TERMINAL_REQUEST_STATES,
    VALID_REQUEST_STATES,
    RequestLifecycle,
    RequestTransitionError,
    can_transition,
    is_valid_request_state,
    transition_state,
)


def test_request_state_set() -> None:
    assert VALID_REQUEST_STATES == {
        "received",
        "pre_validated",
        "dispatched",
        "post_processed",
        "completed",
        "failed",
    }
    assert TERMINAL_REQUEST_STATES == {"completed", "failed"}
    assert INITIAL_REQUEST_STATE == "received"
    assert is_valid_request_state("dispatched")
    assert not is_valid_request_state("queued")


@pytest.mark.parametrize(
    ("current", "target"),
    [
        ("received", "pre_validated"),
        ("pre_validated", "dispatched"),
        ("dispatched", "post_processed"),
        ("post_processed", "completed"),
        ("received", "failed"),
        ("pre_validated", "failed"),
        ("dispatched", "failed"),
    ],
)
def test_valid_transitions_succeed(current: str, target: str) -> None:
    assert can_transition(current, target)
    assert transition_state(current, target) == target


@pytest.mark.parametrize(
    ("current", "target"),
    [
        ("received", "dispatched"),
        ("pre_validated", "completed"),
        ("post_processed", "failed"),
        ("completed", "received"),
        ("failed", "completed"),
        ("unknown", "failed"),
    ],
)
def test_invalid_transitions_fail(current: str, target: str) -> None:
    assert not can_transition(current, target)
    with pytest.raises(RequestTransitionError):
        transition_state(current, target)


def test_lifecycle_records_history() -> None:
    lifecycle = RequestLifecycle("req-lifecycle-001")

    for state in ("pre_validated", "dispatched", "post_processed", "completed"):
        lifecycle.advance(state)

    assert lifecycle.is_terminal
    assert lifecycle.history == ["received", "pre_validated", "dispatched", "post_processed", "completed"]
    with pytest.raises(RequestTransitionError):
        lifecycle.advance("failed")
