"""Deterministic per-request lifecycle for a single validation run."""

from __future__ import annotations

RequestState = str

INITIAL_REQUEST_STATE: RequestState = "received"

VALID_REQUEST_STATES: set[RequestState] = {
    "received",
    "pre_validated",
    "dispatched",
    "post_processed",
    "completed",
    "failed",
}

TERMINAL_REQUEST_STATES: set[RequestState] = {
    "completed",
    "failed",
}

ALLOWED_REQUEST_TRANSITIONS: dict[RequestState, set[RequestState]] = {
    "received": {"pre_validated", "failed"},
    "pre_validated": {"dispatched", "failed"},
    "dispatched": {"post_processed", "failed"},
    "post_processed": {"completed"},
    "completed": set(),
    "failed": set(),
}


class RequestTransitionError(ValueError):
    """Raised when a request lifecycle transition violates the table above."""


def is_valid_request_state(state: str) -> bool:
    return state in VALID_REQUEST_STATES


def can_transition(current: RequestState, target: RequestState) -> bool:
    if current not in VALID_REQUEST_STATES:
        return False
    if target not in VALID_REQUEST_STATES:
        return False
    return target in ALLOWED_REQUEST_TRANSITIONS[current]


def transition_state(current: RequestState, target: RequestState) -> RequestState:
    if not can_transition(current, target):
        raise RequestTransitionError(
            f"Invalid request transition: {current} -> {target}",
        )
    return target


class RequestLifecycle:
    """Tracks one request's state and the path it took."""

    def __init__(self, request_id: str) -> None:
        self.request_id = request_id
        self.state: RequestState = INITIAL_REQUEST_STATE
        self.history: list[RequestState] = [INITIAL_REQUEST_STATE]

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_REQUEST_STATES

    def advance(self, target: RequestState) -> RequestState:
        self.state = transition_state(self.state, target)
        self.history.append(self.state)
        return self.state


__all__ = [
    "ALLOWED_REQUEST_TRANSITIONS",
    "INITIAL_REQUEST_STATE",
    "RequestLifecycle",
    "RequestState",
    "RequestTransitionError",
    "TERMINAL_REQUEST_STATES",
    "VALID_REQUEST_STATES",
    "can_transition",
    "is_valid_request_state",
    "transition_state",
]
