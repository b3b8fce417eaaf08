"""Canonical state transition helpers for marketplace entities."""

from __future__ import annotations

from app.models.enums import ContractStatus


class InvalidTransitionError(ValueError):
    """Raised when a disallowed state transition is attempted."""


class StateMachine:
    """Simple in-memory state machine keyed by status value."""

    def __init__(self, transitions: dict[str, set[str]]) -> None:
        self._transitions = transitions

    def can_transition(self, current: str, target: str) -> bool:
        return target in self._transitions.get(current, set())

    def assert_transition(self, current: str, target: str) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {current} -> {target}")

    def is_terminal(self, state: str) -> bool:
        return not self._transitions.get(state)


_PENDING = ContractStatus.PENDING.value
_REVIEWED = ContractStatus.REVIEWED.value
_NEEDS_CHANGES = ContractStatus.NEEDS_CHANGES.value
_ACCEPTED = ContractStatus.ACCEPTED.value
_REJECTED = ContractStatus.REJECTED.value

CONTRACT_TRANSITIONS: dict[str, set[str]] = {
    _PENDING: {_NEEDS_CHANGES, _REVIEWED, _ACCEPTED, _REJECTED, _PENDING},
    _REVIEWED: {_NEEDS_CHANGES, _PENDING, _ACCEPTED, _REJECTED},
    _NEEDS_CHANGES: {_PENDING, _NEEDS_CHANGES, _ACCEPTED, _REJECTED},
    _ACCEPTED: set(),
    _REJECTED: set(),
}

CONTRACT_STATE_MACHINE = StateMachine(CONTRACT_TRANSITIONS)
