from __future__ import annotations

import pytest

from app.orchestration.state_machine import CONTRACT_STATE_MACHINE, InvalidTransitionError, StateMachine


def test_state_machine_allows_valid_transition():
    sm = StateMachine({"draft": {"sent"}, "sent": {"closed"}})
    assert sm.can_transition("draft", "sent") is True
    sm.assert_transition("draft", "sent")


def test_state_machine_rejects_invalid_transition():
    sm = StateMachine({"draft": {"sent"}})
    with pytest.raises(InvalidTransitionError):
        sm.assert_transition("draft", "closed")


def test_contract_lifecycle_edges():
    assert CONTRACT_STATE_MACHINE.can_transition("pending", "needs_changes")
    assert CONTRACT_STATE_MACHINE.can_transition("needs_changes", "pending")
    assert CONTRACT_STATE_MACHINE.can_transition("needs_changes", "accepted")
    assert CONTRACT_STATE_MACHINE.can_transition("reviewed", "accepted")
    assert CONTRACT_STATE_MACHINE.can_transition("pending", "rejected")


def test_accepted_and_rejected_are_terminal():
    for state in ("accepted", "rejected"):
        assert CONTRACT_STATE_MACHINE.is_terminal(state)
        for target in ("pending", "needs_changes", "reviewed", "accepted"):
            with pytest.raises(InvalidTransitionError):
                CONTRACT_STATE_MACHINE.assert_transition(state, target)
    assert not CONTRACT_STATE_MACHINE.is_terminal("pending")
