"""
Tests for request and assignment lifecycles
"""

import pytest

from assetverse.buisness.requests.errors import ConflictError, InvalidDecisionError
from assetverse.buisness.requests.state_machine import AssignmentStateMachine, RequestStateMachine


@pytest.mark.parametrize('from_status,to_status', [
    ('pending', 'approved'),
    ('pending', 'rejected'),
    ('approved', 'returned'),
])
def test_allowed_request_transitions(from_status, to_status):
    assert RequestStateMachine.can_transition(from_status, to_status)
    RequestStateMachine.validate_transition(from_status, to_status)


@pytest.mark.parametrize('from_status,to_status', [
    ('pending', 'pending'),
    ('approved', 'approved'),
    ('approved', 'rejected'),
    ('rejected', 'approved'),
    ('returned', 'approved'),
    ('pending', 'returned'),
])
def test_forbidden_request_transitions(from_status, to_status):
    assert not RequestStateMachine.can_transition(from_status, to_status)
    with pytest.raises(ConflictError):
        RequestStateMachine.validate_transition(from_status, to_status)


def test_terminal_states_allow_nothing():
    for status in RequestStateMachine.TERMINAL_STATES:
        assert RequestStateMachine.get_allowed_transitions(status) == set()
    assert RequestStateMachine.get_allowed_transitions('pending') == {'approved', 'rejected'}


def test_decisions():
    assert RequestStateMachine.validate_decision('approved') == 'approved'
    assert RequestStateMachine.validate_decision('rejected') == 'rejected'
    with pytest.raises(InvalidDecisionError):
        RequestStateMachine.validate_decision('returned')


def test_assignment_lifecycle():
    AssignmentStateMachine.validate_transition('assigned', 'returned')
    with pytest.raises(ConflictError):
        AssignmentStateMachine.validate_transition('returned', 'returned')
    with pytest.raises(ConflictError):
        AssignmentStateMachine.validate_transition('returned', 'assigned')


@pytest.mark.parametrize('status', ['pending', 'approved', 'rejected', 'returned', 'unknown'])
def test_transition_checks_follow_allowed_table(status):
    allowed = RequestStateMachine.get_allowed_transitions(status)

    for target in ('pending', 'approved', 'rejected', 'returned'):
        assert RequestStateMachine.can_transition(status, target) == (target in allowed), (status, target)
