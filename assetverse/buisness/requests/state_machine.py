"""
State machines for request and assignment lifecycles

Encodes valid transitions and provides guard hooks.
Keeps "what is allowed" separate from "how persistence occurs": the ledgers
apply a transition with a compare-and-set on the expected prior status.
"""

from typing import Dict, Set
from assetverse.buisness.requests.errors import ConflictError, InvalidDecisionError


class RequestStateMachine:
    """
    State machine for AssetRequest.request_status.

    pending -> approved | rejected (decided once, by HR)
    approved -> returned (by the employee, returnable assets only)
    """

    PENDING = 'pending'
    APPROVED = 'approved'
    REJECTED = 'rejected'
    RETURNED = 'returned'

    # Statuses an HR decision may set
    DECISIONS = {APPROVED, REJECTED}

    TERMINAL_STATES = {REJECTED, RETURNED}

    TRANSITIONS: Dict[str, Set[str]] = {
        PENDING: {APPROVED, REJECTED},
        APPROVED: {RETURNED},
    }

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """
        Check if transition is valid.

        Staying in the same state is NOT a no-op: re-applying a decision must never re-run the cascade.
        """
        return to_status in cls.get_allowed_transitions(from_status)

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """
        Raises:
            ConflictError: If transition is not allowed
        """
        if not cls.can_transition(from_status, to_status):
            raise ConflictError(
                f"Invalid request status transition: {from_status} → {to_status}"
            )

    @classmethod
    def validate_decision(cls, decision: str) -> str:
        """
        Raises:
            InvalidDecisionError: If decision is not approved/rejected
        """
        # JSON bodies can carry lists or objects here
        if not isinstance(decision, str) or decision not in cls.DECISIONS:
            raise InvalidDecisionError(
                f"Decision must be one of {sorted(cls.DECISIONS)}, got {decision!r}"
            )
        return decision

    @classmethod
    def get_allowed_transitions(cls, from_status: str) -> Set[str]:
        """Get set of allowed target statuses from current status"""
        if from_status in cls.TERMINAL_STATES:
            return set()
        return cls.TRANSITIONS.get(from_status, set())


class AssignmentStateMachine:
    """
    State machine for Assignment.status.

    Simple lifecycle: assigned → returned
    """

    ASSIGNED = 'assigned'
    RETURNED = 'returned'

    TERMINAL_STATES = {RETURNED}

    TRANSITIONS: Dict[str, Set[str]] = {
        ASSIGNED: {RETURNED},
    }

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        if from_status in cls.TERMINAL_STATES:
            return False
        return to_status in cls.TRANSITIONS.get(from_status, set())

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        if not cls.can_transition(from_status, to_status):
            raise ConflictError(
                f"Invalid assignment status transition: {from_status} → {to_status}"
            )
