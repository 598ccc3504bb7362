"""
ApprovalOrchestrator - HR decision on an asset request

decide(request_id, decision) runs in a single database transaction:

    1. status_gate            pending -> approved|rejected (compare-and-set)
    2. decrement_inventory    product_quantity -= 1 only if > 0
    3. record_assignment      append Assignment snapshot
    4. reconcile_affiliation  first approval for (employee, HR) joins the team
                              and takes one seat of the HR package
    5. commit

Steps 2-4 only run for approvals. Any domain error (NotFound, Conflict,
OutOfStock, SeatLimitExceeded) rolls the whole transaction back, so the
request stays pending and nothing else is written. Storage failures are
rolled back too and reported as ApprovalCascadeError naming the step.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from assetverse import db
from assetverse.data.requests.asset_request import AssetRequest
from assetverse.buisness.core.retry import run_with_retry, RetriesExhausted
from assetverse.buisness.directory.directory import Directory
from assetverse.buisness.inventory.inventory import Inventory
from assetverse.buisness.affiliations.affiliation_registry import AffiliationRegistry
from assetverse.buisness.requests.request_ledger import RequestLedger
from assetverse.buisness.requests.assignment_ledger import AssignmentLedger
from assetverse.buisness.requests.state_machine import RequestStateMachine
from assetverse.buisness.requests.errors import (
    AssetVerseDomainError,
    ApprovalCascadeError,
    ConflictError,
    NotFoundError,
    OutOfStockError,
)
from assetverse.utils.logger import get_logger

logger = get_logger("assetverse.domain.requests.approval")


@dataclass
class DecisionOutcome:
    request_id: int
    status: str
    modified_count: int
    assignment_id: Optional[int] = None
    affiliation_created: bool = False

    def to_dict(self):
        return {
            'requestId': self.request_id,
            'requestStatus': self.status,
            'modifiedCount': self.modified_count,
            'assignmentId': self.assignment_id,
            'affiliationCreated': self.affiliation_created,
        }


class ApprovalOrchestrator:
    """
    Applies an HR decision to a pending request and, on approval, the
    inventory / assignment / affiliation / seat-count cascade.

    Holds no entity state between calls; collaborators are injected so
    tests can swap them.
    """

    STEP_STATUS_GATE = 'status_gate'
    STEP_DECREMENT_INVENTORY = 'decrement_inventory'
    STEP_RECORD_ASSIGNMENT = 'record_assignment'
    STEP_RECONCILE_AFFILIATION = 'reconcile_affiliation'
    STEP_COMMIT = 'commit'

    def __init__(
        self,
        directory: Directory = None,
        inventory: Inventory = None,
        request_ledger: RequestLedger = None,
        assignment_ledger: AssignmentLedger = None,
        affiliation_registry: AffiliationRegistry = None,
    ):
        self.directory = directory or Directory()
        self.inventory = inventory or Inventory()
        self.request_ledger = request_ledger or RequestLedger(self.inventory)
        self.assignment_ledger = assignment_ledger or AssignmentLedger()
        self.affiliation_registry = affiliation_registry or AffiliationRegistry(self.directory)

    def decide(self, request_id: int, decision: str) -> DecisionOutcome:
        """
        Approve or reject a pending request.

        Args:
            request_id: AssetRequest id
            decision: 'approved' or 'rejected'

        Returns:
            DecisionOutcome with modified_count == 1

        Raises:
            InvalidDecisionError: decision is not approved/rejected
            NotFoundError: request (or its asset / HR account) does not exist
            ConflictError: request is no longer pending
            OutOfStockError: approval found no available quantity
            SeatLimitExceededError: approval would exceed the HR package limit
            ApprovalCascadeError: storage failure, transaction rolled back
        """
        RequestStateMachine.validate_decision(decision)
        logger.info(f"Deciding request {request_id}: {decision}")

        progress = {'step': None}
        try:
            return run_with_retry(
                lambda: self._decide_once(request_id, decision, progress),
                label=f"decide request {request_id}",
            )
        except RetriesExhausted as e:
            raise ApprovalCascadeError(request_id, progress['step'], e.cause) from e

    def _decide_once(self, request_id: int, decision: str, progress: dict) -> DecisionOutcome:
        progress['step'] = self.STEP_STATUS_GATE
        try:
            now = datetime.utcnow()
            changed = self.request_ledger.conditional_update_status(
                request_id,
                RequestStateMachine.PENDING,
                decision,
                approval_date=now,
            )
            if changed != 1:
                self._raise_gate_missed(request_id, decision)

            outcome = DecisionOutcome(request_id=request_id, status=decision, modified_count=changed)

            if decision == RequestStateMachine.APPROVED:
                request = self.request_ledger.find_by_id(request_id)
                self._run_cascade(request, now, outcome, progress)

            progress['step'] = self.STEP_COMMIT
            db.session.commit()
        except AssetVerseDomainError:
            db.session.rollback()
            raise
        except OperationalError:
            # Transient; run_with_retry rolls back and runs the unit again
            raise
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Approval of request {request_id} failed at step '{progress['step']}': {e}")
            raise ApprovalCascadeError(request_id, progress['step'], e) from e

        logger.info(
            f"Request {request_id} {decision}"
            + (f"; assignment {outcome.assignment_id}" if outcome.assignment_id else "")
            + ("; new team member" if outcome.affiliation_created else "")
        )
        return outcome

    def _raise_gate_missed(self, request_id: int, decision: str) -> None:
        request = self.request_ledger.find_by_id(request_id)
        if request is None:
            raise NotFoundError('Request', request_id)
        logger.warning(
            f"Rejected decision '{decision}' for request {request_id}: already {request.request_status}"
        )
        raise ConflictError(
            f"Request {request_id} is already {request.request_status}; decisions apply to pending requests only"
        )

    def _run_cascade(self, request: AssetRequest, now: datetime, outcome: DecisionOutcome, progress: dict) -> None:
        progress['step'] = self.STEP_DECREMENT_INVENTORY
        if not self.inventory.decrement_if_available(request.asset_id):
            logger.warning(f"Approval of request {request.id} refused: asset {request.asset_id} out of stock")
            raise OutOfStockError(request.asset_id)

        progress['step'] = self.STEP_RECORD_ASSIGNMENT
        assignment = self.assignment_ledger.insert(request, assignment_date=now)
        outcome.assignment_id = assignment.id

        progress['step'] = self.STEP_RECONCILE_AFFILIATION
        outcome.affiliation_created = self._reconcile_affiliation(request, now)

    def _reconcile_affiliation(self, request: AssetRequest, now: datetime) -> bool:
        """
        First approval for an (employee, HR) pair makes the employee a team
        member and uses one seat. Later approvals for the pair write nothing.
        """
        if self.affiliation_registry.find_by_pair(request.requester_email, request.hr_email):
            return False

        hr_user = self.directory.find_user_by_email(request.hr_email)
        company_logo = hr_user.company_logo if hr_user and hr_user.company_logo else ''

        _, created = self.affiliation_registry.insert_if_absent({
            'employee_email': request.requester_email,
            'employee_name': request.requester_name,
            'hr_email': request.hr_email,
            'company_name': request.company_name,
            'company_logo': company_logo,
            'role': 'employee',
            'affiliation_date': now,
        })
        if created:
            self.directory.increment_seat_count(request.hr_email, 1)
        return created
