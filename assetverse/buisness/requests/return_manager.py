"""
ReturnManager - employee hands a returnable asset back

Marks the assignment (and its originating request) returned and puts one
unit back into stock, all in one transaction. The assignment's status is the
guard: only the call that moves it from assigned to returned touches stock,
so returning twice never double-increments.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from assetverse import db
from assetverse.data.core.asset_info.asset import Asset
from assetverse.buisness.core.retry import run_with_retry, RetriesExhausted
from assetverse.buisness.inventory.inventory import Inventory
from assetverse.buisness.requests.request_ledger import RequestLedger
from assetverse.buisness.requests.assignment_ledger import AssignmentLedger
from assetverse.buisness.requests.state_machine import AssignmentStateMachine, RequestStateMachine
from assetverse.buisness.requests.errors import (
    AssetVerseDomainError,
    ConflictError,
    NotFoundError,
    NotReturnableError,
    StorageError,
)
from assetverse.utils.logger import get_logger

logger = get_logger("assetverse.domain.requests.returns")


@dataclass
class ReturnOutcome:
    assignment_id: int
    request_id: Optional[int]
    modified_count: int

    def to_dict(self):
        return {
            'assignmentId': self.assignment_id,
            'requestId': self.request_id,
            'modifiedCount': self.modified_count,
        }


class ReturnManager:

    def __init__(
        self,
        inventory: Inventory = None,
        request_ledger: RequestLedger = None,
        assignment_ledger: AssignmentLedger = None,
    ):
        self.inventory = inventory or Inventory()
        self.request_ledger = request_ledger or RequestLedger(self.inventory)
        self.assignment_ledger = assignment_ledger or AssignmentLedger()

    def return_asset(self, assignment_id: int) -> ReturnOutcome:
        """
        Return the asset behind an assignment.

        Returns:
            ReturnOutcome, modified_count 0 when the assignment was already returned

        Raises:
            NotFoundError: assignment or asset does not exist
            NotReturnableError: the asset is Non-returnable
            StorageError: storage failure, transaction rolled back
        """
        try:
            return run_with_retry(
                lambda: self._return_once(assignment_id),
                label=f"return assignment {assignment_id}",
            )
        except RetriesExhausted as e:
            raise StorageError(f"Return of assignment {assignment_id} failed and was rolled back") from e

    def return_request(self, request_id: int) -> ReturnOutcome:
        """
        Return the asset granted by an approved request.

        Raises:
            NotFoundError: request, or the assignment it produced, does not exist
            ConflictError: the request was never approved
        """
        request = self.request_ledger.find_by_id(request_id)
        if request is None:
            raise NotFoundError('Request', request_id)

        assignment = self.assignment_ledger.find_by_request_id(request_id)
        if request.request_status == RequestStateMachine.RETURNED:
            logger.info(f"Request {request_id} already returned, nothing to do")
            return ReturnOutcome(assignment.id if assignment else None, request_id, 0)
        if request.request_status != RequestStateMachine.APPROVED:
            raise ConflictError(
                f"Request {request_id} is {request.request_status}; only approved requests can be returned"
            )
        if assignment is None:
            raise NotFoundError('Assignment for request', request_id)

        return self.return_asset(assignment.id)

    def _return_once(self, assignment_id: int) -> ReturnOutcome:
        try:
            assignment = self.assignment_ledger.find_by_id(assignment_id)
            if assignment is None:
                raise NotFoundError('Assignment', assignment_id)

            outcome = ReturnOutcome(assignment_id, assignment.request_id, 0)

            if assignment.status == AssignmentStateMachine.RETURNED:
                logger.info(f"Assignment {assignment_id} already returned, nothing to do")
                return outcome
            if assignment.asset_type != Asset.RETURNABLE:
                raise NotReturnableError(
                    f"Assignment {assignment_id} is for a {assignment.asset_type} asset and cannot be returned"
                )

            now = datetime.utcnow()
            changed = self.assignment_ledger.conditional_update_status(
                assignment_id,
                AssignmentStateMachine.ASSIGNED,
                AssignmentStateMachine.RETURNED,
                return_date=now,
            )
            if changed == 0:
                # Another return won the compare-and-set
                db.session.rollback()
                logger.info(f"Assignment {assignment_id} was returned concurrently, nothing to do")
                return outcome

            self.inventory.increment_quantity(assignment.asset_id, 1)

            if assignment.request_id is not None:
                request_changed = self.request_ledger.conditional_update_status(
                    assignment.request_id,
                    RequestStateMachine.APPROVED,
                    RequestStateMachine.RETURNED,
                    return_date=now,
                )
                if request_changed == 0:
                    logger.warning(
                        f"Request {assignment.request_id} behind assignment {assignment_id} was not approved; "
                        f"only the assignment was marked returned"
                    )

            db.session.commit()
        except AssetVerseDomainError:
            db.session.rollback()
            raise
        except OperationalError:
            raise
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Return of assignment {assignment_id} failed: {e}")
            raise StorageError(f"Return of assignment {assignment_id} failed and was rolled back") from e

        outcome.modified_count = changed
        logger.info(f"Assignment {assignment_id} returned; asset {assignment.asset_id} back in stock")
        return outcome
