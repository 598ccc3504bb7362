"""
AssignmentLedger - append-only history of asset hand-offs

Rows are written once by the approval cascade and afterwards only moved
from assigned to returned. Nothing here deletes.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import update
from assetverse import db
from assetverse.data.requests.asset_request import AssetRequest
from assetverse.data.requests.assignment import Assignment
from assetverse.buisness.requests.state_machine import AssignmentStateMachine


class AssignmentLedger:

    def find_by_id(self, assignment_id: int) -> Optional[Assignment]:
        return db.session.get(Assignment, assignment_id, populate_existing=True)

    def find_by_request_id(self, request_id: int) -> Optional[Assignment]:
        return Assignment.query.filter_by(request_id=request_id).order_by(Assignment.id.desc()).first()

    def insert(self, request: AssetRequest, assignment_date: datetime = None) -> Assignment:
        """Snapshot requester, asset and HR from an approved request. Flushes, does not commit."""
        assignment = Assignment(
            request_id=request.id,
            asset_id=request.asset_id,
            asset_name=request.asset_name,
            asset_type=request.asset_type,
            asset_image=request.asset_image or '',
            employee_email=request.requester_email,
            employee_name=request.requester_name,
            hr_email=request.hr_email,
            company_name=request.company_name,
            assignment_date=assignment_date or datetime.utcnow(),
            status=AssignmentStateMachine.ASSIGNED,
        )
        db.session.add(assignment)
        db.session.flush()
        return assignment

    def conditional_update_status(self, assignment_id: int, expected_status: str, new_status: str, **stamps) -> int:
        AssignmentStateMachine.validate_transition(expected_status, new_status)

        stmt = (
            update(Assignment)
            .where(Assignment.id == assignment_id, Assignment.status == expected_status)
            .values(status=new_status, updated_at=datetime.utcnow(), **stamps)
            .execution_options(synchronize_session=False)
        )
        return db.session.execute(stmt).rowcount
