"""
RequestLedger - storage operations for AssetRequest records

Status changes go through conditional_update_status, a compare-and-set on
the expected prior status. It is the concurrency gate for every request
transition: only the caller that sees one changed row may run side effects.
"""

from datetime import datetime
from typing import Optional
from sqlalchemy import update
from assetverse import db
from assetverse.data.requests.asset_request import AssetRequest
from assetverse.buisness.inventory.inventory import Inventory
from assetverse.buisness.requests.state_machine import RequestStateMachine
from assetverse.buisness.requests.errors import InvalidPayloadError
from assetverse.utils.logger import get_logger

logger = get_logger("assetverse.domain.requests.ledger")


class RequestLedger:

    def __init__(self, inventory: Inventory = None):
        self.inventory = inventory or Inventory()

    def find_by_id(self, request_id: int) -> Optional[AssetRequest]:
        return db.session.get(AssetRequest, request_id, populate_existing=True)

    def conditional_update_status(self, request_id: int, expected_status: str, new_status: str, **stamps) -> int:
        """
        Set request_status to new_status only if it is currently expected_status.

        Args:
            request_id: Request to update
            expected_status: Status the request must currently have
            new_status: Target status (validated against RequestStateMachine)
            **stamps: Extra columns written with the status, e.g. approval_date

        Returns:
            int: 1 if this call won the compare-and-set, 0 otherwise
        """
        RequestStateMachine.validate_transition(expected_status, new_status)

        stmt = (
            update(AssetRequest)
            .where(AssetRequest.id == request_id, AssetRequest.request_status == expected_status)
            .values(request_status=new_status, updated_at=datetime.utcnow(), **stamps)
            .execution_options(synchronize_session=False)
        )
        return db.session.execute(stmt).rowcount

    def create_request(self, data: dict) -> AssetRequest:
        """
        Employee requests an asset.

        The asset's name, type and image are copied onto the request so the
        history still reads correctly after the asset is edited or deleted.
        The asset must exist; stock is checked again at approval time.
        """
        request = AssetRequest.from_dict(
            data,
            skip_fields=['request_status', 'request_date', 'approval_date', 'return_date'],
        )
        if not request.requester_email or request.asset_id is None:
            raise InvalidPayloadError("requesterEmail and assetId are required")
        try:
            request.asset_id = int(request.asset_id)
        except (TypeError, ValueError):
            raise InvalidPayloadError("assetId must be an integer")

        asset = self.inventory.get_asset(request.asset_id)
        request.asset_name = asset.product_name
        request.asset_type = asset.product_type
        request.asset_image = asset.product_image or ''
        request.hr_email = asset.hr_email
        request.company_name = request.company_name or asset.company_name

        request.request_status = RequestStateMachine.PENDING
        request.request_date = datetime.utcnow()

        db.session.add(request)
        db.session.commit()
        logger.info(f"Request {request.id} created: {request.requester_email} asks for asset {request.asset_id}")
        return request
