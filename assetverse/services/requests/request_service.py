"""
Asset Request Service
Presentation service for request list retrieval and filtering.
"""

from typing import List, Optional
from assetverse import db
from assetverse.data.requests.asset_request import AssetRequest


class AssetRequestService:
    """
    Service for asset request presentation data.

    Provides methods for:
    - Requests addressed to an HR account, searchable by requester
    - Requests made by an employee, searchable by asset name
    """

    @staticmethod
    def build_filtered_query(
        hr_email: Optional[str] = None,
        requester_email: Optional[str] = None,
        status: Optional[str] = None,
        requester_search: Optional[str] = None,
        asset_search: Optional[str] = None
    ):
        """
        Build a filtered request query.

        Args:
            hr_email: Requests for assets owned by this HR account
            requester_email: Requests made by this employee
            status: Filter by request_status
            requester_search: Case-insensitive match on requester name or email
            asset_search: Case-insensitive match on the asset name snapshot

        Returns:
            SQLAlchemy query object
        """
        query = AssetRequest.query

        if hr_email:
            query = query.filter(AssetRequest.hr_email == hr_email)

        if requester_email:
            query = query.filter(AssetRequest.requester_email == requester_email)

        if status:
            query = query.filter(AssetRequest.request_status == status)

        if requester_search:
            term = f"%{requester_search}%"
            query = query.filter(
                db.or_(
                    AssetRequest.requester_name.ilike(term),
                    AssetRequest.requester_email.ilike(term)
                )
            )

        if asset_search:
            query = query.filter(AssetRequest.asset_name.ilike(f"%{asset_search}%"))

        return query.order_by(AssetRequest.request_date.desc(), AssetRequest.id.desc())

    @staticmethod
    def list_for_hr(hr_email: str, search: Optional[str] = None, status: Optional[str] = None) -> List[AssetRequest]:
        return AssetRequestService.build_filtered_query(
            hr_email=hr_email,
            status=status,
            requester_search=search
        ).all()

    @staticmethod
    def list_for_employee(requester_email: str, search: Optional[str] = None, status: Optional[str] = None) -> List[AssetRequest]:
        return AssetRequestService.build_filtered_query(
            requester_email=requester_email,
            status=status,
            asset_search=search
        ).all()
