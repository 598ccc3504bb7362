"""
Asset Service
Presentation service for asset listings and HR dashboard statistics.
"""

from typing import Dict, Optional
from flask_sqlalchemy.pagination import Pagination
from sqlalchemy import func
from assetverse import db
from assetverse.data.core.asset_info.asset import Asset
from assetverse.data.requests.asset_request import AssetRequest


class AssetService:
    """
    Service for asset presentation data.

    Provides methods for:
    - Building filtered asset queries
    - Paginating asset lists
    - Returnable / non-returnable split and most requested assets
    """

    @staticmethod
    def build_filtered_query(
        hr_email: Optional[str] = None,
        search: Optional[str] = None,
        product_type: Optional[str] = None
    ):
        """
        Build a filtered asset query, newest first.

        Without hr_email only assets with stock are listed, which is what
        employees browse when making a request.

        Args:
            hr_email: Assets owned by this HR account (any quantity)
            search: Case-insensitive match on product name
            product_type: Returnable / Non-returnable

        Returns:
            SQLAlchemy query object
        """
        query = Asset.query

        if hr_email:
            query = query.filter(Asset.hr_email == hr_email)
        else:
            query = query.filter(Asset.product_quantity > 0)

        if search:
            query = query.filter(Asset.product_name.ilike(f"%{search}%"))

        if product_type:
            query = query.filter(Asset.product_type == product_type)

        return query.order_by(Asset.date_added.desc(), Asset.id.desc())

    @staticmethod
    def get_list_data(
        hr_email: Optional[str] = None,
        search: Optional[str] = None,
        product_type: Optional[str] = None,
        page: int = 1,
        per_page: int = 10
    ) -> Pagination:
        query = AssetService.build_filtered_query(
            hr_email=hr_email,
            search=search,
            product_type=product_type
        )
        return query.paginate(page=page, per_page=per_page, error_out=False)

    @staticmethod
    def get_stats(hr_email: str, top: int = 5) -> Dict:
        """
        Dashboard numbers for one HR account.

        Returns:
            dict with pieChartData (returnable vs non-returnable asset counts)
            and topRequests (asset names by request count, most requested first)
        """
        returnable_count = Asset.query.filter_by(hr_email=hr_email, product_type=Asset.RETURNABLE).count()
        non_returnable_count = Asset.query.filter_by(hr_email=hr_email, product_type=Asset.NON_RETURNABLE).count()

        request_count = func.count(AssetRequest.id).label('count')
        top_requests = (
            db.session.query(AssetRequest.asset_name, request_count)
            .filter(AssetRequest.hr_email == hr_email)
            .group_by(AssetRequest.asset_name)
            .order_by(request_count.desc(), AssetRequest.asset_name)
            .limit(top)
            .all()
        )

        return {
            'pieChartData': [
                {'name': Asset.RETURNABLE, 'value': returnable_count},
                {'name': Asset.NON_RETURNABLE, 'value': non_returnable_count},
            ],
            'topRequests': [{'_id': name, 'count': count} for name, count in top_requests],
        }
