"""
Inventory - HR asset records and their available stock

Asset CRUD commits on its own. Stock moves used by the approval and return
workflows are conditional UPDATE statements that flush into the caller's
transaction.
"""

from datetime import datetime
from sqlalchemy import inspect, update
from assetverse import db
from assetverse.data.core.asset_info.asset import Asset
from assetverse.buisness.core.data_insertion_mixin import to_snake
from assetverse.buisness.requests.errors import InvalidPayloadError, NotFoundError
from assetverse.utils.logger import get_logger

logger = get_logger("assetverse.domain.inventory")


class Inventory:
    """
    Asset stock operations.

    Responsibilities:
    - Asset.product_quantity is the single source of truth for availability
    - Stock moves are single conditional UPDATE statements, never
      read-modify-write, so concurrent approvals cannot lose an update
    - Stock moves flush only; the caller commits
    """

    # Owner and creation stamps are fixed once the asset exists
    LOCKED_FIELDS = ('id', 'hr_email', 'date_added', 'created_at', 'updated_at')

    def get_asset(self, asset_id: int) -> Asset:
        asset = db.session.get(Asset, asset_id)
        if asset is None:
            raise NotFoundError('Asset', asset_id)
        return asset

    @staticmethod
    def _validated_type(product_type) -> str:
        product_type = product_type or Asset.RETURNABLE
        if product_type not in Asset.PRODUCT_TYPES:
            raise InvalidPayloadError(f"productType must be one of {Asset.PRODUCT_TYPES}")
        return product_type

    @staticmethod
    def _validated_quantity(quantity) -> int:
        if isinstance(quantity, bool):
            raise InvalidPayloadError("productQuantity must be an integer")
        try:
            quantity = int(quantity or 0)
        except (TypeError, ValueError):
            raise InvalidPayloadError("productQuantity must be an integer")
        if quantity < 0:
            raise InvalidPayloadError("productQuantity cannot be negative")
        return quantity

    def create_asset(self, data: dict) -> Asset:
        asset = Asset.from_dict(data)
        if not asset.product_name or not asset.hr_email:
            raise InvalidPayloadError("productName and hrEmail are required")
        asset.product_type = self._validated_type(asset.product_type)
        asset.product_quantity = self._validated_quantity(asset.product_quantity)

        asset.date_added = datetime.utcnow()
        db.session.add(asset)
        db.session.commit()
        logger.info(f"Added asset {asset.id} '{asset.product_name}' x{asset.product_quantity} for {asset.hr_email}")
        return asset

    def update_asset(self, asset_id: int, data: dict) -> int:
        """
        Edit an asset's name, type, image, company or stock.

        Unknown keys are ignored. Requests and assignments keep their
        snapshots of the old values.

        Returns:
            int: 1 if any column changed, 0 if the payload matched the stored asset

        Raises:
            NotFoundError: If the asset does not exist
            InvalidPayloadError: Locked field, empty name, bad type or quantity
        """
        asset = db.session.get(Asset, asset_id, populate_existing=True)
        if asset is None:
            raise NotFoundError('Asset', asset_id)

        columns = {c.key for c in inspect(Asset).columns}
        changes = {}
        for key, value in data.items():
            column = key if key in columns else to_snake(key)
            if column in self.LOCKED_FIELDS:
                raise InvalidPayloadError(f"{key} cannot be changed")
            if column in columns:
                changes[column] = value

        if 'product_name' in changes and not changes['product_name']:
            raise InvalidPayloadError("productName cannot be empty")
        if 'product_type' in changes:
            changes['product_type'] = self._validated_type(changes['product_type'])
        if 'product_quantity' in changes:
            changes['product_quantity'] = self._validated_quantity(changes['product_quantity'])

        changed = {column: value for column, value in changes.items() if getattr(asset, column) != value}
        if not changed:
            logger.debug(f"Asset {asset_id} update carried no changes")
            return 0

        for column, value in changed.items():
            setattr(asset, column, value)
        db.session.commit()
        logger.info(f"Updated asset {asset_id}: {', '.join(sorted(changed))}")
        return 1

    def delete_asset(self, asset_id: int) -> int:
        """Delete an asset. Requests and assignments keep their snapshots."""
        asset = self.get_asset(asset_id)
        db.session.delete(asset)
        db.session.commit()
        logger.info(f"Deleted asset {asset_id}")
        return 1

    def decrement_if_available(self, asset_id: int) -> bool:
        """
        Take one unit out of stock if any is available.

        Returns:
            bool: True when a unit was taken, False when the asset is out of stock

        Raises:
            NotFoundError: If the asset does not exist
        """
        stmt = (
            update(Asset)
            .where(Asset.id == asset_id, Asset.product_quantity > 0)
            .values(product_quantity=Asset.product_quantity - 1)
            .execution_options(synchronize_session=False)
        )
        if db.session.execute(stmt).rowcount == 1:
            return True

        exists = db.session.query(Asset.id).filter(Asset.id == asset_id).first()
        if exists is None:
            raise NotFoundError('Asset', asset_id)
        return False

    def increment_quantity(self, asset_id: int, delta: int = 1) -> int:
        """
        Put units back into stock.

        Raises:
            NotFoundError: If the asset does not exist
        """
        if delta <= 0:
            raise ValueError("delta must be > 0")

        stmt = (
            update(Asset)
            .where(Asset.id == asset_id)
            .values(product_quantity=Asset.product_quantity + delta)
            .execution_options(synchronize_session=False)
        )
        changed = db.session.execute(stmt).rowcount
        if changed == 0:
            raise NotFoundError('Asset', asset_id)
        return changed
