from assetverse import db
from datetime import datetime
from assetverse.data.core.record_base import RecordBase


class Asset(RecordBase):
    __tablename__ = 'assets'

    RETURNABLE = 'Returnable'
    NON_RETURNABLE = 'Non-returnable'
    PRODUCT_TYPES = (RETURNABLE, NON_RETURNABLE)

    hr_email = db.Column(db.String(120), nullable=False, index=True)
    company_name = db.Column(db.String(200), nullable=True)
    product_name = db.Column(db.String(200), nullable=False)
    product_type = db.Column(db.String(50), nullable=False, default=RETURNABLE)
    # Available stock. There is no separate "total owned" figure: approvals
    # take units out of this counter and returns put them back.
    product_quantity = db.Column(db.Integer, nullable=False, default=0)
    product_image = db.Column(db.String(500), nullable=True)
    date_added = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint('product_quantity >= 0', name='ck_assets_quantity_floor'),
    )

    def __repr__(self):
        return f'<Asset {self.product_name} (qty {self.product_quantity})>'
