from assetverse import db
from datetime import datetime
from assetverse.data.core.record_base import RecordBase


class AssetRequest(RecordBase):
    __tablename__ = 'asset_requests'

    requester_email = db.Column(db.String(120), nullable=False, index=True)
    requester_name = db.Column(db.String(120), nullable=True)
    # Plain reference, the asset may be edited or deleted later
    asset_id = db.Column(db.Integer, nullable=False, index=True)

    # Snapshot of the asset at request time
    asset_name = db.Column(db.String(200), nullable=True)
    asset_type = db.Column(db.String(50), nullable=True)
    asset_image = db.Column(db.String(500), nullable=True)

    hr_email = db.Column(db.String(120), nullable=False, index=True)
    company_name = db.Column(db.String(200), nullable=True)
    note = db.Column(db.Text, nullable=True)

    request_status = db.Column(db.String(20), nullable=False, default='pending', index=True)
    request_date = db.Column(db.DateTime, default=datetime.utcnow)
    approval_date = db.Column(db.DateTime, nullable=True)
    return_date = db.Column(db.DateTime, nullable=True)

    def __repr__(self):
        return f'<AssetRequest {self.id} {self.requester_email} -> {self.asset_name} [{self.request_status}]>'
