from assetverse import db
from datetime import datetime
from assetverse.data.core.record_base import RecordBase


class Assignment(RecordBase):
    """Hand-off history. Rows are only ever appended or marked returned."""

    __tablename__ = 'assigned_assets'

    request_id = db.Column(db.Integer, nullable=True, index=True)
    asset_id = db.Column(db.Integer, nullable=False, index=True)

    asset_name = db.Column(db.String(200), nullable=True)
    asset_type = db.Column(db.String(50), nullable=True)
    asset_image = db.Column(db.String(500), nullable=True)

    employee_email = db.Column(db.String(120), nullable=False, index=True)
    employee_name = db.Column(db.String(120), nullable=True)
    hr_email = db.Column(db.String(120), nullable=False, index=True)
    company_name = db.Column(db.String(200), nullable=True)

    assignment_date = db.Column(db.DateTime, default=datetime.utcnow)
    return_date = db.Column(db.DateTime, nullable=True)
    status = db.Column(db.String(20), nullable=False, default='assigned')

    def __repr__(self):
        return f'<Assignment {self.id} {self.asset_name} -> {self.employee_email} [{self.status}]>'
