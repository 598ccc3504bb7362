from assetverse import db
from datetime import datetime
from assetverse.data.core.record_base import RecordBase


class Payment(RecordBase):
    __tablename__ = 'payments'

    hr_email = db.Column(db.String(120), nullable=False, index=True)
    amount = db.Column(db.Float, nullable=False)
    transaction_id = db.Column(db.String(255), unique=True, nullable=False)
    new_package_limit = db.Column(db.Integer, nullable=False)
    date = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Payment {self.id} {self.hr_email} -> {self.new_package_limit} seats>'
