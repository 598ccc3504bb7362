from assetverse import db
from datetime import datetime
from assetverse.data.core.record_base import RecordBase


class EmployeeAffiliation(RecordBase):
    __tablename__ = 'employee_affiliations'

    employee_email = db.Column(db.String(120), nullable=False, index=True)
    employee_name = db.Column(db.String(120), nullable=True)
    hr_email = db.Column(db.String(120), nullable=False, index=True)
    company_name = db.Column(db.String(200), nullable=True)
    company_logo = db.Column(db.String(500), nullable=True)
    role = db.Column(db.String(20), nullable=False, default='employee')
    affiliation_date = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('employee_email', 'hr_email', name='uq_affiliation_employee_hr'),
    )

    def __repr__(self):
        return f'<EmployeeAffiliation {self.employee_email} @ {self.hr_email}>'
