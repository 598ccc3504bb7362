from assetverse import db
from datetime import datetime
from assetverse.buisness.core.data_insertion_mixin import DataInsertionMixin


class User(DataInsertionMixin, db.Model):
    __tablename__ = 'users'

    ROLE_HR = 'hr'
    ROLE_EMPLOYEE = 'employee'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False)
    name = db.Column(db.String(120), nullable=True)
    photo = db.Column(db.String(500), nullable=True)
    role = db.Column(db.String(20), nullable=False, default=ROLE_EMPLOYEE)
    date_of_birth = db.Column(db.String(20), nullable=True)

    # HR account fields
    company_name = db.Column(db.String(200), nullable=True)
    company_logo = db.Column(db.String(500), nullable=True)
    package_limit = db.Column(db.Integer, nullable=True)
    current_employees = db.Column(db.Integer, nullable=True)
    subscription = db.Column(db.String(50), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint('current_employees IS NULL OR current_employees >= 0', name='ck_users_seat_count_floor'),
    )

    @property
    def is_hr(self):
        return self.role == self.ROLE_HR

    @property
    def available_seats(self):
        if not self.is_hr:
            return 0
        return max(0, (self.package_limit or 0) - (self.current_employees or 0))

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
