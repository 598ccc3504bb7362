"""
Directory - user lookups and HR seat-count bookkeeping

The seat count (User.current_employees) is a denormalized counter maintained
alongside the affiliation registry. It only changes through conditional
UPDATE statements so that 0 <= current_employees <= package_limit holds at
write time, even with concurrent approvals.

Seat-count changes never commit; the caller owns the transaction.
"""

from typing import Optional, Tuple
from flask import current_app
from sqlalchemy import update
from assetverse import db
from assetverse.data.core.user_info.user import User
from assetverse.buisness.requests.errors import (
    NotFoundError,
    SeatLimitExceededError,
    InvalidPayloadError,
)
from assetverse.utils.logger import get_logger

logger = get_logger("assetverse.domain.directory")


class Directory:
    """Read access to User records plus the seat-count counter"""

    def find_user_by_email(self, email: str) -> Optional[User]:
        return User.query.filter_by(email=email).first()

    def get_hr_user(self, hr_email: str) -> User:
        user = self.find_user_by_email(hr_email)
        if user is None or not user.is_hr:
            raise NotFoundError('HR user', hr_email)
        return user

    def get_role(self, email: str) -> str:
        user = self.find_user_by_email(email)
        return user.role if user else User.ROLE_EMPLOYEE

    def register_user(self, data: dict) -> Tuple[User, bool]:
        """
        Create a user unless one with the same email already exists.

        HR accounts start on the basic package with no seats used.

        Returns:
            (user, created)
        """
        email = data.get('email')
        if not email:
            raise InvalidPayloadError("email is required")

        existing = self.find_user_by_email(email)
        if existing:
            logger.debug(f"User {email} already exists, skipping registration")
            return existing, False

        user = User.from_dict(data)
        user.role = user.role or User.ROLE_EMPLOYEE
        if user.role not in (User.ROLE_HR, User.ROLE_EMPLOYEE):
            raise InvalidPayloadError(f"Unknown role: {user.role}")

        if user.is_hr:
            user.package_limit = current_app.config.get('DEFAULT_PACKAGE_LIMIT', 5)
            user.current_employees = 0
            user.subscription = 'basic'
            user.company_logo = user.company_logo or ''

        db.session.add(user)
        db.session.commit()
        logger.info(f"Registered {user.role} user {email}")
        return user, True

    def increment_seat_count(self, hr_email: str, delta: int) -> int:
        """
        Atomically move the HR seat count by delta.

        A positive delta only applies while the result stays within the
        package limit. A negative delta only applies while the result stays
        at or above zero; hitting the floor is logged and skipped.

        Returns:
            int: number of user rows changed (0 or 1)

        Raises:
            NotFoundError: If hr_email is not an HR account
            SeatLimitExceededError: If a positive delta would exceed the package limit
        """
        if delta == 0:
            return 0

        stmt = (
            update(User)
            .where(User.email == hr_email, User.role == User.ROLE_HR)
            .values(current_employees=User.current_employees + delta)
            .execution_options(synchronize_session=False)
        )
        if delta > 0:
            stmt = stmt.where(User.current_employees + delta <= User.package_limit)
        else:
            stmt = stmt.where(User.current_employees + delta >= 0)

        changed = db.session.execute(stmt).rowcount
        if changed:
            logger.debug(f"Seat count for {hr_email} moved by {delta}")
            return changed

        hr_user = self.get_hr_user(hr_email)
        if delta > 0:
            raise SeatLimitExceededError(hr_email, hr_user.package_limit)

        logger.warning(
            f"Seat count for {hr_email} is already {hr_user.current_employees}; "
            f"decrement by {-delta} skipped"
        )
        return 0
