"""
AffiliationRegistry - membership of employees in the companies (HR accounts)
that have granted them assets

One row per (employee_email, hr_email); the pair is a unique constraint.
Joining a team happens once, on the first approval for the pair, and costs
one seat of the HR package. Removing the affiliation frees the seat but
leaves assignments and requests as they are.
"""

from datetime import datetime
from typing import Optional, Tuple
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from assetverse import db
from assetverse.data.affiliations.employee_affiliation import EmployeeAffiliation
from assetverse.buisness.directory.directory import Directory
from assetverse.buisness.requests.errors import AssetVerseDomainError, NotFoundError, StorageError
from assetverse.utils.logger import get_logger

logger = get_logger("assetverse.domain.affiliations")


class AffiliationRegistry:

    def __init__(self, directory: Directory = None):
        self.directory = directory or Directory()

    def find_by_id(self, affiliation_id: int) -> Optional[EmployeeAffiliation]:
        return db.session.get(EmployeeAffiliation, affiliation_id, populate_existing=True)

    def find_by_pair(self, employee_email: str, hr_email: str) -> Optional[EmployeeAffiliation]:
        return EmployeeAffiliation.query.filter_by(
            employee_email=employee_email,
            hr_email=hr_email,
        ).first()

    def insert_if_absent(self, record: dict) -> Tuple[EmployeeAffiliation, bool]:
        """
        Insert an affiliation unless the (employee, HR) pair already exists.

        The insert runs in a savepoint; losing a race against a concurrent
        insert of the same pair surfaces as an IntegrityError and is treated
        as "already present". Flushes, does not commit.

        Returns:
            (affiliation, created)
        """
        existing = self.find_by_pair(record['employee_email'], record['hr_email'])
        if existing:
            return existing, False

        affiliation = EmployeeAffiliation.from_dict(record)
        affiliation.role = affiliation.role or 'employee'
        affiliation.affiliation_date = affiliation.affiliation_date or datetime.utcnow()

        try:
            with db.session.begin_nested():
                db.session.add(affiliation)
        except IntegrityError:
            logger.info(
                f"Affiliation {record['employee_email']} @ {record['hr_email']} "
                f"was created concurrently, keeping the existing row"
            )
            existing = self.find_by_pair(record['employee_email'], record['hr_email'])
            if existing is None:
                raise
            return existing, False

        return affiliation, True

    def remove_affiliation(self, affiliation_id: int) -> int:
        """
        Remove an employee from an HR team and free the seat.

        Assets still assigned to the employee stay assigned. The delete is
        checked by rowcount, so of two concurrent removals only one frees a
        seat; the other sees NotFoundError.

        Returns:
            int: number of affiliations deleted

        Raises:
            NotFoundError: If the affiliation (or its HR account) does not exist
            StorageError: If the delete could not be committed
        """
        affiliation = self.find_by_id(affiliation_id)
        if affiliation is None:
            raise NotFoundError('Affiliation', affiliation_id)

        hr_email = affiliation.hr_email
        employee_email = affiliation.employee_email
        try:
            stmt = delete(EmployeeAffiliation).where(EmployeeAffiliation.id == affiliation_id)
            if db.session.execute(stmt).rowcount == 0:
                raise NotFoundError('Affiliation', affiliation_id)
            self.directory.increment_seat_count(hr_email, -1)
            db.session.commit()
        except AssetVerseDomainError:
            db.session.rollback()
            raise
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Failed to remove affiliation {affiliation_id}: {e}")
            raise StorageError(f"Could not remove affiliation {affiliation_id}") from e

        logger.info(f"Removed {employee_email} from team {hr_email}")
        return 1
