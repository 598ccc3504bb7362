"""
PaymentLedger - records package upgrades paid for by HR accounts

The payment provider integration lives outside this system; by the time a
payment reaches the ledger it has already been captured. Recording it raises
the HR account's package limit.
"""

from sqlalchemy.exc import IntegrityError
from assetverse import db
from assetverse.data.core.user_info.payment import Payment
from assetverse.buisness.directory.directory import Directory
from assetverse.buisness.requests.errors import ConflictError, InvalidPayloadError
from assetverse.utils.logger import get_logger
from assetverse.utils.logging_sanitizer import sanitize_dict

logger = get_logger("assetverse.domain.payments")


class PaymentLedger:

    def __init__(self, directory: Directory = None):
        self.directory = directory or Directory()

    def record_payment(self, data: dict) -> Payment:
        """
        Store a captured payment and apply its new package limit.

        Raises:
            InvalidPayloadError: Missing or non-numeric fields
            NotFoundError: hrEmail is not an HR account
            ConflictError: New limit below the seats already in use, or duplicate transaction
        """
        logger.info(f"Recording payment: {sanitize_dict(data)}")

        payment = Payment.from_dict(data)
        if not payment.hr_email or not payment.transaction_id:
            raise InvalidPayloadError("hrEmail and transactionId are required")
        try:
            payment.amount = float(payment.amount)
            payment.new_package_limit = int(payment.new_package_limit)
        except (TypeError, ValueError):
            raise InvalidPayloadError("amount and newPackageLimit must be numeric")

        hr_user = self.directory.get_hr_user(payment.hr_email)
        if payment.new_package_limit < (hr_user.current_employees or 0):
            raise ConflictError(
                f"Package limit {payment.new_package_limit} is below the "
                f"{hr_user.current_employees} employees already affiliated"
            )

        try:
            db.session.add(payment)
            hr_user.package_limit = payment.new_package_limit
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            raise ConflictError("Payment already recorded for this transaction")

        logger.info(f"Package limit for {hr_user.email} set to {payment.new_package_limit}")
        return payment
