"""
Domain exceptions for the asset request workflow

These exceptions represent business rule violations and storage failures.
They are raised by the business layer and translated to HTTP responses by
the presentation layer.
"""


class AssetVerseDomainError(Exception):
    """Base exception for all asset workflow domain errors"""
    pass


class NotFoundError(AssetVerseDomainError):
    """Raised when a referenced request, assignment, affiliation, asset or user does not exist"""

    def __init__(self, entity, identifier):
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} not found: {identifier}")


class ConflictError(AssetVerseDomainError):
    """Raised when a transition is applied to a record in the wrong state or loses a concurrent update"""
    pass


class SeatLimitExceededError(ConflictError):
    """Raised when affiliating another employee would exceed the HR package limit"""

    def __init__(self, hr_email, package_limit):
        self.hr_email = hr_email
        self.package_limit = package_limit
        super().__init__(
            f"HR account {hr_email} has no free seats (package limit {package_limit})"
        )


class NotReturnableError(ConflictError):
    """Raised when a return is attempted on a non-returnable asset"""
    pass


class OutOfStockError(AssetVerseDomainError):
    """Raised when an approval finds no available quantity"""

    def __init__(self, asset_id):
        self.asset_id = asset_id
        super().__init__(f"Asset {asset_id} is out of stock")


class InvalidPayloadError(AssetVerseDomainError):
    """Raised when an incoming payload is missing required fields or carries bad values"""
    pass


class InvalidDecisionError(InvalidPayloadError):
    """Raised when a decision other than approved/rejected is submitted"""
    pass


class StorageError(AssetVerseDomainError):
    """Raised when the storage layer fails"""
    pass


class ApprovalCascadeError(StorageError):
    """
    Raised when a storage failure interrupts the approval cascade.

    The cascade runs in one transaction, so everything it wrote was rolled
    back. ``step`` names where it stopped.
    """

    def __init__(self, request_id, step, cause=None):
        self.request_id = request_id
        self.step = step
        self.cause = cause
        super().__init__(
            f"Approval of request {request_id} failed at step '{step}' and was rolled back"
        )
