"""
Translate domain errors into JSON responses
"""

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError
from assetverse import db
from assetverse.buisness.requests.errors import (
    AssetVerseDomainError,
    ApprovalCascadeError,
    ConflictError,
    InvalidPayloadError,
    NotFoundError,
    OutOfStockError,
    StorageError,
)
from assetverse.utils.logger import get_logger
from assetverse.utils.logging_sanitizer import sanitize_exception_message

logger = get_logger("assetverse.routes.errors")

# Most specific first
STATUS_CODES = (
    (NotFoundError, 404),
    (ConflictError, 409),
    (OutOfStockError, 409),
    (InvalidPayloadError, 400),
    (StorageError, 500),
)


def status_for(error):
    for error_class, status in STATUS_CODES:
        if isinstance(error, error_class):
            return status
    return 500


def error_body(error):
    body = {'message': str(error), 'error': type(error).__name__}
    if isinstance(error, ApprovalCascadeError):
        body['step'] = error.step
    return body


def register_error_handlers(app):

    @app.errorhandler(AssetVerseDomainError)
    def handle_domain_error(error):
        status = status_for(error)
        if status >= 500:
            logger.error(f"{type(error).__name__}: {sanitize_exception_message(error)}")
        else:
            logger.debug(f"Client error {status}: {error}")
        return jsonify(error_body(error)), status

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(error):
        db.session.rollback()
        logger.error(f"Unhandled storage error: {sanitize_exception_message(error)}")
        return jsonify({'message': 'Internal storage error', 'error': 'StorageError'}), 500
