"""
Whole-unit retry for transactional workflows

A multi-step write (approval cascade, asset return) either commits as a
whole or is rolled back. When the storage layer reports a transient failure
(sqlalchemy OperationalError: locked database, dropped connection) the
entire unit is run again from the top; nothing is resumed mid-sequence.
Domain errors and other storage errors are never retried.
"""

import time
from typing import Callable, TypeVar
from flask import current_app
from sqlalchemy.exc import OperationalError
from assetverse import db
from assetverse.utils.logger import get_logger

logger = get_logger("assetverse.domain.core.retry")

T = TypeVar('T')


class RetriesExhausted(Exception):
    """Raised when a unit of work keeps failing with transient storage errors"""

    def __init__(self, label, attempts, cause):
        self.label = label
        self.attempts = attempts
        self.cause = cause
        super().__init__(f"{label} failed after {attempts} attempts: {cause}")


def run_with_retry(unit: Callable[[], T], label: str, max_retries: int = None, backoff: float = None) -> T:
    """
    Run unit(), retrying it as a whole on transient storage errors.

    Args:
        unit: Zero-argument callable that performs and commits the work
        label: Human readable name used in log lines
        max_retries: Retries after the first attempt (default APPROVAL_MAX_RETRIES)
        backoff: Base delay in seconds, multiplied by the attempt number (default APPROVAL_RETRY_BACKOFF)

    Raises:
        RetriesExhausted: If every attempt failed with OperationalError
    """
    if max_retries is None:
        max_retries = current_app.config.get('APPROVAL_MAX_RETRIES', 3)
    if backoff is None:
        backoff = current_app.config.get('APPROVAL_RETRY_BACKOFF', 0.05)

    attempts = max_retries + 1
    for attempt in range(1, attempts + 1):
        try:
            return unit()
        except OperationalError as e:
            db.session.rollback()
            if attempt == attempts:
                logger.error(f"{label}: transient storage error on final attempt {attempt}/{attempts}: {e}")
                raise RetriesExhausted(label, attempts, e) from e
            logger.warning(f"{label}: transient storage error on attempt {attempt}/{attempts}, retrying: {e}")
            time.sleep(backoff * attempt)
