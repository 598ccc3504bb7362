"""
Logging Sanitizer Utility

Provides utilities to sanitize sensitive data before logging.
Payment payloads carry provider identifiers and client secrets that must
never end up in the log files.
"""

from typing import Dict, Any


# Fields that should never be logged
SENSITIVE_FIELDS = {
    'password',
    'secret',
    'token',
    'api_key',
    'apikey',
    'auth_token',
    'access_token',
    'refresh_token',
    'client_secret',
    'clientsecret',
    'transaction_id',
    'transactionid',
    'payment_method',
    'credit_card',
    'creditcard',
    'card_number',
    'cvv',
}


def is_sensitive(key: str) -> bool:
    """transactionId, transaction_id and TRANSACTION_ID all match 'transaction_id'"""
    lowered = key.lower()
    return lowered in SENSITIVE_FIELDS or lowered.replace('_', '') in SENSITIVE_FIELDS


def sanitize_dict(data: Dict[str, Any], redact_text: str = '[REDACTED]') -> Dict[str, Any]:
    """
    Copy of data with sensitive values replaced, nested dicts included.

    Example:
        >>> sanitize_dict({'hrEmail': 'hr@acme.io', 'transactionId': 'pi_123'})
        {'hrEmail': 'hr@acme.io', 'transactionId': '[REDACTED]'}
    """
    if not data:
        return data

    sanitized = {}
    for key, value in data.items():
        if is_sensitive(key):
            sanitized[key] = redact_text
        elif isinstance(value, dict):
            sanitized[key] = sanitize_dict(value, redact_text)
        else:
            sanitized[key] = value
    return sanitized


def sanitize_exception_message(exception: Exception) -> str:
    """
    Sanitize exception messages to ensure they don't contain sensitive data.

    Args:
        exception: Exception to sanitize

    Returns:
        Sanitized exception message
    """
    message = str(exception)

    if any(field in message.lower() for field in SENSITIVE_FIELDS):
        return f"{type(exception).__name__}: [Message contains sensitive data]"

    return message
