"""
Logging helpers.
"""

import logging
from typing import Any, Dict

SENSITIVE_KEYS = ('password', 'token', 'secret', 'credit_card', 'cvv')

REDACTED = "***REDACTED***"


def get_logger(name: str) -> logging.Logger:
    """
    Usage:
        from utils.logger import get_logger
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)


def sanitize_log_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of ``data`` that is safe to put in a log record.

    Any key that mentions a password, token, secret or card detail is
    replaced with a redaction marker, whatever its value. Nested dicts and
    lists of dicts are cleaned the same way.
    """
    sanitized = {}
    for key, value in data.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            sanitized[key] = REDACTED
        elif isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)
        elif isinstance(value, list):
            sanitized[key] = [sanitize_log_data(v) if isinstance(v, dict) else v for v in value]
        else:
            sanitized[key] = value
    return sanitized
