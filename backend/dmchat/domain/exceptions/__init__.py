"""
DOMAIN EXCEPTIONS - Business rule violations

These exceptions are raised by domain/application logic and caught by the
presentation layer, which maps them to HTTP status codes or realtime events.
"""

from dmchat.domain.exceptions.auth_error import AuthError
from dmchat.domain.exceptions.validation_error import DomainValidationError
from dmchat.domain.exceptions.storage_error import StorageError
from dmchat.domain.exceptions.session_closed import SessionClosedError

__all__ = [
    "AuthError",
    "DomainValidationError",
    "StorageError",
    "SessionClosedError",
]
