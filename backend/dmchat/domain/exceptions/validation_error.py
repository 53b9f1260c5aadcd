"""
DomainValidationError - Raised when input breaks a business rule
(empty message text, bad username/password, invalid recipient reference).
Maps to: HTTP 400 Bad Request
"""


class DomainValidationError(Exception):
    """Exception raised for domain validation errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
