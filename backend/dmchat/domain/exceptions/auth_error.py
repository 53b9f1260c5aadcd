"""
AuthError - Raised when a credential is missing, malformed, expired or wrong.
Maps to: HTTP 401 Unauthorized, WebSocket close 1008
"""


class AuthError(Exception):
    """Raised when a caller cannot be authenticated"""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
        self.message = message
