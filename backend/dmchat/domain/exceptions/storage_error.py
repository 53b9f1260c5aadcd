"""
StorageError - Raised when the durable store cannot complete a read or write.
Maps to: HTTP 503 Service Unavailable
"""


class StorageError(Exception):
    """Durable storage failure. Never retried by the core."""

    def __init__(self, message: str = "Storage unavailable"):
        super().__init__(message)
        self.message = message
