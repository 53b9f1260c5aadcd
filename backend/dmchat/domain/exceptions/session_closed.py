"""SessionClosedError - push attempted on a connection that is already closed."""


class SessionClosedError(Exception):
    def __init__(self, message: str = "Session is closed"):
        super().__init__(message)
