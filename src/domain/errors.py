"""
Domain exceptions.
"""


class SchedulingError(Exception):
    """Base exception for scheduling-related errors."""
    pass


class ValidationError(SchedulingError):
    """
    Raised when form input is incomplete (missing date, shift or name).

    Detected before any store call; the message is shown to the user.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)
