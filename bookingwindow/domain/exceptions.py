"""
Domain-specific exception hierarchy for the booking window resolver.
"""


class BookingWindowError(Exception):
    """Base class for all booking window errors."""


class PastBookingError(BookingWindowError):
    """Raised when a candidate booking time lies before the current moment."""

    def __init__(self, message: str = "Attempting to book a meeting in the past."):
        super().__init__(message)


class ConfigurationError(BookingWindowError):
    """Raised when the resolver is called without inputs its policy requires."""
