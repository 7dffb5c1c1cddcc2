"""
Domain-specific exception hierarchy for the trip overlap application.
"""


class OverlapError(Exception):
    """Base class for all application-level errors."""


class InvalidDurationError(OverlapError, ValueError):
    """Raised when a requested block length is not a positive whole number of days."""


class AvailabilityImportError(OverlapError):
    """Raised when participant availability cannot be read or has the wrong shape."""
