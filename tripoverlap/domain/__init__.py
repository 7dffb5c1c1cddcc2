"""
Domain layer - Pure business logic without external dependencies.
"""

from .dates import format_date_range, get_dates_between, to_date
from .exceptions import AvailabilityImportError, InvalidDurationError, OverlapError
from .models import BlockDetails, DateRange, OverlapWindow, ParticipantAvailability
from .overlap_calculator import (
    OverlapCalculator,
    block_details,
    calculate_overlap,
    daily_availability,
    get_best_overlap_periods,
)

__all__ = [
    "AvailabilityImportError",
    "BlockDetails",
    "DateRange",
    "InvalidDurationError",
    "OverlapCalculator",
    "OverlapError",
    "OverlapWindow",
    "ParticipantAvailability",
    "block_details",
    "calculate_overlap",
    "daily_availability",
    "format_date_range",
    "get_best_overlap_periods",
    "get_dates_between",
    "to_date",
]
