"""
Calendar-date helpers.

All dates are plain calendar days (``datetime.date``) without a time-of-day
or timezone component. Strings are converted at the boundary using the
strict ``YYYY-MM-DD`` format.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, List, Union

from dateutil import parser as dparse

DATE_FORMAT = "YYYY-MM-DD"

DateLike = Union[str, date]

# English labels independent of the process locale
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
WEEKDAY_ABBREVIATIONS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

ONE_DAY = timedelta(days=1)


def to_date(value: DateLike) -> date:
    """
    Convert a date string or date value to a ``datetime.date``.

    Datetimes are truncated to their calendar day. Malformed strings raise
    ``ValueError``.
    """
    # datetime is a subclass of date, so it goes first
    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        if len(text) != len(DATE_FORMAT) or text[4] != "-" or text[7] != "-":
            raise ValueError(f"Expected a {DATE_FORMAT} date, got {value!r}")
        return dparse.isoparse(text).date()

    raise TypeError(f"Cannot interpret {value!r} as a calendar date")


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive."""
    current = start

    while current <= end:
        yield current
        current += ONE_DAY


def get_dates_between(start_date: DateLike, end_date: DateLike) -> List[str]:
    """
    Expand an inclusive date range into ISO date strings.

    Returns an empty list when start_date is after end_date.

    Example:
        get_dates_between("2024-02-28", "2024-03-01")
        -> ["2024-02-28", "2024-02-29", "2024-03-01"]
    """
    start = to_date(start_date)
    end = to_date(end_date)

    return [day.isoformat() for day in iter_days(start, end)]


def month_day_label(day: date) -> str:
    """Format: Jun 1"""
    return f"{MONTH_ABBREVIATIONS[day.month - 1]} {day.day}"


def weekday_label(day: date) -> str:
    return WEEKDAY_ABBREVIATIONS[day.weekday()]


def format_date_range(start_date: DateLike, end_date: DateLike) -> str:
    """
    Format a date range as a short label.

    Format: "Jun 1 - 15" within one month, "Jun 25 - Jul 5" across months.
    """
    start = to_date(start_date)
    end = to_date(end_date)

    if start.month == end.month and start.year == end.year:
        return f"{month_day_label(start)} - {end.day}"

    return f"{month_day_label(start)} - {month_day_label(end)}"
