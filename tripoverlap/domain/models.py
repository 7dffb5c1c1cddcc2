"""
Domain models for date ranges, participant availability and overlap windows.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .dates import DateLike, format_date_range, iter_days, to_date

UNNAMED_PARTICIPANT = "Unnamed"


@dataclass(frozen=True)
class DateRange:
    """
    Represents an inclusive span of calendar days.

    A range whose start lies after its end is empty rather than invalid.
    """
    start: date
    end: date

    @classmethod
    def from_values(cls, start: DateLike, end: DateLike) -> "DateRange":
        """Build a range from date strings or date values."""
        return cls(start=to_date(start), end=to_date(end))

    def is_empty(self) -> bool:
        return self.start > self.end

    def days(self) -> List[date]:
        """Return every day in the range in ascending order."""
        return list(iter_days(self.start, self.end))

    def contains(self, day: DateLike) -> bool:
        return self.start <= to_date(day) <= self.end

    def __len__(self) -> int:
        if self.is_empty():
            return 0
        return self.end.toordinal() - self.start.toordinal() + 1

    def __str__(self) -> str:
        return f"{self.start.isoformat()} - {self.end.isoformat()}"


@dataclass(frozen=True)
class ParticipantAvailability:
    """
    The days a single participant is free.

    The name and email are carried for display only. Days may be given as
    ISO strings or date values and are stored as ``datetime.date``. Days may
    fall outside any queried range; such days simply never match.
    """
    name: str
    available_days: Tuple[DateLike, ...] = field(default_factory=tuple)
    email: str = ""

    def __post_init__(self):
        days = self.available_days or ()
        object.__setattr__(
            self,
            "available_days",
            tuple(to_date(day) for day in days)
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ParticipantAvailability":
        """
        Build a record from a plain mapping.

        Accepts both ``available_days`` and ``availableDays`` keys; a missing
        key means no free days.
        """
        days = data.get("available_days")
        if days is None:
            days = data.get("availableDays")

        return cls(
            name=str(data.get("name") or ""),
            available_days=tuple(days or ()),
            email=str(data.get("email") or "")
        )

    def is_free_on(self, day: DateLike) -> bool:
        return to_date(day) in self.available_days


@dataclass(frozen=True)
class OverlapWindow:
    """
    Availability statistics for one candidate block of consecutive days.
    """
    start_date: date
    end_date: date
    available_count: int
    total_participants: int
    availability_percent: int
    day_count: int

    def format_display(self) -> str:
        """
        Format the window for display.
        Format: Jun 1 - 3 | 67% (2/3 people, 3 days)
        """
        label = format_date_range(self.start_date, self.end_date)
        return (
            f"{label} | {self.availability_percent}% "
            f"({self.available_count}/{self.total_participants} people, {self.day_count} days)"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Return the window as a mapping with ISO date strings."""
        return {
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "availableCount": self.available_count,
            "totalParticipants": self.total_participants,
            "availabilityPercent": self.availability_percent,
            "dayCount": self.day_count
        }


@dataclass(frozen=True)
class BlockDetails:
    """
    Which participants can and cannot make a specific block.
    """
    start_date: date
    end_date: date
    available: Tuple[ParticipantAvailability, ...]
    unavailable: Tuple[ParticipantAvailability, ...]

    def available_names(self) -> List[str]:
        return [display_name(participant) for participant in self.available]

    def unavailable_names(self) -> List[str]:
        return [display_name(participant) for participant in self.unavailable]

    def missing_days(self, participant: ParticipantAvailability) -> int:
        """Number of days in the block the participant is not free."""
        free_days = set(participant.available_days)
        return sum(
            1 for day in iter_days(self.start_date, self.end_date)
            if day not in free_days
        )

    def unavailable_with_missing(self) -> List[Tuple[str, int]]:
        """Pairs of (name, missing day count) for everyone who cannot make it."""
        return [
            (display_name(participant), self.missing_days(participant))
            for participant in self.unavailable
        ]


def display_name(participant: ParticipantAvailability) -> str:
    return participant.name or UNNAMED_PARTICIPANT


def availability_percent(available_count: int, total_participants: int) -> int:
    """
    Percentage of participants available, rounded half up.

    Returns 0 when there are no participants.
    """
    if total_participants <= 0:
        return 0
    return (available_count * 200 + total_participants) // (2 * total_participants)


def coerce_participant(
    participant: "ParticipantAvailability | Mapping[str, Any]"
) -> ParticipantAvailability:
    """Accept either a record or a plain mapping."""
    if isinstance(participant, ParticipantAvailability):
        return participant
    return ParticipantAvailability.from_mapping(participant)


def normalize_participants(participants: Optional[Any]) -> List[ParticipantAvailability]:
    """Normalise an absent or empty participant collection to a list of records."""
    if not participants:
        return []
    return [coerce_participant(participant) for participant in participants]
