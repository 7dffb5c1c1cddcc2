"""
Core business logic for ranking candidate trip blocks.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence, Set

from .dates import DateLike, to_date
from .exceptions import InvalidDurationError
from .models import (
    BlockDetails,
    DateRange,
    OverlapWindow,
    ParticipantAvailability,
    availability_percent,
    normalize_participants,
)

logger = logging.getLogger(__name__)

DEFAULT_TOP_LIMIT = 5


class OverlapCalculator:
    """
    Calculates, for every block of consecutive days in a date range, how many
    participants are free on every day of that block.

    Algorithm:
    1. Expand the date range into its days
    2. Turn each participant's free days into a set
    3. Count, per participant, the free days inside the first window
    4. Slide the window one day at a time, decrementing for the day that
       leaves and incrementing for the day that enters
    5. A participant counts as available when their counter equals the
       window length
    6. Rank windows by availability, earliest start first on ties

    Each slide touches every participant once, so the whole pass is
    O(days x participants) regardless of the window length.

    The calculator keeps no state between calls.
    """

    def calculate_overlap(
        self,
        participants: Optional[Sequence[Any]],
        start_date: DateLike,
        end_date: DateLike,
        duration_days: int
    ) -> List[OverlapWindow]:
        """
        Compute availability statistics for every block of duration_days days.

        Args:
            participants: Availability records (or mappings); None means none
            start_date: First day of the trip range (inclusive)
            end_date: Last day of the trip range (inclusive)
            duration_days: Length of each candidate block in days

        Returns:
            One OverlapWindow per valid start day, best availability first.
            Empty when there are no participants or the block does not fit.

        Raises:
            InvalidDurationError: If duration_days is not a positive integer
        """
        records = normalize_participants(participants)

        if not records:
            logger.debug("No participants supplied, skipping overlap calculation")
            return []

        _validate_duration(duration_days)

        days = DateRange.from_values(start_date, end_date).days()

        if len(days) < duration_days:
            logger.debug(
                "Range of %d day(s) is shorter than requested block of %d day(s)",
                len(days),
                duration_days,
            )
            return []

        free_sets = self._build_availability_sets(records)
        counters = self._prime_counters(free_sets, days[:duration_days])

        windows = [self._make_window(days, 0, counters, duration_days)]

        for offset in range(1, len(days) - duration_days + 1):
            leaving = days[offset - 1]
            entering = days[offset + duration_days - 1]

            for index, free_days in enumerate(free_sets):
                if leaving in free_days:
                    counters[index] -= 1
                if entering in free_days:
                    counters[index] += 1

            windows.append(self._make_window(days, offset, counters, duration_days))

        logger.debug(
            "Computed %d window(s) of %d day(s) for %d participant(s)",
            len(windows),
            duration_days,
            len(records),
        )

        return self.rank_windows(windows)

    @staticmethod
    def rank_windows(windows: Sequence[OverlapWindow]) -> List[OverlapWindow]:
        """Sort windows best-first; equal percentages keep chronological order."""
        return sorted(
            windows,
            key=lambda window: (-window.availability_percent, window.start_date)
        )

    @staticmethod
    def get_best_overlap_periods(
        windows: Sequence[OverlapWindow],
        limit: int = DEFAULT_TOP_LIMIT
    ) -> List[OverlapWindow]:
        """
        Return the first ``limit`` windows of an already ranked list.
        """
        if limit < 0:
            raise ValueError(f"limit must not be negative, got {limit}")
        return list(windows[:limit])

    def daily_availability(
        self,
        participants: Optional[Sequence[Any]],
        start_date: DateLike,
        end_date: DateLike
    ) -> Dict[str, int]:
        """
        Count, for each day in the range, how many participants are free.

        Returns an ordered mapping of ISO date string -> count.
        """
        records = normalize_participants(participants)
        free_sets = self._build_availability_sets(records)

        counts: Dict[str, int] = {}

        for day in DateRange.from_values(start_date, end_date).days():
            counts[day.isoformat()] = sum(
                1 for free_days in free_sets if day in free_days
            )

        return counts

    def block_details(
        self,
        participants: Optional[Sequence[Any]],
        block_start: DateLike,
        start_date: DateLike,
        end_date: DateLike,
        duration_days: int
    ) -> Optional[BlockDetails]:
        """
        Split participants into those free for a whole block and the rest.

        Returns None if the block does not start inside the range or would
        run past its end.
        """
        _validate_duration(duration_days)

        date_range = DateRange.from_values(start_date, end_date)
        first_day = to_date(block_start)

        if not date_range.contains(first_day):
            return None

        last_day = first_day + timedelta(days=duration_days - 1)
        if last_day > date_range.end:
            return None

        block_days = set(DateRange(start=first_day, end=last_day).days())

        available: List[ParticipantAvailability] = []
        unavailable: List[ParticipantAvailability] = []

        for participant in normalize_participants(participants):
            free_days = self._free_days(participant)
            if block_days <= free_days:
                available.append(participant)
            else:
                unavailable.append(participant)

        return BlockDetails(
            start_date=first_day,
            end_date=last_day,
            available=tuple(available),
            unavailable=tuple(unavailable)
        )

    def _build_availability_sets(
        self,
        participants: Sequence[ParticipantAvailability]
    ) -> List[Set[date]]:
        """Build one set of free days per participant."""
        return [self._free_days(participant) for participant in participants]

    @staticmethod
    def _free_days(participant: ParticipantAvailability) -> Set[date]:
        return set(participant.available_days)

    @staticmethod
    def _prime_counters(free_sets: List[Set[date]], first_window: List[date]) -> List[int]:
        """Count each participant's free days inside the first window."""
        counters = [0] * len(free_sets)

        for day in first_window:
            for index, free_days in enumerate(free_sets):
                if day in free_days:
                    counters[index] += 1

        return counters

    @staticmethod
    def _make_window(
        days: List[date],
        offset: int,
        counters: List[int],
        duration_days: int
    ) -> OverlapWindow:
        """Snapshot the statistics for the window starting at days[offset]."""
        total = len(counters)
        available = sum(1 for count in counters if count == duration_days)

        return OverlapWindow(
            start_date=days[offset],
            end_date=days[offset + duration_days - 1],
            available_count=available,
            total_participants=total,
            availability_percent=availability_percent(available, total),
            day_count=duration_days
        )


def _validate_duration(duration_days: int) -> None:
    if isinstance(duration_days, bool) or not isinstance(duration_days, int):
        raise InvalidDurationError(
            f"duration_days must be an integer, got {duration_days!r}"
        )
    if duration_days < 1:
        raise InvalidDurationError(
            f"duration_days must be at least 1, got {duration_days}"
        )


def calculate_overlap(
    participants: Optional[Sequence[Any]],
    start_date: DateLike,
    end_date: DateLike,
    duration_days: int
) -> List[OverlapWindow]:
    """Rank every block of duration_days days in the range. See OverlapCalculator."""
    return OverlapCalculator().calculate_overlap(
        participants, start_date, end_date, duration_days
    )


def get_best_overlap_periods(
    windows: Sequence[OverlapWindow],
    limit: int = DEFAULT_TOP_LIMIT
) -> List[OverlapWindow]:
    """Return the top ``limit`` windows of a ranked list."""
    return OverlapCalculator.get_best_overlap_periods(windows, limit)


def daily_availability(
    participants: Optional[Sequence[Any]],
    start_date: DateLike,
    end_date: DateLike
) -> Dict[str, int]:
    return OverlapCalculator().daily_availability(participants, start_date, end_date)


def block_details(
    participants: Optional[Sequence[Any]],
    block_start: DateLike,
    start_date: DateLike,
    end_date: DateLike,
    duration_days: int
) -> Optional[BlockDetails]:
    return OverlapCalculator().block_details(
        participants, block_start, start_date, end_date, duration_days
    )
