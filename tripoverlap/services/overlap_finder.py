"""
Application services for finding the best shared trip block.

The service coordinates loading participant availability via a source
adapter and delegates the actual overlap calculation to the domain-level
``OverlapCalculator``. This keeps the CLI thin and improves testability by
allowing the availability source to be stubbed via a simple protocol.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol, Tuple

from ..domain.dates import DateLike
from ..domain.models import BlockDetails, OverlapWindow, ParticipantAvailability
from ..domain.overlap_calculator import DEFAULT_TOP_LIMIT, OverlapCalculator

logger = logging.getLogger(__name__)


class AvailabilitySourceProtocol(Protocol):
    """Protocol describing the availability source needed by the service."""

    def load_participants(self) -> List[ParticipantAvailability]:
        """Return the current availability records."""


class OverlapFinderService:
    """
    Orchestrates availability retrieval and overlap calculation.

    Participants are loaded fresh for every request; nothing is cached.
    """

    def __init__(
        self,
        availability_source: AvailabilitySourceProtocol,
        calculator: Optional[OverlapCalculator] = None,
    ) -> None:
        self._availability_source = availability_source
        self._calculator = calculator or OverlapCalculator()

    def load_participants(self) -> List[ParticipantAvailability]:
        """Load participants from the source, dropping duplicate entries by name."""
        participants = self._availability_source.load_participants()

        unique: List[ParticipantAvailability] = []
        seen_names: set[str] = set()

        for participant in participants:
            key = participant.name.strip().lower()
            if key and key in seen_names:
                logger.warning("Ignoring duplicate entry for participant %r", participant.name)
                continue
            seen_names.add(key)
            unique.append(participant)

        return unique

    def find_overlaps(
        self,
        *,
        start_date: DateLike,
        end_date: DateLike,
        duration_days: int,
    ) -> List[OverlapWindow]:
        """Rank every block of duration_days days in the range."""
        participants = self.load_participants()

        return self._calculator.calculate_overlap(
            participants,
            start_date,
            end_date,
            duration_days,
        )

    def find_best_periods(
        self,
        *,
        start_date: DateLike,
        end_date: DateLike,
        duration_days: int,
        limit: int = DEFAULT_TOP_LIMIT,
    ) -> List[OverlapWindow]:
        """Return the top ``limit`` blocks."""
        windows = self.find_overlaps(
            start_date=start_date,
            end_date=end_date,
            duration_days=duration_days,
        )
        return self._calculator.get_best_overlap_periods(windows, limit)

    def heatmap(
        self,
        *,
        start_date: DateLike,
        end_date: DateLike,
    ) -> Tuple[Dict[str, int], int]:
        """
        Count free participants per day.

        Returns the per-day counts together with the number of participants
        they were counted from, both taken from a single load.
        """
        participants = self.load_participants()
        counts = self._calculator.daily_availability(
            participants,
            start_date,
            end_date,
        )
        return counts, len(participants)

    def inspect_block(
        self,
        *,
        block_start: DateLike,
        start_date: DateLike,
        end_date: DateLike,
        duration_days: int,
    ) -> Optional[BlockDetails]:
        """Show who can and cannot make the block starting at block_start."""
        return self._calculator.block_details(
            self.load_participants(),
            block_start,
            start_date,
            end_date,
            duration_days,
        )
