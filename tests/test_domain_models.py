"""
Tests for domain models.
"""

from datetime import date

import pytest

from tripoverlap.domain.models import (
    BlockDetails,
    DateRange,
    OverlapWindow,
    ParticipantAvailability,
    availability_percent,
    normalize_participants,
)


class TestDateRange:
    """Tests for DateRange model."""

    def test_days_and_length(self):
        """Test day enumeration of a valid range."""
        date_range = DateRange.from_values("2024-06-01", "2024-06-03")

        assert date_range.days() == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]
        assert len(date_range) == 3
        assert not date_range.is_empty()

    def test_reversed_range_is_empty(self):
        """Test that start > end gives an empty range instead of an error."""
        date_range = DateRange.from_values("2024-06-03", "2024-06-01")

        assert date_range.is_empty()
        assert date_range.days() == []
        assert len(date_range) == 0

    def test_contains(self):
        date_range = DateRange.from_values("2024-06-01", "2024-06-03")

        assert date_range.contains("2024-06-01")
        assert date_range.contains(date(2024, 6, 3))
        assert not date_range.contains("2024-06-04")
        assert not date_range.contains("2024-05-31")

    def test_str(self):
        assert str(DateRange.from_values("2024-06-01", "2024-06-03")) == "2024-06-01 - 2024-06-03"


class TestParticipantAvailability:
    """Tests for ParticipantAvailability model."""

    def test_strings_converted_to_dates(self):
        participant = ParticipantAvailability(
            name="Alice",
            available_days=("2024-06-01", "2024-06-02")
        )

        assert participant.available_days == (date(2024, 6, 1), date(2024, 6, 2))
        assert participant.is_free_on("2024-06-02")
        assert not participant.is_free_on("2024-06-03")

    def test_none_days_become_empty(self):
        participant = ParticipantAvailability(name="NoData", available_days=None)

        assert participant.available_days == ()

    def test_from_mapping_with_camel_case_key(self):
        participant = ParticipantAvailability.from_mapping(
            {"name": "Bob", "email": "bob@example.com", "availableDays": ["2024-06-01"]}
        )

        assert participant.name == "Bob"
        assert participant.email == "bob@example.com"
        assert participant.available_days == (date(2024, 6, 1),)

    def test_from_mapping_without_days(self):
        participant = ParticipantAvailability.from_mapping({"name": "NoData"})

        assert participant.available_days == ()
        assert participant.email == ""

    def test_malformed_day_raises(self):
        with pytest.raises(ValueError):
            ParticipantAvailability(name="Alice", available_days=("June first",))

    def test_normalize_participants(self):
        """Test that None and mappings are normalised to records."""
        assert normalize_participants(None) == []
        assert normalize_participants([]) == []

        records = normalize_participants([{"name": "A", "available_days": ["2024-06-01"]}])

        assert isinstance(records[0], ParticipantAvailability)


class TestOverlapWindow:
    """Tests for OverlapWindow model."""

    def _window(self) -> OverlapWindow:
        return OverlapWindow(
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 3),
            available_count=2,
            total_participants=3,
            availability_percent=67,
            day_count=3
        )

    def test_format_display(self):
        assert self._window().format_display() == "Jun 1 - 3 | 67% (2/3 people, 3 days)"

    def test_to_dict(self):
        assert self._window().to_dict() == {
            "startDate": "2024-06-01",
            "endDate": "2024-06-03",
            "availableCount": 2,
            "totalParticipants": 3,
            "availabilityPercent": 67,
            "dayCount": 3
        }


class TestBlockDetails:
    """Tests for BlockDetails model."""

    def test_names(self):
        alice = ParticipantAvailability(name="Alice")
        bob = ParticipantAvailability(name="Bob")
        details = BlockDetails(
            start_date=date(2024, 6, 1),
            end_date=date(2024, 6, 2),
            available=(alice,),
            unavailable=(bob,)
        )

        assert details.available_names() == ["Alice"]
        assert details.unavailable_names() == ["Bob"]


class TestAvailabilityPercent:
    """Tests for the percentage rounding rule."""

    @pytest.mark.parametrize(
        "available, total, expected",
        [
            (0, 3, 0),
            (1, 3, 33),
            (2, 3, 67),
            (3, 3, 100),
            (1, 8, 13),  # 12.5 rounds up
            (1, 200, 1),  # 0.5 rounds up
            (0, 0, 0),
        ],
    )
    def test_rounding(self, available, total, expected):
        assert availability_percent(available, total) == expected
