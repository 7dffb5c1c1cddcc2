"""
Tests for calendar-date helpers.
"""

from datetime import date, datetime

import pytest

from tripoverlap.domain.dates import format_date_range, get_dates_between, to_date


class TestGetDatesBetween:
    """Tests for inclusive date-range expansion."""

    def test_returns_all_dates_inclusive(self):
        """Test that both ends of the range are included."""
        assert get_dates_between("2024-06-01", "2024-06-05") == [
            "2024-06-01", "2024-06-02", "2024-06-03", "2024-06-04", "2024-06-05"
        ]

    def test_single_day(self):
        """Test that start == end yields one day."""
        assert get_dates_between("2024-06-01", "2024-06-01") == ["2024-06-01"]

    def test_start_after_end_is_empty(self):
        """Test that a reversed range is empty, not an error."""
        assert get_dates_between("2024-06-05", "2024-06-01") == []

    def test_month_boundary(self):
        assert get_dates_between("2024-01-30", "2024-02-02") == [
            "2024-01-30", "2024-01-31", "2024-02-01", "2024-02-02"
        ]

    def test_year_boundary(self):
        assert get_dates_between("2024-12-30", "2025-01-02") == [
            "2024-12-30", "2024-12-31", "2025-01-01", "2025-01-02"
        ]

    def test_leap_year_february(self):
        """Test that Feb 29 is produced in a leap year."""
        assert get_dates_between("2024-02-28", "2024-03-01") == [
            "2024-02-28", "2024-02-29", "2024-03-01"
        ]

    def test_non_leap_year_february(self):
        assert get_dates_between("2023-02-27", "2023-03-01") == [
            "2023-02-27", "2023-02-28", "2023-03-01"
        ]

    def test_accepts_date_values(self):
        assert get_dates_between(date(2024, 6, 1), date(2024, 6, 2)) == [
            "2024-06-01", "2024-06-02"
        ]


class TestToDate:
    """Tests for boundary date conversion."""

    def test_parse_iso_string(self):
        assert to_date("2024-06-01") == date(2024, 6, 1)

    def test_strips_whitespace(self):
        assert to_date(" 2024-06-01 ") == date(2024, 6, 1)

    def test_datetime_truncated_to_day(self):
        """Test that the time of day is dropped."""
        result = to_date(datetime(2024, 6, 1, 23, 30))

        assert result == date(2024, 6, 1)
        assert not isinstance(result, datetime)

    def test_date_passes_through(self):
        day = date(2024, 6, 1)
        assert to_date(day) is day

    @pytest.mark.parametrize("value", ["not-a-date", "2024-02-30", "2024/06/01", "20240601", ""])
    def test_malformed_string_raises_value_error(self, value):
        with pytest.raises(ValueError):
            to_date(value)

    def test_unsupported_type_raises_type_error(self):
        with pytest.raises(TypeError):
            to_date(20240601)


class TestFormatDateRange:
    """Tests for display labels."""

    def test_same_month(self):
        assert format_date_range("2024-06-01", "2024-06-15") == "Jun 1 - 15"

    def test_cross_month(self):
        assert format_date_range("2024-06-25", "2024-07-05") == "Jun 25 - Jul 5"

    def test_same_day(self):
        assert format_date_range("2024-06-01", "2024-06-01") == "Jun 1 - 1"

    def test_same_month_different_year_uses_long_form(self):
        """Test that matching months in different years are not collapsed."""
        assert format_date_range("2024-06-01", "2025-06-03") == "Jun 1 - Jun 3"

    def test_cross_year(self):
        assert format_date_range(date(2024, 12, 30), date(2025, 1, 2)) == "Dec 30 - Jan 2"
