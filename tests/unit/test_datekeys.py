"""
Unit tests for date keys and month grid arithmetic.
"""

from datetime import date

import pytest

from daybook.core import (
    days_in_month,
    first_weekday_of_month,
    is_date_key,
    key_for,
    month_grid,
    month_prefix,
    parse_date_key,
    shift_month,
    to_date_key,
    today,
)
from daybook.domain import ValidationError

pytestmark = pytest.mark.unit


class TestToDateKey:
    """Tests for canonical YYYY-MM-DD keys."""

    @pytest.mark.parametrize(
        "year, month, day, expected",
        [
            (2024, 3, 5, "2024-03-05"),
            (2024, 12, 31, "2024-12-31"),
            (999, 1, 1, "0999-01-01"),
            (2024, 2, 29, "2024-02-29"),
        ],
    )
    def test_zero_padded(self, year, month, day, expected):
        key = to_date_key(year, month, day)

        assert key == expected
        assert len(key) == 10

    @pytest.mark.parametrize("year, month, day", [(2023, 2, 29), (2024, 4, 31), (2024, 13, 1), (2024, 1, 0)])
    def test_invalid_dates_rejected(self, year, month, day):
        with pytest.raises(ValidationError):
            to_date_key(year, month, day)

    def test_key_for_date(self):
        assert key_for(date(2024, 3, 5)) == "2024-03-05"

    def test_today_matches_local_date(self):
        assert today() == date.today().isoformat()


class TestMonthArithmetic:
    """Tests for month lengths, first weekdays, and navigation."""

    def test_days_in_every_month(self):
        lengths = [days_in_month(2023, month) for month in range(1, 13)]

        assert lengths == [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]

    @pytest.mark.parametrize(
        "year, expected",
        [(2024, 29), (2023, 28), (2000, 29), (1900, 28)],
    )
    def test_february_leap_years(self, year, expected):
        assert days_in_month(year, 2) == expected

    @pytest.mark.parametrize(
        "year, month, expected",
        [
            (2024, 9, 0),  # Sunday
            (2024, 1, 1),  # Monday
            (2024, 3, 5),  # Friday
            (2024, 6, 6),  # Saturday
        ],
    )
    def test_first_weekday_counts_from_sunday(self, year, month, expected):
        assert first_weekday_of_month(year, month) == expected

    def test_month_out_of_range(self):
        with pytest.raises(ValidationError):
            days_in_month(2024, 0)
        with pytest.raises(ValidationError):
            first_weekday_of_month(2024, 13)

    @pytest.mark.parametrize(
        "year, month, delta, expected",
        [
            (2024, 1, -1, (2023, 12)),
            (2024, 12, 1, (2025, 1)),
            (2024, 5, 14, (2025, 7)),
            (2024, 5, 0, (2024, 5)),
        ],
    )
    def test_shift_month(self, year, month, delta, expected):
        assert shift_month(year, month, delta) == expected

    def test_month_prefix(self):
        assert month_prefix(2024, 3) == "2024-03"


class TestMonthGrid:
    """Tests for the seven-column month layout."""

    def test_month_starting_on_sunday(self):
        grid = month_grid(2024, 9)

        assert len(grid) == 5
        assert grid[0] == [1, 2, 3, 4, 5, 6, 7]
        assert grid[-1] == [29, 30, None, None, None, None, None]

    def test_leading_blanks(self):
        grid = month_grid(2024, 3)

        assert grid[0] == [None, None, None, None, None, 1, 2]
        assert len(grid) == 6
        assert grid[-1][0] == 31
        assert all(len(week) == 7 for week in grid)

    def test_every_day_present_once(self):
        cells = [day for week in month_grid(2024, 2) for day in week if day is not None]

        assert cells == list(range(1, 30))


class TestParseDateKey:
    """Tests for key parsing and recognition."""

    def test_parses_valid_key(self):
        assert parse_date_key("2024-02-29") == date(2024, 2, 29)

    @pytest.mark.parametrize("value", ["2024-3-5", "2024-02-30", "20240305", "", "2024-03-05T00:00"])
    def test_rejects_malformed(self, value):
        with pytest.raises(ValidationError):
            parse_date_key(value)

    def test_is_date_key(self):
        assert is_date_key("2024-03-05") is True
        assert is_date_key("March 5") is False
        assert is_date_key(None) is False
