"""Tests for finwatch.dates pure functions."""

from datetime import date

import pytest

from finwatch.dates import days_in_month, is_leap_year, month_label, month_window


class TestMonthWindow:
    """Tests for month_window."""

    def test_january_window(self) -> None:
        """Should span the 1st to the 31st."""
        assert month_window(2025, 1) == (date(2025, 1, 1), date(2025, 1, 31))

    def test_december_stays_in_year(self) -> None:
        """Should end on December 31st, not cross into January."""
        assert month_window(2025, 12) == (date(2025, 12, 1), date(2025, 12, 31))

    def test_february_non_leap_year(self) -> None:
        """Should end on the 28th in a non-leap year."""
        assert month_window(2025, 2) == (date(2025, 2, 1), date(2025, 2, 28))

    def test_february_leap_year(self) -> None:
        """Should end on the 29th in a leap year."""
        assert month_window(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_thirty_day_month(self) -> None:
        """Should handle 30-day months."""
        assert month_window(2025, 4) == (date(2025, 4, 1), date(2025, 4, 30))

    def test_all_months_of_year(self) -> None:
        """Should agree with days_in_month for every month."""
        for month in range(1, 13):
            first, last = month_window(2025, month)
            assert first.day == 1
            assert last.month == month
            assert last.day == days_in_month(2025, month)

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, month: int) -> None:
        """Should reject months outside 1-12."""
        with pytest.raises(ValueError, match="between 1 and 12"):
            month_window(2025, month)


class TestLeapYear:
    """Tests for is_leap_year and days_in_month."""

    @pytest.mark.parametrize(
        "year, expected",
        [(2024, True), (2025, False), (2000, True), (1900, False), (2100, False)],
    )
    def test_gregorian_rule(self, year: int, expected: bool) -> None:
        """Should apply the century exception."""
        assert is_leap_year(year) is expected

    def test_days_in_february(self) -> None:
        """Should give 29 days only in leap years."""
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2025, 2) == 28

    def test_days_in_long_and_short_months(self) -> None:
        """Should give 31 for October and 30 for November."""
        assert days_in_month(2025, 10) == 31
        assert days_in_month(2025, 11) == 30


class TestMonthLabel:
    """Tests for month_label."""

    def test_label(self) -> None:
        """Should render the full month name and year."""
        assert month_label(2025, 10) == "October 2025"

    def test_label_rejects_bad_month(self) -> None:
        """Should raise ValueError for a month outside 1-12."""
        with pytest.raises(ValueError, match="between 1 and 12"):
            month_label(2025, 13)
