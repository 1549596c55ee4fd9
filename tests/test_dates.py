from datetime import datetime, timedelta, timezone

import pytest

from finance_core.dates import month_window, shift_months


@pytest.mark.parametrize(
    "year, month, expected_days",
    [(2024, 2, 29), (2023, 2, 28), (2024, 4, 30), (2024, 12, 31)],
)
def test_month_window_uses_real_calendar_day_counts(year, month, expected_days):
    window = month_window(datetime(year, month, 15, tzinfo=timezone.utc))
    assert window.days_in_month == expected_days
    assert window.days_passed == 15
    assert window.days_remaining == expected_days - 15


def test_month_window_bounds_cover_whole_month():
    window = month_window(datetime(2024, 12, 31, 23, 0, tzinfo=timezone.utc))
    assert window.start == datetime(2024, 12, 1, tzinfo=timezone.utc)
    assert window.end + timedelta(microseconds=1) == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert window.days_remaining == 0
    assert window.label == "Dec"


def test_naive_reference_is_treated_as_utc():
    window = month_window(datetime(2024, 3, 1, 0, 0))
    assert window.start.tzinfo is not None
    assert window.days_passed == 1


def test_contains_is_inclusive():
    window = month_window(datetime(2024, 6, 10, tzinfo=timezone.utc))
    assert window.contains(window.start)
    assert window.contains(window.end)
    assert not window.contains(window.end + timedelta(microseconds=1))


def test_shift_months_crosses_year_boundary():
    moment = datetime(2024, 1, 31, tzinfo=timezone.utc)
    assert shift_months(moment, -1) == datetime(2023, 12, 1, tzinfo=timezone.utc)
    assert shift_months(moment, 11) == datetime(2024, 12, 1, tzinfo=timezone.utc)
    assert shift_months(moment, 12) == datetime(2025, 1, 1, tzinfo=timezone.utc)
