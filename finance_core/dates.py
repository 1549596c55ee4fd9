"""Calendar-month windows for a reference instant."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

__all__ = ["MonthWindow", "as_utc", "month_window", "shift_months"]


@dataclass(frozen=True)
class MonthWindow:
    start: datetime
    end: datetime
    days_in_month: int
    days_passed: int
    days_remaining: int

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    @property
    def label(self) -> str:
        return self.start.strftime("%b")


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def month_window(now: datetime) -> MonthWindow:
    """Return the bounds and day counts of the calendar month containing ``now``."""
    now = as_utc(now)
    days_in_month = calendar.monthrange(now.year, now.month)[1]
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    end = start + timedelta(days=days_in_month) - timedelta(microseconds=1)
    return MonthWindow(
        start=start,
        end=end,
        days_in_month=days_in_month,
        days_passed=now.day,
        days_remaining=days_in_month - now.day,
    )


def shift_months(moment: datetime, months: int) -> datetime:
    """Move ``moment`` by whole calendar months; the result falls on day 1."""
    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    return moment.replace(year=year, month=month + 1, day=1)
