"""Folds expense collections into totals, breakdowns and monthly trends."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Sequence

from .dates import as_utc, month_window, shift_months
from .models import Category, Expense

__all__ = [
    "CategoryTotal",
    "MonthlyTotal",
    "category_breakdown",
    "category_spent",
    "current_month_spent",
    "expenses_between",
    "monthly_trend",
    "percentage_of",
    "total_spent",
    "uncategorized_total",
]

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass(frozen=True)
class CategoryTotal:
    category_id: str
    name: str
    total: Decimal
    color: str
    percentage: Decimal

    def to_dict(self):
        return {
            "categoryId": self.category_id,
            "name": self.name,
            "total": f"{self.total:.2f}",
            "color": self.color,
            "percentage": f"{self.percentage:.2f}",
        }


@dataclass(frozen=True)
class MonthlyTotal:
    month: str
    year: int
    amount: Decimal

    def to_dict(self):
        return {"month": self.month, "year": self.year, "amount": f"{self.amount:.2f}"}


def percentage_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return ``part`` as a percentage of ``whole``; 0 when there is no whole."""
    if whole <= 0:
        return ZERO
    return HUNDRED * part / whole


def total_spent(expenses: Iterable[Expense]) -> Decimal:
    return sum((expense.amount for expense in expenses), start=ZERO)


def expenses_between(
    expenses: Iterable[Expense], start: datetime, end: datetime
) -> List[Expense]:
    """Return the expenses dated within ``start`` and ``end``, both inclusive."""
    return [expense for expense in expenses if start <= as_utc(expense.date) <= end]


def current_month_spent(expenses: Iterable[Expense], now: datetime) -> Decimal:
    """Sum spend from the first instant of ``now``'s month up to ``now``."""
    now = as_utc(now)
    return total_spent(expenses_between(expenses, month_window(now).start, now))


def category_spent(
    expenses: Iterable[Expense], category_id: str, start: datetime, end: datetime
) -> Decimal:
    return total_spent(
        expense
        for expense in expenses_between(expenses, start, end)
        if expense.category == category_id
    )


def category_breakdown(
    expenses: Sequence[Expense], categories: Sequence[Category]
) -> List[CategoryTotal]:
    """Return per-category totals in category order, skipping categories with no spend."""
    grand_total = total_spent(expenses)
    sums = {}
    for expense in expenses:
        sums[expense.category] = sums.get(expense.category, ZERO) + expense.amount

    breakdown: List[CategoryTotal] = []
    for category in categories:
        total = sums.get(category.id, ZERO)
        if total == 0:
            continue
        breakdown.append(
            CategoryTotal(
                category_id=category.id,
                name=category.name,
                total=total,
                color=category.color,
                percentage=percentage_of(total, grand_total),
            )
        )
    return breakdown


def uncategorized_total(
    expenses: Iterable[Expense], categories: Iterable[Category]
) -> Decimal:
    """Sum the expenses whose category matches no known category."""
    known = {category.id for category in categories}
    return total_spent(expense for expense in expenses if expense.category not in known)


def monthly_trend(
    expenses: Sequence[Expense], now: datetime, month_count: int = 6
) -> List[MonthlyTotal]:
    """Return ``month_count`` monthly totals ending with ``now``'s month, oldest first."""
    anchor = month_window(now).start
    trend: List[MonthlyTotal] = []
    for offset in range(month_count - 1, -1, -1):
        window = month_window(shift_months(anchor, -offset))
        trend.append(
            MonthlyTotal(
                month=window.label,
                year=window.start.year,
                amount=total_spent(expenses_between(expenses, window.start, window.end)),
            )
        )
    return trend
