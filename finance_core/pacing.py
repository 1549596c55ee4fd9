"""Spending velocity against a monthly ceiling.

``remaining_budget`` and ``budget_percentage`` compare *all-time* spend with the
monthly ceiling, while the daily figures use spend within the current month.
Both are kept as the dashboard has always shown them.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional

from .aggregation import ZERO, percentage_of
from .category_budgets import Band, classify_utilisation
from .dates import MonthWindow

__all__ = ["BudgetPacing", "DEFAULT_MONTHLY_BUDGET", "calculate_pacing"]

DEFAULT_MONTHLY_BUDGET = Decimal("1000")


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


@dataclass(frozen=True)
class BudgetPacing:
    monthly_budget: Decimal
    total_spent: Decimal
    current_month_spent: Decimal
    remaining_budget: Decimal
    budget_percentage: Decimal
    daily_average_spent: Decimal
    daily_budget_allowance: Decimal
    projected_month_end: Decimal
    daily_budget_remaining: Decimal
    is_on_track: bool
    days_in_month: int
    days_passed: int
    days_remaining: int

    @property
    def budget_band(self) -> Band:
        return classify_utilisation(self.budget_percentage)

    @property
    def projected_overspend(self) -> Decimal:
        return max(self.projected_month_end - self.monthly_budget, ZERO)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "monthlyBudget": _money(self.monthly_budget),
            "totalSpent": _money(self.total_spent),
            "currentMonthSpent": _money(self.current_month_spent),
            "remainingBudget": _money(self.remaining_budget),
            "budgetPercentage": _money(self.budget_percentage),
            "budgetBand": self.budget_band.value,
            "dailyAverageSpent": _money(self.daily_average_spent),
            "dailyBudgetAllowance": _money(self.daily_budget_allowance),
            "projectedMonthEnd": _money(self.projected_month_end),
            "projectedOverspend": _money(self.projected_overspend),
            "dailyBudgetRemaining": _money(self.daily_budget_remaining),
            "isOnTrack": self.is_on_track,
            "daysInMonth": self.days_in_month,
            "daysPassed": self.days_passed,
            "daysRemaining": self.days_remaining,
        }


def calculate_pacing(
    total_spent: Decimal,
    current_month_spent: Decimal,
    monthly_budget: Optional[Decimal],
    window: MonthWindow,
) -> BudgetPacing:
    """Derive the pacing figures; never raises for zero denominators."""
    if monthly_budget is None:
        monthly_budget = DEFAULT_MONTHLY_BUDGET

    remaining_budget = monthly_budget - total_spent
    daily_average_spent = (
        current_month_spent / window.days_passed if window.days_passed > 0 else ZERO
    )
    daily_budget_allowance = (
        monthly_budget / window.days_in_month if window.days_in_month > 0 else ZERO
    )
    daily_budget_remaining = (
        remaining_budget / window.days_remaining if window.days_remaining > 0 else ZERO
    )

    return BudgetPacing(
        monthly_budget=monthly_budget,
        total_spent=total_spent,
        current_month_spent=current_month_spent,
        remaining_budget=remaining_budget,
        budget_percentage=percentage_of(total_spent, monthly_budget),
        daily_average_spent=daily_average_spent,
        daily_budget_allowance=daily_budget_allowance,
        projected_month_end=daily_average_spent * window.days_in_month,
        daily_budget_remaining=daily_budget_remaining,
        is_on_track=daily_average_spent <= daily_budget_allowance,
        days_in_month=window.days_in_month,
        days_passed=window.days_passed,
        days_remaining=window.days_remaining,
    )
