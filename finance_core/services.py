"""Framework-agnostic facade that turns a snapshot into dashboard values."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from .aggregation import (
    CategoryTotal,
    MonthlyTotal,
    category_breakdown,
    current_month_spent,
    monthly_trend,
    total_spent,
    uncategorized_total,
)
from .category_budgets import CategoryBudgetStatus, evaluate_category_budgets
from .dates import as_utc, month_window
from .models import Expense, Snapshot, isoformat_utc
from .pacing import DEFAULT_MONTHLY_BUDGET, BudgetPacing, calculate_pacing
from .savings import GoalProgress, SavingsSummary, evaluate_savings_goal, summarize_savings
from .sorting import SortConfig, recent_expenses, sort_expenses

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Dashboard:
    now: datetime
    pacing: BudgetPacing
    category_breakdown: List[CategoryTotal]
    uncategorized_total: Decimal
    category_budgets: List[CategoryBudgetStatus]
    monthly_trend: List[MonthlyTotal]
    savings_goals: List[GoalProgress]
    savings_summary: SavingsSummary
    sort: SortConfig
    expenses: List[Expense]
    recent_expenses: List[Expense]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "now": isoformat_utc(self.now),
            "pacing": self.pacing.to_dict(),
            "categoryBreakdown": [item.to_dict() for item in self.category_breakdown],
            "uncategorizedTotal": f"{self.uncategorized_total:.2f}",
            "categoryBudgets": [item.to_dict() for item in self.category_budgets],
            "monthlyTrend": [item.to_dict() for item in self.monthly_trend],
            "savingsGoals": [item.to_dict() for item in self.savings_goals],
            "savingsSummary": self.savings_summary.to_dict(),
            "sort": {"key": self.sort.key, "direction": self.sort.direction},
            "expenses": [expense.to_dict() for expense in self.expenses],
            "recentExpenses": [expense.to_dict() for expense in self.recent_expenses],
        }


class DashboardService:
    """Runs every calculator over one snapshot; holds no state between calls."""

    def __init__(
        self,
        *,
        now_provider: Callable[[], datetime] = _utc_now,
        default_monthly_budget: Decimal = DEFAULT_MONTHLY_BUDGET,
        trend_months: int = 6,
    ) -> None:
        self._now_provider = now_provider
        self._default_monthly_budget = default_monthly_budget
        self._trend_months = trend_months

    def now(self) -> datetime:
        return as_utc(self._now_provider())

    def pacing(self, snapshot: Snapshot, now: Optional[datetime] = None) -> BudgetPacing:
        now = as_utc(now) if now is not None else self.now()
        monthly_budget = (
            snapshot.budget.effective_monthly_budget(self._default_monthly_budget)
            if snapshot.budget is not None
            else self._default_monthly_budget
        )
        return calculate_pacing(
            total_spent=total_spent(snapshot.expenses),
            current_month_spent=current_month_spent(snapshot.expenses, now),
            monthly_budget=monthly_budget,
            window=month_window(now),
        )

    def build(
        self,
        snapshot: Snapshot,
        now: Optional[datetime] = None,
        *,
        sort: Optional[SortConfig] = None,
        trend_months: Optional[int] = None,
    ) -> Dashboard:
        now = as_utc(now) if now is not None else self.now()
        sort = sort or SortConfig()
        months = trend_months if trend_months is not None else self._trend_months

        dashboard = Dashboard(
            now=now,
            pacing=self.pacing(snapshot, now),
            category_breakdown=category_breakdown(snapshot.expenses, snapshot.categories),
            uncategorized_total=uncategorized_total(snapshot.expenses, snapshot.categories),
            category_budgets=evaluate_category_budgets(
                snapshot.expenses, snapshot.categories, snapshot.budget, now
            ),
            monthly_trend=monthly_trend(snapshot.expenses, now, months),
            savings_goals=[evaluate_savings_goal(goal, now) for goal in snapshot.savings_goals],
            savings_summary=summarize_savings(snapshot.savings_goals),
            sort=sort,
            expenses=sort_expenses(snapshot.expenses, sort.key, sort.direction),
            recent_expenses=recent_expenses(snapshot.expenses),
        )
        logger.debug(
            "Built dashboard at %s: on_track=%s, %d category budgets",
            isoformat_utc(now),
            dashboard.pacing.is_on_track,
            len(dashboard.category_budgets),
        )
        return dashboard
