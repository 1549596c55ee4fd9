"""Per-category ceiling utilisation for the current month."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Sequence

from .aggregation import category_spent, percentage_of
from .dates import month_window
from .models import Budget, Category, Expense

__all__ = [
    "Band",
    "CategoryBudgetStatus",
    "classify_utilisation",
    "evaluate_category_budgets",
]

WARNING_THRESHOLD = Decimal("80")
OVER_THRESHOLD = Decimal("100")


class Band(str, Enum):
    OK = "ok"
    WARNING = "warning"
    OVER = "over"


def classify_utilisation(percentage: Decimal) -> Band:
    if percentage > OVER_THRESHOLD:
        return Band.OVER
    if percentage > WARNING_THRESHOLD:
        return Band.WARNING
    return Band.OK


@dataclass(frozen=True)
class CategoryBudgetStatus:
    category_id: str
    name: str
    color: str
    spent: Decimal
    ceiling: Decimal
    percentage: Decimal
    band: Band

    @property
    def remaining(self) -> Decimal:
        return self.ceiling - self.spent

    def to_dict(self):
        return {
            "categoryId": self.category_id,
            "name": self.name,
            "color": self.color,
            "spent": f"{self.spent:.2f}",
            "ceiling": f"{self.ceiling:.2f}",
            "remaining": f"{self.remaining:.2f}",
            "percentage": f"{self.percentage:.2f}",
            "band": self.band.value,
        }


def evaluate_category_budgets(
    expenses: Sequence[Expense],
    categories: Sequence[Category],
    budget: Optional[Budget],
    now: datetime,
) -> List[CategoryBudgetStatus]:
    """Evaluate every category that has a positive ceiling, in category order.

    Spend is taken over the whole calendar month containing ``now``. Ceilings
    keyed by identifiers that match no category are ignored.
    """
    if budget is None:
        return []

    window = month_window(now)
    statuses: List[CategoryBudgetStatus] = []
    for category in categories:
        ceiling = budget.ceiling_for(category.id)
        if ceiling is None:
            continue
        spent = category_spent(expenses, category.id, window.start, window.end)
        percentage = percentage_of(spent, ceiling)
        statuses.append(
            CategoryBudgetStatus(
                category_id=category.id,
                name=category.name,
                color=category.color,
                spent=spent,
                ceiling=ceiling,
                percentage=percentage,
                band=classify_utilisation(percentage),
            )
        )
    return statuses
