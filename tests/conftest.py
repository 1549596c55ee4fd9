from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from finance_core.models import Budget, Category, Expense, SavingsGoal, Snapshot

USER = "user-1"


def make_expense(amount, when, category="food", description="Lunch", expense_id=None):
    return Expense(
        id=expense_id,
        amount=Decimal(str(amount)),
        description=description,
        category=category,
        date=when,
        user_id=USER,
    )


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    # Day 10 of a 30-day month.
    return utc(2024, 6, 10, 12, 0, 0)


@pytest.fixture
def categories():
    return [
        Category(id="food", name="Food", color="bg-blue-500", user_id=USER),
        Category(id="bills", name="Bills", color="bg-red-500", user_id=USER),
        Category(id="fun", name="Entertainment", color="bg-purple-500", user_id=USER),
    ]


@pytest.fixture
def snapshot(categories):
    expenses = (
        make_expense("150", utc(2024, 6, 2), "food", "Groceries", "e1"),
        make_expense("180", utc(2024, 6, 5), "bills", "Electricity", "e2"),
        make_expense("70", utc(2024, 6, 9), "ghost", "Deleted category", "e3"),
        make_expense("200", utc(2024, 4, 20), "food", "Dinner party", "e4"),
    )
    budget = Budget(
        user_id=USER,
        monthly_budget=Decimal("1000"),
        categories={"food": Decimal("500"), "bills": Decimal("200"), "fun": Decimal("0")},
    )
    goals = (
        SavingsGoal(
            id="g1",
            user_id=USER,
            goal_name="Laptop",
            target_amount=Decimal("100"),
            current_amount=Decimal("50"),
        ),
    )
    return Snapshot(
        expenses=expenses,
        categories=tuple(categories),
        budget=budget,
        savings_goals=goals,
    )
