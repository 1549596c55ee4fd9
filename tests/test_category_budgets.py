from datetime import date
from decimal import Decimal

import pytest

from conftest import USER, make_expense, utc
from finance_core.category_budgets import Band, classify_utilisation, evaluate_category_budgets
from finance_core.models import Budget


@pytest.mark.parametrize(
    "percentage, band",
    [
        ("0", Band.OK),
        ("80", Band.OK),
        ("80.01", Band.WARNING),
        ("100", Band.WARNING),
        ("100.5", Band.OVER),
    ],
)
def test_classify_utilisation_bands(percentage, band):
    assert classify_utilisation(Decimal(percentage)) is band


def test_category_at_ninety_percent_is_warning(categories, now):
    budget = Budget(user_id=USER, categories={"bills": Decimal("200")})
    expenses = [make_expense("180", utc(2024, 6, 3), "bills")]

    [status] = evaluate_category_budgets(expenses, categories, budget, now)

    assert status.name == "Bills"
    assert status.percentage == Decimal("90")
    assert status.band is Band.WARNING
    assert status.remaining == Decimal("20")


def test_only_positive_ceilings_are_evaluated(snapshot, now):
    statuses = evaluate_category_budgets(
        snapshot.expenses, snapshot.categories, snapshot.budget, now
    )
    assert [status.category_id for status in statuses] == ["food", "bills"]


def test_spend_outside_current_month_is_ignored(categories, now):
    budget = Budget(user_id=USER, categories={"food": Decimal("100")})
    expenses = [
        make_expense("90", utc(2024, 5, 31), "food"),
        make_expense("30", utc(2024, 6, 28), "food"),
    ]
    [status] = evaluate_category_budgets(expenses, categories, budget, now)
    assert status.spent == Decimal("30")
    assert status.band is Band.OK


def test_overspent_category_is_over(categories, now):
    budget = Budget(user_id=USER, categories={"food": Decimal("50")})
    expenses = [make_expense("75", utc(2024, 6, 1), "food")]
    [status] = evaluate_category_budgets(expenses, categories, budget, now)
    assert status.band is Band.OVER
    assert status.to_dict()["band"] == "over"


def test_no_budget_means_no_statuses(categories, now):
    assert evaluate_category_budgets([], categories, None, now) == []


def test_ceiling_for_unknown_category_is_ignored(categories, now):
    budget = Budget(user_id=USER, categories={"deleted": Decimal("100")})
    assert evaluate_category_budgets([], categories, budget, now) == []


def test_string_and_date_valued_expense_dates_are_evaluated(categories, now):
    budget = Budget(user_id=USER, categories={"food": Decimal("100")})
    expenses = [
        make_expense("30", "2024-06-03T08:00:00Z", "food"),
        make_expense("55", date(2024, 6, 5), "food"),
        make_expense("40", "2024-05-31", "food"),
    ]
    [status] = evaluate_category_budgets(expenses, categories, budget, now)
    assert status.spent == Decimal("85")
    assert status.band is Band.WARNING
