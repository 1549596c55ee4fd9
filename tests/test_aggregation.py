from datetime import date
from decimal import Decimal

from conftest import make_expense, utc
from finance_core.aggregation import (
    category_breakdown,
    current_month_spent,
    monthly_trend,
    total_spent,
    uncategorized_total,
)


def test_total_spent_is_order_independent(snapshot):
    forwards = total_spent(snapshot.expenses)
    backwards = total_spent(reversed(snapshot.expenses))
    assert forwards == backwards == Decimal("600")


def test_total_spent_of_nothing_is_zero():
    assert total_spent([]) == Decimal("0")


def test_category_breakdown_keeps_category_order_and_skips_empty(snapshot, categories):
    breakdown = category_breakdown(snapshot.expenses, categories)

    assert [item.name for item in breakdown] == ["Food", "Bills"]
    assert [item.total for item in breakdown] == [Decimal("350"), Decimal("180")]
    assert breakdown[0].color == "bg-blue-500"
    assert all(item.total != 0 for item in breakdown)


def test_category_breakdown_totals_match_known_category_spend(snapshot, categories):
    breakdown = category_breakdown(snapshot.expenses, categories)
    known = sum((item.total for item in breakdown), Decimal("0"))

    assert known + uncategorized_total(snapshot.expenses, categories) == total_spent(
        snapshot.expenses
    )
    assert uncategorized_total(snapshot.expenses, categories) == Decimal("70")


def test_category_breakdown_percentages_are_share_of_all_spend(snapshot, categories):
    food = category_breakdown(snapshot.expenses, categories)[0]
    assert round(food.percentage, 4) == Decimal("58.3333")


def test_monthly_trend_always_has_requested_length(now):
    trend = monthly_trend([], now, 6)
    assert len(trend) == 6
    assert [entry.month for entry in trend] == ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]
    assert all(entry.amount == 0 for entry in trend)


def test_monthly_trend_buckets_by_calendar_month(snapshot, now):
    trend = monthly_trend(snapshot.expenses, now)
    amounts = {entry.month: entry.amount for entry in trend}

    assert amounts["Apr"] == Decimal("200")
    assert amounts["Jun"] == Decimal("400")
    assert amounts["May"] == Decimal("0")


def test_monthly_trend_spanning_new_year_is_oldest_first():
    expenses = [
        make_expense("10", utc(2023, 11, 30, 23, 59, 59)),
        make_expense("5", utc(2024, 2, 1)),
    ]
    trend = monthly_trend(expenses, utc(2024, 2, 15), 4)

    assert [(entry.month, entry.year) for entry in trend] == [
        ("Nov", 2023),
        ("Dec", 2023),
        ("Jan", 2024),
        ("Feb", 2024),
    ]
    assert trend[0].amount == Decimal("10")
    assert trend[-1].amount == Decimal("5")
    assert len({entry.month for entry in trend}) == 4


def test_current_month_spent_stops_at_reference_instant(now):
    expenses = [
        make_expense("40", utc(2024, 6, 1)),
        make_expense("60", utc(2024, 6, 10, 11, 0)),
        make_expense("999", utc(2024, 6, 20)),
        make_expense("500", utc(2024, 5, 31, 23, 0)),
    ]
    assert current_month_spent(expenses, now) == Decimal("100")


def test_string_and_date_valued_expense_dates_are_bucketed(now):
    expenses = [
        make_expense("10", "2024-06-03T08:00:00Z"),
        make_expense("15", date(2024, 6, 4)),
        make_expense("20", "2024-05-20"),
    ]
    trend = monthly_trend(expenses, now, 2)

    assert [(entry.month, entry.amount) for entry in trend] == [
        ("May", Decimal("20")),
        ("Jun", Decimal("25")),
    ]
    assert current_month_spent(expenses, now) == Decimal("25")
