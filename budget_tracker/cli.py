"""Console interface for the budget analytics engine."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from finance_core.config import Settings
from finance_core.exceptions import PersistenceError, RecordNotFoundError, ValidationError
from finance_core.models import Category, Expense, Snapshot
from finance_core.services import Dashboard, DashboardService
from finance_core.sorting import SortConfig
from finance_core.storage import SnapshotStorage
from finance_core.validators import is_valid_savings_goal, validate_datetime, validate_month_count


def _parse_now(value: str) -> datetime:
    try:
        return validate_datetime(value, "now")
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(
            f"Invalid datetime '{value}'. Expected ISO 8601, e.g. 2024-05-10T12:00:00Z."
        ) from exc


def _parse_months(value: str) -> int:
    try:
        return validate_month_count(value)
    except ValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _category_name(categories: List[Category], category_id: str) -> str:
    for category in categories:
        if category.id == category_id:
            return category.name
    return "Uncategorized"


def _format_expense(expense: Expense, categories: List[Category]) -> str:
    return (
        f"{expense.date:%Y-%m-%d}  {expense.amount:>10.2f}  "
        f"{_category_name(categories, expense.category):<15} {expense.description}"
    )


def print_summary(dashboard: Dashboard) -> None:
    pacing = dashboard.pacing
    status = "On Track!" if pacing.is_on_track else "Over Budget!"
    print(f"Monthly budget:       {pacing.monthly_budget:.2f}")
    print(f"Total spent:          {pacing.total_spent:.2f} ({pacing.budget_percentage:.0f}%, {pacing.budget_band.value})")
    print(f"Remaining budget:     {pacing.remaining_budget:.2f}")
    print(f"Spent this month:     {pacing.current_month_spent:.2f}")
    print(f"Daily average:        {pacing.daily_average_spent:.2f}")
    print(f"Daily allowance:      {pacing.daily_budget_allowance:.2f}")
    print(f"Projected month end:  {pacing.projected_month_end:.2f}")
    print(f"Daily remaining:      {pacing.daily_budget_remaining:.2f}")
    print(f"Days left in month:   {pacing.days_remaining} of {pacing.days_in_month}")
    print(status)
    if not pacing.is_on_track:
        print(f"Projected overspend:  {pacing.projected_overspend:.2f}")


def print_trend(dashboard: Dashboard) -> None:
    for entry in dashboard.monthly_trend:
        print(f"{entry.month} {entry.year}  {entry.amount:>10.2f}")


def print_categories(dashboard: Dashboard) -> None:
    if dashboard.category_breakdown:
        print("Spending by category:")
        for item in dashboard.category_breakdown:
            print(f"  {item.name:<15} {item.total:>10.2f}  {item.percentage:5.1f}%")
    else:
        print("No categorized spending.")
    if dashboard.uncategorized_total > 0:
        print(f"  {'Uncategorized':<15} {dashboard.uncategorized_total:>10.2f}")

    if dashboard.category_budgets:
        print("Category budgets this month:")
        for status in dashboard.category_budgets:
            print(
                f"  {status.name:<15} {status.spent:>10.2f} / {status.ceiling:.2f}"
                f"  {status.percentage:5.0f}%  [{status.band.value}]"
            )


def print_goals(dashboard: Dashboard) -> None:
    if not dashboard.savings_goals:
        print("No savings goals found.")
        return
    for progress in dashboard.savings_goals:
        goal = progress.goal
        flag = "" if is_valid_savings_goal(goal.goal_name, goal.target_amount) else " (invalid)"
        outcome = (
            "Goal Achieved!" if progress.is_completed else f"{progress.remaining:.2f} to go"
        )
        print(
            f"{goal.goal_name}{flag}: {goal.current_amount:.2f} / {goal.target_amount:.2f}"
            f" ({progress.percent_complete:.0f}%) - {outcome} - {progress.deadline_label()}"
        )
    summary = dashboard.savings_summary
    print(
        f"Total goals: {summary.goal_count} | Saved: {summary.total_saved:.2f}"
        f" | Target: {summary.total_target:.2f}"
    )


def print_expenses(dashboard: Dashboard, snapshot: Snapshot) -> None:
    if not dashboard.expenses:
        print("No expenses found.")
        return
    categories = list(snapshot.categories)
    print(f"Found {len(dashboard.expenses)} expenses (by {dashboard.sort.key}, {dashboard.sort.direction}):")
    for expense in dashboard.expenses:
        print(_format_expense(expense, categories))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Budget tracker analytics")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory holding the JSON snapshot export (default: $BUDGET_TRACKER_DATA_DIR or ./data)",
    )
    parser.add_argument(
        "--now",
        type=_parse_now,
        help="Reference instant for month windows (default: current time)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    summary = subparsers.add_parser("summary", help="Show budget pacing")
    summary.add_argument("user_id")

    trend = subparsers.add_parser("trend", help="Show monthly spending totals")
    trend.add_argument("user_id")
    trend.add_argument("--months", type=_parse_months)

    categories = subparsers.add_parser("categories", help="Show category breakdown and budgets")
    categories.add_argument("user_id")

    goals = subparsers.add_parser("goals", help="Show savings goal progress")
    goals.add_argument("user_id")

    expenses = subparsers.add_parser("expenses", help="List expenses")
    expenses.add_argument("user_id")
    expenses.add_argument("--sort", choices=["date", "amount"], default="date")
    expenses.add_argument("--direction", choices=["asc", "desc"], default="desc")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValidationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.INFO))

    storage = SnapshotStorage(args.data_dir or settings.data_dir)
    service = DashboardService(
        default_monthly_budget=settings.default_monthly_budget,
        trend_months=settings.trend_months,
    )

    try:
        snapshot = storage.snapshot(args.user_id)
        sort = SortConfig(
            key=getattr(args, "sort", "date"), direction=getattr(args, "direction", "desc")
        )
        dashboard = service.build(
            snapshot, args.now, sort=sort, trend_months=getattr(args, "months", None)
        )

        if args.command == "summary":
            print_summary(dashboard)
        elif args.command == "trend":
            print_trend(dashboard)
        elif args.command == "categories":
            print_categories(dashboard)
        elif args.command == "goals":
            print_goals(dashboard)
        elif args.command == "expenses":
            print_expenses(dashboard, snapshot)
        else:  # pragma: no cover - argparse should prevent this
            parser.error(f"Unknown command: {args.command}")
            return 2
    except ValidationError as exc:
        print(f"Validation error: {exc}", file=sys.stderr)
        return 1
    except RecordNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except PersistenceError as exc:
        print(f"Storage error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
