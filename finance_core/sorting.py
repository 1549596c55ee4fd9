"""Ordering of expense records for the transactions table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, List

from .models import Expense, coerce_datetime
from .validators import SORT_DIRECTIONS, SORT_KEYS, validate_enum

__all__ = ["SortConfig", "recent_expenses", "sort_expenses"]

_KEY_FUNCS = {
    "date": lambda expense: coerce_datetime(expense.date),
    "amount": lambda expense: expense.amount,
}


@dataclass(frozen=True)
class SortConfig:
    key: str = "date"
    direction: str = "desc"

    def request_sort(self, key: str) -> "SortConfig":
        """Flip direction when re-selecting the descending key; otherwise start descending."""
        key = validate_enum(key, "sort key", SORT_KEYS)
        if self.key == key and self.direction == "desc":
            return SortConfig(key=key, direction="asc")
        return SortConfig(key=key, direction="desc")


def sort_expenses(
    expenses: Iterable[Expense], key: str = "date", direction: str = "desc"
) -> List[Expense]:
    """Return a new, stably sorted list; equal keys keep their input order."""
    key = validate_enum(key, "sort key", SORT_KEYS)
    direction = validate_enum(direction, "sort direction", SORT_DIRECTIONS)
    key_func: Callable[[Expense], object] = _KEY_FUNCS[key]
    # sorted() with reverse=True is still stable for equal keys.
    return sorted(expenses, key=key_func, reverse=direction == "desc")


def recent_expenses(expenses: Iterable[Expense], limit: int = 5) -> List[Expense]:
    return sort_expenses(expenses, "date", "desc")[:limit]
