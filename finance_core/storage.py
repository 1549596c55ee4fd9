"""Read-only access to JSON exports of the document store."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .exceptions import PersistenceError, ValidationError
from .models import Budget, Category, Expense, SavingsGoal, Snapshot

logger = logging.getLogger(__name__)

EXPENSES_RESOURCE = "expenses.json"
CATEGORIES_RESOURCE = "categories.json"
BUDGETS_RESOURCE = "budgets.json"
SAVINGS_GOALS_RESOURCE = "savingsGoals.json"


class SnapshotStorage:
    """Loads one owner's four record collections from a directory of JSON lists."""

    def __init__(self, base_path: Path) -> None:
        self._base_path = Path(base_path)

    def load(self, resource: str) -> List[Dict[str, Any]]:
        path = self._base_path / resource
        if not path.exists():
            logger.debug("No %s export in %s; treating as empty", resource, self._base_path)
            return []
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"Corrupted JSON data in {path}") from exc
        except OSError as exc:
            raise PersistenceError(f"Unable to read from {path}") from exc

        if not isinstance(payload, list):
            raise PersistenceError(f"Expected list payload in {path}")
        return payload

    def snapshot(self, user_id: str) -> Snapshot:
        """Return the records owned by ``user_id`` as a single consistent snapshot."""
        try:
            expenses = tuple(
                Expense.from_dict(doc) for doc in self._owned(EXPENSES_RESOURCE, user_id)
            )
            categories = tuple(
                Category.from_dict(doc) for doc in self._owned(CATEGORIES_RESOURCE, user_id)
            )
            goals = tuple(
                SavingsGoal.from_dict(doc)
                for doc in self._owned(SAVINGS_GOALS_RESOURCE, user_id)
            )
            budget = self._budget(user_id)
        except (KeyError, ValidationError) as exc:
            raise PersistenceError(f"Malformed record for user {user_id}: {exc}") from exc

        logger.info(
            "Loaded snapshot for %s: %d expenses, %d categories, %d goals",
            user_id,
            len(expenses),
            len(categories),
            len(goals),
        )
        return Snapshot(
            expenses=expenses, categories=categories, budget=budget, savings_goals=goals
        )

    def _owned(self, resource: str, user_id: str) -> List[Dict[str, Any]]:
        return [doc for doc in self.load(resource) if doc.get("userId") == user_id]

    def _budget(self, user_id: str) -> Optional[Budget]:
        # Budget documents are keyed by owner, so at most one applies.
        for doc in self._owned(BUDGETS_RESOURCE, user_id):
            return Budget.from_dict(doc)
        return None

    @property
    def base_path(self) -> Path:
        return self._base_path
