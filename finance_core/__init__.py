"""Budget velocity and analytics core for the personal finance tracker."""

from .config import Settings
from .exceptions import PersistenceError, RecordNotFoundError, ValidationError
from .models import Budget, Category, Expense, SavingsGoal, Snapshot
from .services import Dashboard, DashboardService
from .storage import SnapshotStorage

__all__ = [
    "Budget",
    "Category",
    "Dashboard",
    "DashboardService",
    "Expense",
    "PersistenceError",
    "RecordNotFoundError",
    "SavingsGoal",
    "Settings",
    "Snapshot",
    "SnapshotStorage",
    "ValidationError",
]
