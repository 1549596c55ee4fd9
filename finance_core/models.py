"""Record models for the budget analytics domain."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import ValidationError

__all__ = [
    "Budget",
    "Category",
    "DEFAULT_CATEGORIES",
    "Expense",
    "SavingsGoal",
    "Snapshot",
    "coerce_datetime",
    "default_categories",
    "isoformat_utc",
    "parse_date",
    "parse_datetime",
]

DEFAULT_CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("Food", "bg-blue-500"),
    ("Transportation", "bg-green-500"),
    ("Entertainment", "bg-purple-500"),
    ("Education", "bg-yellow-500"),
    ("Shopping", "bg-pink-500"),
    ("Bills", "bg-red-500"),
    ("Other", "bg-gray-500"),
)


def isoformat_utc(dt: datetime) -> str:
    """Return an ISO 8601 string with trailing Z for UTC-aware datetimes."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    iso = dt.isoformat(timespec="seconds")
    # datetime.isoformat renders +00:00 for UTC; replace with the shorter Z form.
    return iso.replace("+00:00", "Z")


def parse_datetime(value: str) -> datetime:
    """Parse ISO 8601 datetime strings with optional trailing Z into UTC-aware datetime."""
    value = value.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        dt = datetime.fromisoformat(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid ISO 8601 datetime: {value!r}") from exc
    if dt.tzinfo is None:
        # Treat naive datetimes as UTC to avoid accidental timezone drift.
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_date(value: object) -> date:
    """Return the calendar date of a deadline; any time component is dropped."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError as exc:
            raise ValidationError(f"Invalid ISO 8601 date: {value!r}") from exc
    raise ValidationError("deadline must be a date or ISO 8601 string")


def coerce_datetime(value: object) -> datetime:
    """Coerce a datetime, date or ISO string into a comparable UTC instant."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        return parse_datetime(value)
    raise ValidationError("date must be a datetime, date or ISO 8601 string")


def _decimal(raw: object, field_name: str) -> Decimal:
    try:
        value = Decimal(str(raw))
    except (InvalidOperation, TypeError) as exc:
        raise ValidationError(f"{field_name} must be a numeric value") from exc
    if not value.is_finite():
        raise ValidationError(f"{field_name} must be a finite number")
    if value < 0:
        raise ValidationError(f"{field_name} must be zero or greater")
    return value


def _optional_datetime(raw: object) -> Optional[datetime]:
    if raw is None or raw == "":
        return None
    return coerce_datetime(raw)


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    color: str
    user_id: str
    budget: Optional[Decimal] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "color": self.color,
            "userId": self.user_id,
        }
        if self.budget is not None:
            payload["budget"] = f"{self.budget:.2f}"
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        budget = data.get("budget")
        return cls(
            id=data["id"],
            name=data["name"],
            color=data.get("color", ""),
            user_id=data.get("userId", ""),
            budget=_decimal(budget, "budget") if budget is not None else None,
        )


@dataclass(frozen=True)
class Expense:
    amount: Decimal
    description: str
    category: str
    date: datetime
    user_id: str
    id: Optional[str] = None
    created_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        # Accept date-like values and ISO strings; aggregation compares UTC instants.
        object.__setattr__(self, "date", coerce_datetime(self.date))

    def to_dict(self) -> Dict[str, Any]:
        """Serialise the expense to the store's document shape."""
        return {
            "id": self.id,
            "amount": f"{self.amount:.2f}",
            "description": self.description,
            "category": self.category,
            "date": isoformat_utc(self.date),
            "userId": self.user_id,
            "createdAt": isoformat_utc(self.created_at) if self.created_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Expense":
        """Hydrate an Expense from a store document."""
        return cls(
            id=data.get("id"),
            amount=_decimal(data["amount"], "amount"),
            description=data.get("description", ""),
            category=data.get("category", ""),
            date=coerce_datetime(data["date"]),
            user_id=data.get("userId", ""),
            created_at=_optional_datetime(data.get("createdAt")),
        )


@dataclass(frozen=True)
class Budget:
    user_id: str
    monthly_budget: Optional[Decimal] = None
    categories: Dict[str, Decimal] = field(default_factory=dict)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def effective_monthly_budget(self, fallback: Decimal) -> Decimal:
        """Return the monthly ceiling, or ``fallback`` when none was ever set."""
        if self.monthly_budget is None:
            return fallback
        return self.monthly_budget

    def ceiling_for(self, category_id: str) -> Optional[Decimal]:
        """Return the category ceiling, or None when absent or zero."""
        ceiling = self.categories.get(category_id)
        if ceiling is None or ceiling <= 0:
            return None
        return ceiling

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "monthlyBudget": (
                f"{self.monthly_budget:.2f}" if self.monthly_budget is not None else None
            ),
            "categories": {key: f"{value:.2f}" for key, value in self.categories.items()},
            "createdAt": isoformat_utc(self.created_at) if self.created_at else None,
            "updatedAt": isoformat_utc(self.updated_at) if self.updated_at else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Budget":
        monthly = data.get("monthlyBudget")
        return cls(
            id=data.get("id"),
            user_id=data.get("userId", ""),
            monthly_budget=_decimal(monthly, "monthlyBudget") if monthly is not None else None,
            categories={
                str(key): _decimal(value, f"categories.{key}")
                for key, value in (data.get("categories") or {}).items()
            },
            created_at=_optional_datetime(data.get("createdAt")),
            updated_at=_optional_datetime(data.get("updatedAt")),
        )


@dataclass(frozen=True)
class SavingsGoal:
    goal_name: str
    target_amount: Decimal
    user_id: str
    current_amount: Decimal = Decimal("0")
    deadline: Optional[date] = None
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "userId": self.user_id,
            "goalName": self.goal_name,
            "targetAmount": f"{self.target_amount:.2f}",
            "currentAmount": f"{self.current_amount:.2f}",
            "createdAt": isoformat_utc(self.created_at) if self.created_at else None,
            "updatedAt": isoformat_utc(self.updated_at) if self.updated_at else None,
        }
        # The store omits the deadline key entirely rather than storing an empty value.
        if self.deadline is not None:
            payload["deadline"] = self.deadline.isoformat()
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SavingsGoal":
        deadline = data.get("deadline")
        return cls(
            id=data.get("id"),
            user_id=data.get("userId", ""),
            goal_name=data.get("goalName", ""),
            target_amount=_decimal(data.get("targetAmount", 0), "targetAmount"),
            current_amount=_decimal(data.get("currentAmount", 0), "currentAmount"),
            deadline=parse_date(deadline) if deadline not in (None, "") else None,
            created_at=_optional_datetime(data.get("createdAt")),
            updated_at=_optional_datetime(data.get("updatedAt")),
        )


@dataclass(frozen=True)
class Snapshot:
    """Point-in-time set of loaded records for one owner."""

    expenses: Tuple[Expense, ...] = ()
    categories: Tuple[Category, ...] = ()
    budget: Optional[Budget] = None
    savings_goals: Tuple[SavingsGoal, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Snapshot":
        budget = data.get("budget")
        return cls(
            expenses=tuple(Expense.from_dict(item) for item in data.get("expenses") or []),
            categories=tuple(Category.from_dict(item) for item in data.get("categories") or []),
            budget=Budget.from_dict(budget) if budget else None,
            savings_goals=tuple(
                SavingsGoal.from_dict(item) for item in data.get("savingsGoals") or []
            ),
        )


def default_categories(user_id: str) -> List[Category]:
    """Return the starter categories for a new owner; the caller persists them."""
    return [
        Category(id=name.lower(), name=name, color=color, user_id=user_id)
        for name, color in DEFAULT_CATEGORIES
    ]
