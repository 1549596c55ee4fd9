"""Validation helpers for the write boundary and for caller-supplied options."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable

from .exceptions import ValidationError
from .models import parse_datetime

SORT_KEYS = {"date", "amount"}
SORT_DIRECTIONS = {"asc", "desc"}

MAX_TREND_MONTHS = 120


def _quantize_two_decimals(amount: Decimal) -> Decimal:
    """Round the amount to two decimal places using HALF_UP rounding."""
    return amount.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def parse_amount(raw: object, field: str, *, allow_zero: bool = False) -> Decimal:
    """Convert raw input to a finite, positive Decimal with two fraction digits."""
    try:
        amount = Decimal(str(raw))
    except (InvalidOperation, TypeError) as exc:  # type: ignore[arg-type]
        raise ValidationError(f"{field} must be a numeric value") from exc

    if not amount.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if amount < 0 or (amount == 0 and not allow_zero):
        qualifier = "zero or greater" if allow_zero else "greater than zero"
        raise ValidationError(f"{field} must be {qualifier}")

    return _quantize_two_decimals(amount)


def validate_required_str(value: object, field: str, max_length: int) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    if len(trimmed) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return trimmed


def validate_datetime(value: object, field: str) -> datetime:
    if isinstance(value, datetime):
        dt = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    elif isinstance(value, str):
        dt = parse_datetime(value)
    else:
        raise ValidationError(f"{field} must be a datetime or ISO 8601 string")
    return dt.astimezone(timezone.utc)


def validate_enum(value: object, field: str, allowed: Iterable[str]) -> str:
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    canonical = value.strip().lower()
    if canonical not in allowed:
        raise ValidationError(f"{field} must be one of: {', '.join(sorted(allowed))}")
    return canonical


def validate_month_count(value: object) -> int:
    try:
        months = int(str(value))
    except ValueError as exc:
        raise ValidationError("months must be an integer") from exc
    if not 1 <= months <= MAX_TREND_MONTHS:
        raise ValidationError(f"months must be between 1 and {MAX_TREND_MONTHS}")
    return months


def is_valid_savings_goal(name: object, target_amount: object) -> bool:
    """Return True when a goal may be persisted: a non-empty name and a positive target."""
    if not isinstance(name, str) or not name.strip():
        return False
    try:
        target = Decimal(str(target_amount))
    except (InvalidOperation, TypeError):
        return False
    return target.is_finite() and target > 0


def validate_savings_goal_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Normalise a savings goal payload before it is handed to persistence."""
    current = payload.get("currentAmount")
    return {
        "goalName": validate_required_str(payload.get("goalName"), "goalName", 100),
        "targetAmount": parse_amount(payload.get("targetAmount"), "targetAmount"),
        "currentAmount": (
            parse_amount(current, "currentAmount", allow_zero=True)
            if current not in (None, "")
            else Decimal("0.00")
        ),
    }
