"""Savings goal progress and deadline tracking.

The evaluator is permissive: goals with an empty name or a non-positive target
are still evaluated (a zero target reports 0% progress). Rejecting such goals is
the job of :func:`finance_core.validators.is_valid_savings_goal` at the write
boundary.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Iterable, Optional

from .aggregation import HUNDRED, ZERO, percentage_of
from .dates import as_utc
from .models import SavingsGoal

__all__ = [
    "DeadlineStatus",
    "GoalProgress",
    "SavingsSummary",
    "days_until",
    "evaluate_savings_goal",
    "summarize_savings",
]

DUE_SOON_DAYS = 30
SECONDS_PER_DAY = 24 * 60 * 60


class DeadlineStatus(str, Enum):
    NO_DEADLINE = "no_deadline"
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    ON_SCHEDULE = "on_schedule"


@dataclass(frozen=True)
class GoalProgress:
    goal: SavingsGoal
    progress: Decimal
    remaining: Decimal
    days_left: Optional[int]

    @property
    def percent_complete(self) -> Decimal:
        return min(self.progress, HUNDRED)

    @property
    def is_completed(self) -> bool:
        return self.progress >= HUNDRED

    @property
    def deadline_status(self) -> DeadlineStatus:
        if self.days_left is None:
            return DeadlineStatus.NO_DEADLINE
        if self.days_left < 0:
            return DeadlineStatus.OVERDUE
        if self.days_left == 0:
            return DeadlineStatus.DUE_TODAY
        if self.days_left < DUE_SOON_DAYS:
            return DeadlineStatus.DUE_SOON
        return DeadlineStatus.ON_SCHEDULE

    def deadline_label(self) -> str:
        status = self.deadline_status
        if status is DeadlineStatus.NO_DEADLINE:
            return "No deadline"
        if status is DeadlineStatus.OVERDUE:
            return f"Overdue by {abs(self.days_left)} days"
        if status is DeadlineStatus.DUE_TODAY:
            return "Due today"
        return f"{self.days_left} days left"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.goal.id,
            "goalName": self.goal.goal_name,
            "targetAmount": f"{self.goal.target_amount:.2f}",
            "currentAmount": f"{self.goal.current_amount:.2f}",
            "deadline": self.goal.deadline.isoformat() if self.goal.deadline else None,
            "progress": f"{self.progress:.2f}",
            "percentComplete": f"{self.percent_complete:.2f}",
            "isCompleted": self.is_completed,
            "remaining": f"{self.remaining:.2f}",
            "daysLeft": self.days_left,
            "deadlineStatus": self.deadline_status.value,
            "deadlineLabel": self.deadline_label(),
        }


@dataclass(frozen=True)
class SavingsSummary:
    goal_count: int
    completed_count: int
    total_saved: Decimal
    total_target: Decimal

    @property
    def overall_progress(self) -> Decimal:
        return percentage_of(self.total_saved, self.total_target)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "goalCount": self.goal_count,
            "completedCount": self.completed_count,
            "totalSaved": f"{self.total_saved:.2f}",
            "totalTarget": f"{self.total_target:.2f}",
            "overallProgress": f"{self.overall_progress:.2f}",
        }


def days_until(deadline: date, now: datetime) -> int:
    """Whole days from ``now`` to midnight UTC of ``deadline``, rounded up."""
    due = datetime(deadline.year, deadline.month, deadline.day, tzinfo=timezone.utc)
    return math.ceil((due - as_utc(now)).total_seconds() / SECONDS_PER_DAY)


def evaluate_savings_goal(goal: SavingsGoal, now: datetime) -> GoalProgress:
    # percentage_of yields 0 for a non-positive target instead of dividing by zero.
    return GoalProgress(
        goal=goal,
        progress=percentage_of(goal.current_amount, goal.target_amount),
        remaining=goal.target_amount - goal.current_amount,
        days_left=days_until(goal.deadline, now) if goal.deadline is not None else None,
    )


def summarize_savings(goals: Iterable[SavingsGoal]) -> SavingsSummary:
    goals = list(goals)
    completed = sum(
        1
        for goal in goals
        if goal.target_amount > 0 and goal.current_amount >= goal.target_amount
    )
    return SavingsSummary(
        goal_count=len(goals),
        completed_count=completed,
        total_saved=sum((goal.current_amount for goal in goals), start=ZERO),
        total_target=sum((goal.target_amount for goal in goals), start=ZERO),
    )
