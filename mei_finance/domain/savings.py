"""Savings totals and goal progress"""

from datetime import date
from decimal import Decimal
from typing import Iterable

from mei_finance.domain.models import GoalProgress, GoalStatus, TotalSavings

ZERO = Decimal("0")


def total_savings(monthly_savings: Iterable) -> TotalSavings:
    amounts = [Decimal(s.amount) for s in monthly_savings]
    total = sum(amounts, ZERO)
    return TotalSavings(
        total_accumulated=total,
        months_count=len(amounts),
        monthly_average=(total / max(len(amounts), 1)).quantize(Decimal("0.01")),
    )


def goal_progress(target_amount: Decimal, deadline: date, accumulated: Decimal, today: date) -> GoalProgress:
    """
    Measure a goal against the accumulated savings.

    Percentage is capped at 100. Status precedence: completed, overdue,
    almost (75% or more), in progress.
    """
    target_amount = Decimal(target_amount)
    percentage = min(Decimal(accumulated) / target_amount * 100, Decimal("100")).quantize(Decimal("0.01"))

    if percentage >= 100:
        status = GoalStatus.COMPLETED
    elif deadline < today:
        status = GoalStatus.OVERDUE
    elif percentage >= 75:
        status = GoalStatus.ALMOST
    else:
        status = GoalStatus.IN_PROGRESS

    return GoalProgress(current_amount=Decimal(accumulated), percentage=percentage, status=status)
