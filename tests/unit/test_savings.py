"""Unit tests for savings totals and goal progress"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from mei_finance.domain.models import GoalStatus
from mei_finance.domain.savings import goal_progress, total_savings

TODAY = date(2024, 3, 10)


def test_total_savings():
    savings = [SimpleNamespace(amount=Decimal(a)) for a in ("500.00", "250.00", "300.00")]

    total = total_savings(savings)

    assert total.total_accumulated == Decimal("1050.00")
    assert total.months_count == 3
    assert total.monthly_average == Decimal("350.00")


def test_total_savings_empty():
    total = total_savings([])

    assert total.total_accumulated == Decimal("0")
    assert total.months_count == 0
    assert total.monthly_average == Decimal("0.00")


def test_goal_completed_caps_at_100():
    progress = goal_progress(Decimal("1000"), date(2024, 1, 1), Decimal("1500"), TODAY)

    assert progress.percentage == Decimal("100.00")
    assert progress.status == GoalStatus.COMPLETED


def test_goal_overdue():
    progress = goal_progress(Decimal("1000"), date(2024, 3, 9), Decimal("900"), TODAY)

    assert progress.status == GoalStatus.OVERDUE


def test_goal_almost():
    progress = goal_progress(Decimal("1000"), date(2024, 12, 31), Decimal("750"), TODAY)

    assert progress.percentage == Decimal("75.00")
    assert progress.status == GoalStatus.ALMOST


def test_goal_in_progress():
    progress = goal_progress(Decimal("1000"), TODAY, Decimal("100"), TODAY)

    assert progress.current_amount == Decimal("100")
    assert progress.status == GoalStatus.IN_PROGRESS
