"""Unit tests for next-month planning"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from mei_finance.domain.models import TransactionKind
from mei_finance.domain.rollover import plan_next_month


def txn(day, month=12, year=2024, is_recurring=True, kind=TransactionKind.EXPENSE):
    return SimpleNamespace(
        kind=kind,
        category="Internet",
        amount=Decimal("99.90"),
        date=date(year, month, day),
        description="Fibra",
        is_recurring=is_recurring,
    )


def test_plan_next_month_from_december():
    """Test December rolls into January of the next year"""
    plan = plan_next_month(12, 2024, [txn(10)], Decimal("70.60"))

    assert (plan.month, plan.year) == (1, 2025)
    assert plan.das_value == Decimal("70.60")
    assert plan.transactions == [
        {
            "kind": TransactionKind.EXPENSE,
            "category": "Internet",
            "amount": Decimal("99.90"),
            "date": date(2025, 1, 10),
            "description": "Fibra",
            "is_recurring": True,
        }
    ]


def test_plan_next_month_skips_non_recurring():
    plan = plan_next_month(12, 2024, [txn(5, is_recurring=False), txn(6)])

    assert [t["date"] for t in plan.transactions] == [date(2025, 1, 6)]
    assert plan.das_value is None


def test_plan_next_month_overflows_day():
    """Test Jan 31 overflows past February into March"""
    plan = plan_next_month(1, 2024, [txn(31, month=1)])

    assert plan.transactions[0]["date"] == date(2024, 3, 2)


def test_plan_next_month_empty():
    plan = plan_next_month(6, 2024, [])

    assert (plan.month, plan.year) == (7, 2024)
    assert plan.transactions == []
