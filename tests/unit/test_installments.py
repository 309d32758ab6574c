"""Unit tests for installment schedule generation"""

import pytest
from datetime import date
from decimal import Decimal
from mei_finance.domain.exceptions import InvalidInstallmentPlanError
from mei_finance.domain.installments import generate_installment_schedule
from mei_finance.utils.date_utils import add_months


def test_generate_installment_schedule_equal_split():
    """Test 300.00 in 3 installments from 2024-01-15"""
    installments = generate_installment_schedule(Decimal("300.00"), 3, date(2024, 1, 15))

    assert [(i.installment_number, i.amount, i.due_date) for i in installments] == [
        (1, Decimal("100.00"), date(2024, 1, 15)),
        (2, Decimal("100.00"), date(2024, 2, 15)),
        (3, Decimal("100.00"), date(2024, 3, 15)),
    ]
    assert all(inst.paid is False for inst in installments)


def test_generate_installment_schedule_rounding():
    """Test every installment gets the same rounded share, last one included"""
    installments = generate_installment_schedule(Decimal("100.00"), 3, date(2024, 1, 15))

    assert [i.amount for i in installments] == [Decimal("33.33"), Decimal("33.33"), Decimal("33.33")]
    assert sum(i.amount for i in installments) == Decimal("99.99")


@pytest.mark.parametrize("total,count", [("1234.56", 7), ("0.05", 4), ("999.99", 12), ("10.00", 1), ("1500.10", 24)])
def test_generate_installment_schedule_invariants(total, count):
    """Test count, contiguous numbering, near-exact sum and monthly due dates"""
    first = date(2024, 5, 10)
    installments = generate_installment_schedule(Decimal(total), count, first)

    assert len(installments) == count
    assert sorted(i.installment_number for i in installments) == list(range(1, count + 1))
    assert len({i.amount for i in installments}) == 1
    assert abs(sum(i.amount for i in installments) - Decimal(total)) <= Decimal("0.005") * count
    for inst in installments:
        assert inst.due_date == add_months(first, inst.installment_number - 1)


def test_generate_installment_schedule_end_of_month():
    """Test day 31 overflows past months that lack it"""
    installments = generate_installment_schedule(Decimal("100.00"), 3, date(2024, 1, 31))

    assert [(i.amount, i.due_date) for i in installments] == [
        (Decimal("33.33"), date(2024, 1, 31)),
        (Decimal("33.33"), date(2024, 3, 2)),
        (Decimal("33.33"), date(2024, 3, 31)),
    ]


def test_generate_installment_schedule_clamped_dates():
    installments = generate_installment_schedule(Decimal("400.00"), 4, date(2024, 1, 31), clamp_dates=True)

    assert [i.due_date for i in installments] == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
    ]


def test_generate_installment_schedule_crosses_year():
    installments = generate_installment_schedule(Decimal("600.00"), 3, date(2024, 11, 20))

    assert installments[-1].due_date == date(2025, 1, 20)


@pytest.mark.parametrize("total,count", [("0", 3), ("-10.00", 2), ("100.00", 0)])
def test_generate_installment_schedule_invalid(total, count):
    with pytest.raises(InvalidInstallmentPlanError):
        generate_installment_schedule(Decimal(total), count, date(2024, 1, 1))
