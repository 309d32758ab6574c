"""Installment schedule generation for credit-card purchases"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from mei_finance.domain.exceptions import InvalidInstallmentPlanError
from mei_finance.domain.models import Installment
from mei_finance.utils.date_utils import add_months

CENT = Decimal("0.01")


def generate_installment_schedule(
    total_amount: Decimal,
    installment_count: int,
    first_due_date: date,
    clamp_dates: bool = False,
) -> List[Installment]:
    """
    Split a card purchase into monthly installments.

    Requirements:
    - Every installment is total / count rounded to cents, with no
      correction on the last one, so the sum may drift by a few cents
    - Installment i is due on first_due_date advanced by i-1 months; a
      day-of-month the target month lacks overflows into the next month
      unless clamp_dates is set
    - Every installment starts unpaid

    Args:
        total_amount: Total purchase amount
        installment_count: Number of monthly payments (>= 1)
        first_due_date: Due date of installment 1
        clamp_dates: Clamp overflowing due dates to the month's last day

    Returns:
        List of Installment objects numbered 1..installment_count

    Example:
        100.00 in 3 from Jan 31 2024 → 33.33 due Jan 31, Mar 2 and Mar 31
    """
    total_amount = Decimal(total_amount)
    if total_amount <= 0:
        raise InvalidInstallmentPlanError(f"Purchase amount must be positive, got {total_amount}")
    if installment_count < 1:
        raise InvalidInstallmentPlanError(f"Installment count must be at least 1, got {installment_count}")

    amount = (total_amount / installment_count).quantize(CENT, rounding=ROUND_HALF_UP)

    return [
        Installment(
            installment_number=number,
            amount=amount,
            due_date=add_months(first_due_date, number - 1, clamp=clamp_dates),
        )
        for number in range(1, installment_count + 1)
    ]
