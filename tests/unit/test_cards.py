"""Unit tests for credit card balance aggregation"""

import uuid
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from mei_finance.domain.cards import next_due, summarize_cards

TODAY = date(2024, 3, 10)


def make_card(limit="1000.00", name="Visa"):
    return SimpleNamespace(id=uuid.uuid4(), name=name, credit_limit=Decimal(limit))


def make_purchase(card, amount):
    return SimpleNamespace(id=uuid.uuid4(), card_id=card.id, amount=Decimal(amount))


def make_installment(purchase, amount, due, paid=False):
    return SimpleNamespace(card_transaction_id=purchase.id, amount=Decimal(amount), due_date=due, paid=paid)


def test_card_without_unpaid_installments():
    """Test empty balance leaves the whole limit available"""
    card = make_card("1500.00")
    purchase = make_purchase(card, "200.00")
    installments = [
        make_installment(purchase, "100.00", date(2024, 2, 15), paid=True),
        make_installment(purchase, "100.00", date(2024, 3, 15), paid=True),
    ]

    [summary] = summarize_cards([card], [purchase], installments, TODAY)

    assert summary.current_balance == Decimal("0")
    assert summary.available_limit == Decimal("1500.00")
    assert summary.next_due_date is None
    assert summary.next_due_amount == Decimal("0")
    assert summary.transactions_count == 1


def test_card_balance_and_next_due():
    """Test balance counts every unpaid installment, past-due ones included"""
    card = make_card("1000.00")
    tv = make_purchase(card, "600.00")
    phone = make_purchase(card, "300.00")
    installments = [
        make_installment(tv, "200.00", date(2024, 2, 15)),  # overdue, still owed
        make_installment(tv, "200.00", date(2024, 3, 15)),
        make_installment(tv, "200.00", date(2024, 4, 15)),
        make_installment(phone, "150.00", date(2024, 3, 15)),
        make_installment(phone, "150.00", date(2024, 4, 15), paid=True),
    ]

    [summary] = summarize_cards([card], [tv, phone], installments, TODAY)

    assert summary.current_balance == Decimal("750.00")
    assert summary.available_limit == Decimal("250.00")
    assert summary.next_due_date == date(2024, 3, 15)
    assert summary.next_due_amount == Decimal("350.00")
    assert summary.transactions_count == 2
    assert summary.total_purchases == Decimal("900.00")
    assert summary.usage_percentage == Decimal("90.00")
    assert summary.high_usage is True


def test_available_limit_can_go_negative():
    card = make_card("100.00")
    purchase = make_purchase(card, "300.00")
    installments = [make_installment(purchase, "150.00", date(2024, m, 1)) for m in (4, 5)]

    [summary] = summarize_cards([card], [purchase], installments, TODAY)

    assert summary.available_limit == Decimal("-200.00")


def test_installments_attributed_to_their_own_card():
    visa = make_card(name="Visa")
    master = make_card(name="Master")
    visa_purchase = make_purchase(visa, "100.00")
    master_purchase = make_purchase(master, "400.00")
    installments = [
        make_installment(visa_purchase, "50.00", date(2024, 4, 1)),
        make_installment(master_purchase, "200.00", date(2024, 3, 20)),
    ]

    summaries = summarize_cards([visa, master], [visa_purchase, master_purchase], installments, TODAY)

    by_name = {s.name: s for s in summaries}
    assert by_name["Visa"].current_balance == Decimal("50.00")
    assert by_name["Master"].current_balance == Decimal("200.00")
    assert by_name["Master"].next_due_date == date(2024, 3, 20)


def test_card_with_no_purchases():
    card = make_card()

    [summary] = summarize_cards([card], [], [], TODAY)

    assert summary.transactions_count == 0
    assert summary.usage_percentage == Decimal("0.00")
    assert summary.high_usage is False


def test_next_due_includes_today():
    purchase = SimpleNamespace(id=uuid.uuid4())
    installments = [make_installment(purchase, "80.00", TODAY), make_installment(purchase, "20.00", TODAY)]

    assert next_due(installments, TODAY) == (TODAY, Decimal("100.00"))
