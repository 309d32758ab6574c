"""Credit card balance aggregation.

Works on flat collections of cards, purchases and installments. Purchases
are indexed by id so each installment is attributed to its card through
``card_transaction_id`` → ``card_id`` lookups; no object graph is needed,
so ORM rows and plain dataclasses are both accepted.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from mei_finance.config import settings
from mei_finance.domain.models import CardSummary

ZERO = Decimal("0")


def next_due(unpaid_installments: Iterable, today: date) -> tuple[Optional[date], Decimal]:
    """Earliest unpaid due date on or after today, and the total due on it"""
    unpaid = list(unpaid_installments)
    upcoming = [inst.due_date for inst in unpaid if inst.due_date >= today]
    if not upcoming:
        return None, ZERO

    next_due_date = min(upcoming)
    amount = sum((Decimal(inst.amount) for inst in unpaid if inst.due_date == next_due_date), ZERO)
    return next_due_date, amount


def summarize_card(card, card_transactions: Iterable, installments: Iterable, today: date) -> CardSummary:
    """Build the snapshot for a single card from its own purchases and installments"""
    purchases = list(card_transactions)
    unpaid = [inst for inst in installments if not inst.paid]

    credit_limit = Decimal(card.credit_limit)
    current_balance = sum((Decimal(inst.amount) for inst in unpaid), ZERO)
    next_due_date, next_due_amount = next_due(unpaid, today)

    total_purchases = sum((Decimal(t.amount) for t in purchases), ZERO)
    usage_percentage = (total_purchases / credit_limit * 100).quantize(Decimal("0.01")) if credit_limit else ZERO

    return CardSummary(
        card_id=card.id,
        name=card.name,
        credit_limit=credit_limit,
        current_balance=current_balance,
        available_limit=credit_limit - current_balance,
        next_due_date=next_due_date,
        next_due_amount=next_due_amount,
        transactions_count=len(purchases),
        total_purchases=total_purchases,
        usage_percentage=usage_percentage,
        high_usage=usage_percentage > settings.high_usage_percentage,
    )


def summarize_cards(
    cards: Iterable,
    card_transactions: Iterable,
    installments: Iterable,
    today: date,
) -> List[CardSummary]:
    """Compute a CardSummary for every card, re-derived from current rows"""
    card_of_transaction: Dict = {}
    purchases_by_card: Dict = defaultdict(list)
    for txn in card_transactions:
        card_of_transaction[txn.id] = txn.card_id
        purchases_by_card[txn.card_id].append(txn)

    installments_by_card: Dict = defaultdict(list)
    for inst in installments:
        card_id = card_of_transaction.get(inst.card_transaction_id)
        if card_id is not None:
            installments_by_card[card_id].append(inst)

    return [
        summarize_card(card, purchases_by_card[card.id], installments_by_card[card.id], today)
        for card in cards
    ]
