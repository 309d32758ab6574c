"""Multi-step data operations: archiving, month rollover and card purchases"""

import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from mei_finance.domain.aggregation import build_alerts, build_monthly_totals
from mei_finance.domain.cards import summarize_cards
from mei_finance.domain.installments import generate_installment_schedule
from mei_finance.domain.models import CardSummary, MonthlyAlerts, MonthlyTotals
from mei_finance.domain.rollover import plan_next_month
from mei_finance.infrastructure.database.models import CardTransaction, MonthlySummary
from mei_finance.infrastructure.database.repositories import (
    CardRepository,
    CardTransactionRepository,
    ExtraIncomeRepository,
    InstallmentRepository,
    SettingsRepository,
    SummaryRepository,
    TransactionRepository,
)
from mei_finance.infrastructure.observability.logging import log_archive, log_card_transaction, log_rollover
from mei_finance.infrastructure.observability.metrics import record_archive, record_card_purchase, record_rollover


@dataclass
class RolloverResult:
    month: int
    year: int
    copied_transactions: int
    das_value: Optional[Decimal]


@dataclass
class MonthOverview:
    totals: MonthlyTotals
    alerts: MonthlyAlerts


def _month_totals(
    db: Session,
    month: int,
    year: int,
    income_tax_mode: Optional[str] = None,
    strict: bool = False,
) -> Tuple:
    transactions = TransactionRepository(db).list_for_period(month, year, strict=strict)
    extra_income = ExtraIncomeRepository(db).list_for_period(month, year, strict=strict)
    monthly_settings = SettingsRepository(db).get_for_period(month, year, strict=strict)
    das_value = monthly_settings.das_value if monthly_settings is not None else None

    totals = build_monthly_totals(month, year, transactions, extra_income, das_value, income_tax_mode)
    return totals, transactions, extra_income


def archive_current_month(
    db: Session,
    month: int,
    year: int,
    income_tax_mode: Optional[str] = None,
) -> Tuple[MonthlySummary, bool]:
    """
    Snapshot a month's activity into its MonthlySummary.

    Idempotent on (month, year): a second call overwrites the totals of the
    existing summary instead of inserting another one. A failed read raises
    StoreUnavailableError so a good summary is never overwritten with zeros.
    """
    totals, _, _ = _month_totals(db, month, year, income_tax_mode, strict=True)
    db_summary, created = SummaryRepository(db).upsert(totals)

    record_archive(created)
    log_archive(month, year, totals.net_balance, created)
    return db_summary, created


def month_overview(db: Session, month: int, year: int) -> MonthOverview:
    """Live totals and alerts for a month that has not necessarily been archived"""
    totals, transactions, extra_income = _month_totals(db, month, year)
    return MonthOverview(totals=totals, alerts=build_alerts(transactions, extra_income, totals.das_value))


def prepare_next_month(db: Session, month: int, year: int) -> RolloverResult:
    """
    Copy recurring transactions and the DAS setting into the following month.

    Flow:
    1. Load recurring transactions dated within (month, year)
    2. Re-date them into the next period and insert the copies
    3. Carry the period's DAS value forward when one is configured
    """
    recurring = TransactionRepository(db).list_for_period(month, year, recurring_only=True, strict=True)
    settings_repo = SettingsRepository(db)
    current_settings = settings_repo.get_for_period(month, year, strict=True)
    das_value = current_settings.das_value if current_settings is not None else None

    plan = plan_next_month(month, year, recurring, das_value)

    if plan.transactions:
        TransactionRepository(db).create_many(plan.transactions)
    if plan.das_value is not None:
        settings_repo.upsert(plan.month, plan.year, plan.das_value)

    copied = len(plan.transactions)
    record_rollover(copied)
    log_rollover(plan.month, plan.year, copied, plan.das_value is not None)
    return RolloverResult(month=plan.month, year=plan.year, copied_transactions=copied, das_value=plan.das_value)


def add_card_transaction(
    db: Session,
    card_id: uuid.UUID,
    description: str,
    amount: Decimal,
    installment_count: int,
    first_installment_date: date,
    category: str = "Geral",
) -> CardTransaction:
    """Record a card purchase; multi-installment purchases get their schedule persisted alongside"""
    CardRepository(db).get(card_id)

    schedule = generate_installment_schedule(amount, installment_count, first_installment_date)
    installments = schedule if installment_count > 1 else []

    db_transaction = CardTransactionRepository(db).create(
        installments=installments,
        card_id=card_id,
        description=description,
        amount=amount,
        installment_count=installment_count,
        first_installment_date=first_installment_date,
        category=category,
    )

    record_card_purchase(installment_count)
    log_card_transaction(str(card_id), amount, installment_count)
    return db_transaction


def get_cards_summary(db: Session, today: date) -> List[CardSummary]:
    """Balance snapshot for every card, re-derived from the current rows"""
    cards = CardRepository(db).list_all()
    if not cards:
        return []

    card_transactions = CardTransactionRepository(db).find()
    installments = InstallmentRepository(db).find()
    return summarize_cards(cards, card_transactions, installments, today)
