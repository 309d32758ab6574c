"""Credit cards, card purchases and installments endpoints"""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from mei_finance.api.dependencies import get_today, require_feature
from mei_finance.api.v1.schemas import (
    CardInstallmentRead,
    CardSummaryResponse,
    CardTransactionCreate,
    CardTransactionRead,
    CreditCardCreate,
    CreditCardRead,
    CreditCardUpdate,
    InstallmentPaidUpdate,
)
from mei_finance.infrastructure.database.repositories import (
    CardRepository,
    CardTransactionRepository,
    InstallmentRepository,
    commit,
)
from mei_finance.infrastructure.database.session import get_db
from mei_finance.infrastructure.database.workflows import add_card_transaction, get_cards_summary

router = APIRouter(dependencies=[Depends(require_feature("cards"))])


@router.get("/cards", response_model=List[CreditCardRead])
def list_cards(db: Session = Depends(get_db)):
    return CardRepository(db).list_all()


@router.post("/cards", response_model=CreditCardRead, status_code=status.HTTP_201_CREATED)
def create_card(request_body: CreditCardCreate, db: Session = Depends(get_db)):
    """Create a card together with any initial purchases"""
    db_card = CardRepository(db).create(**request_body.model_dump(exclude={"purchases"}))
    for purchase in request_body.purchases:
        add_card_transaction(db, card_id=db_card.id, **purchase.model_dump())
    commit(db, "add_credit_card")
    return db_card


@router.get("/cards/summary", response_model=List[CardSummaryResponse])
def cards_summary(db: Session = Depends(get_db), today: date = Depends(get_today)):
    """
    Balance snapshot for every card.

    Returns:
        Outstanding balance, available limit and next due installment per card
    """
    return get_cards_summary(db, today)


@router.patch("/cards/{card_id}", response_model=CreditCardRead)
def update_card(card_id: uuid.UUID, request_body: CreditCardUpdate, db: Session = Depends(get_db)):
    db_card = CardRepository(db).update(card_id, **request_body.model_dump(exclude_unset=True))
    commit(db, "update_credit_card")
    return db_card


@router.delete("/cards/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_card(card_id: uuid.UUID, db: Session = Depends(get_db)):
    """Delete a card with all of its purchases and installments"""
    CardRepository(db).delete(card_id)
    commit(db, "delete_credit_card")


@router.get("/cards/transactions", response_model=List[CardTransactionRead])
def list_card_transactions(
    card_id: Optional[uuid.UUID] = None,
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1900),
    db: Session = Depends(get_db),
):
    """Purchases, newest first; month and year filter on the first installment date"""
    return CardTransactionRepository(db).find(card_id=card_id, month=month, year=year)


@router.post("/cards/transactions", response_model=CardTransactionRead, status_code=status.HTTP_201_CREATED)
def create_card_transaction(request_body: CardTransactionCreate, db: Session = Depends(get_db)):
    """
    Record a card purchase.

    Purchases with more than one installment get their monthly schedule
    generated and stored with them.
    """
    db_transaction = add_card_transaction(db, **request_body.model_dump())
    commit(db, "add_card_transaction")
    db.refresh(db_transaction)
    return db_transaction


@router.delete("/cards/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_card_transaction(transaction_id: uuid.UUID, db: Session = Depends(get_db)):
    """Delete a purchase and its installments"""
    CardTransactionRepository(db).delete(transaction_id)
    commit(db, "delete_card_transaction")


@router.get("/cards/installments", response_model=List[CardInstallmentRead])
def list_installments(
    card_id: Optional[uuid.UUID] = None,
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None, ge=1900),
    paid: Optional[bool] = None,
    db: Session = Depends(get_db),
):
    """Installments ordered by due date; month and year filter on the due date"""
    return InstallmentRepository(db).find(card_id=card_id, month=month, year=year, paid=paid)


@router.patch("/cards/installments/{installment_id}", response_model=CardInstallmentRead)
def set_installment_paid(
    installment_id: uuid.UUID,
    request_body: InstallmentPaidUpdate,
    db: Session = Depends(get_db),
):
    db_installment = InstallmentRepository(db).set_paid(installment_id, request_body.paid)
    commit(db, "update_installment_paid")
    return db_installment
