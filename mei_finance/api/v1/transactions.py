"""Income/expense transactions and extra income endpoints"""

import uuid
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from mei_finance.api.dependencies import require_feature
from mei_finance.api.v1.schemas import ExtraIncomeCreate, ExtraIncomeRead, TransactionCreate, TransactionRead
from mei_finance.infrastructure.database.repositories import ExtraIncomeRepository, TransactionRepository, commit
from mei_finance.infrastructure.database.session import get_db

router = APIRouter(dependencies=[Depends(require_feature("transactions"))])


@router.get("/transactions", response_model=List[TransactionRead])
def list_transactions(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900),
    db: Session = Depends(get_db),
):
    """Transactions dated within the month, oldest first"""
    return TransactionRepository(db).list_for_period(month, year)


@router.post("/transactions", response_model=TransactionRead, status_code=status.HTTP_201_CREATED)
def create_transaction(request_body: TransactionCreate, db: Session = Depends(get_db)):
    db_transaction = TransactionRepository(db).create(**request_body.model_dump())
    commit(db, "add_transaction")
    return db_transaction


@router.delete("/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_transaction(transaction_id: uuid.UUID, db: Session = Depends(get_db)):
    TransactionRepository(db).delete(transaction_id)
    commit(db, "delete_transaction")


@router.get("/extra-income", response_model=List[ExtraIncomeRead])
def list_extra_income(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1900),
    db: Session = Depends(get_db),
):
    return ExtraIncomeRepository(db).list_for_period(month, year)


@router.post("/extra-income", response_model=ExtraIncomeRead, status_code=status.HTTP_201_CREATED)
def create_extra_income(request_body: ExtraIncomeCreate, db: Session = Depends(get_db)):
    """Record extra income, booked to the month of its date unless a period is given"""
    fields = request_body.model_dump()
    fields["month"] = fields["month"] or request_body.date.month
    fields["year"] = fields["year"] or request_body.date.year

    db_extra = ExtraIncomeRepository(db).create(**fields)
    commit(db, "add_extra_income")
    return db_extra


@router.delete("/extra-income/{extra_income_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_extra_income(extra_income_id: uuid.UUID, db: Session = Depends(get_db)):
    ExtraIncomeRepository(db).delete(extra_income_id)
    commit(db, "delete_extra_income")
