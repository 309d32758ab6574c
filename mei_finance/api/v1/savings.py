"""Monthly savings and savings goals endpoints"""

import uuid
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, status
from sqlalchemy.orm import Session

from mei_finance.api.dependencies import get_today, require_feature
from mei_finance.api.v1.schemas import (
    MonthlySavingRead,
    MonthlySavingUpsert,
    SavingsGoalCreate,
    SavingsGoalRead,
    SavingsGoalUpdate,
    TotalSavingsResponse,
)
from mei_finance.domain.savings import goal_progress, total_savings
from mei_finance.infrastructure.database.repositories import SavingsGoalRepository, SavingsRepository, commit
from mei_finance.infrastructure.database.session import get_db

router = APIRouter(dependencies=[Depends(require_feature("savings"))])


def _goal_response(db_goal, accumulated, today: date) -> SavingsGoalRead:
    progress = goal_progress(db_goal.target_amount, db_goal.deadline, accumulated, today)
    return SavingsGoalRead(
        id=db_goal.id,
        title=db_goal.title,
        target_amount=db_goal.target_amount,
        deadline=db_goal.deadline,
        description=db_goal.description,
        current_amount=progress.current_amount,
        percentage=progress.percentage,
        status=progress.status,
    )


@router.get("/savings", response_model=List[MonthlySavingRead])
def list_savings(db: Session = Depends(get_db)):
    return SavingsRepository(db).list_all()


@router.get("/savings/total", response_model=TotalSavingsResponse)
def get_total_savings(db: Session = Depends(get_db)):
    """Accumulated savings across every month"""
    return total_savings(SavingsRepository(db).list_all())


@router.get("/savings/goals", response_model=List[SavingsGoalRead])
def list_goals(db: Session = Depends(get_db), today: date = Depends(get_today)):
    """Goals ordered by deadline, each measured against the accumulated savings"""
    accumulated = total_savings(SavingsRepository(db).list_all()).total_accumulated
    return [_goal_response(g, accumulated, today) for g in SavingsGoalRepository(db).list_all()]


@router.post("/savings/goals", response_model=SavingsGoalRead, status_code=status.HTTP_201_CREATED)
def create_goal(request_body: SavingsGoalCreate, db: Session = Depends(get_db), today: date = Depends(get_today)):
    db_goal = SavingsGoalRepository(db).create(**request_body.model_dump())
    commit(db, "add_savings_goal")
    accumulated = total_savings(SavingsRepository(db).list_all()).total_accumulated
    return _goal_response(db_goal, accumulated, today)


@router.patch("/savings/goals/{goal_id}", response_model=SavingsGoalRead)
def update_goal(
    goal_id: uuid.UUID,
    request_body: SavingsGoalUpdate,
    db: Session = Depends(get_db),
    today: date = Depends(get_today),
):
    db_goal = SavingsGoalRepository(db).update(goal_id, **request_body.model_dump(exclude_unset=True))
    commit(db, "update_savings_goal")
    accumulated = total_savings(SavingsRepository(db).list_all()).total_accumulated
    return _goal_response(db_goal, accumulated, today)


@router.delete("/savings/goals/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(goal_id: uuid.UUID, db: Session = Depends(get_db)):
    SavingsGoalRepository(db).delete(goal_id)
    commit(db, "delete_savings_goal")


@router.get("/savings/{year}/{month}", response_model=MonthlySavingRead)
def get_month_saving(
    year: int = Path(..., ge=1900),
    month: int = Path(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    db_saving = SavingsRepository(db).get_for_period(month, year)
    if db_saving is None:
        raise HTTPException(status_code=404, detail="No saving recorded for this month")
    return db_saving


@router.put("/savings/{year}/{month}", response_model=MonthlySavingRead)
def upsert_month_saving(
    request_body: MonthlySavingUpsert,
    year: int = Path(..., ge=1900),
    month: int = Path(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    """Set the month's saving contribution, replacing any previous value"""
    db_saving = SavingsRepository(db).upsert(month, year, request_body.amount, request_body.description)
    commit(db, "upsert_monthly_saving")
    return db_saving


@router.delete("/savings/{saving_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_month_saving(saving_id: uuid.UUID, db: Session = Depends(get_db)):
    SavingsRepository(db).delete(saving_id)
    commit(db, "delete_monthly_saving")
