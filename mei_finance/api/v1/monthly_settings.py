"""Per-month DAS settings endpoints"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from mei_finance.api.dependencies import require_feature
from mei_finance.api.v1.schemas import MonthlySettingsRead, MonthlySettingsUpdate
from mei_finance.infrastructure.database.repositories import SettingsRepository, commit
from mei_finance.infrastructure.database.session import get_db

router = APIRouter(dependencies=[Depends(require_feature("transactions"))])


@router.get("/settings/{year}/{month}", response_model=MonthlySettingsRead)
def get_monthly_settings(
    year: int = Path(..., ge=1900),
    month: int = Path(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    """Settings for the month, created with the default DAS value on first access"""
    db_settings = SettingsRepository(db).get_or_create(month, year)
    commit(db, "get_monthly_settings")
    return db_settings


@router.put("/settings/{year}/{month}", response_model=MonthlySettingsRead)
def update_monthly_settings(
    request_body: MonthlySettingsUpdate,
    year: int = Path(..., ge=1900),
    month: int = Path(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    db_settings = SettingsRepository(db).upsert(month, year, request_body.das_value)
    commit(db, "upsert_monthly_settings")
    return db_settings
