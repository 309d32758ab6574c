"""Archived monthly history endpoints"""

import logging
import uuid
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status
from fastapi.responses import Response
from sqlalchemy.orm import Session

from mei_finance.api.dependencies import get_request_id, get_today, require_feature
from mei_finance.api.v1.schemas import DeleteAllResponse, MonthlySummaryRead
from mei_finance.domain.exceptions import ConfirmationRequiredError
from mei_finance.domain.export import export_filename, summaries_to_csv
from mei_finance.infrastructure.database.repositories import SummaryRepository, commit
from mei_finance.infrastructure.database.session import get_db

router = APIRouter(dependencies=[Depends(require_feature("history"))])


@router.get("/history", response_model=List[MonthlySummaryRead])
def get_history(db: Session = Depends(get_db)):
    """
    Retrieve every archived month.

    Returns:
        Summaries ordered from the most recent period
    """
    return SummaryRepository(db).list_all()


@router.get("/history/export")
def export_history(db: Session = Depends(get_db), today: date = Depends(get_today)):
    """Download the archived history as CSV"""
    content = summaries_to_csv(SummaryRepository(db).list_all())
    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(today)}"'},
    )


@router.get("/history/{year}/{month}", response_model=MonthlySummaryRead)
def get_month_history(
    year: int = Path(..., ge=1900),
    month: int = Path(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    db_summary = SummaryRepository(db).get_for_period(month, year)
    if db_summary is None:
        raise HTTPException(status_code=404, detail="No summary archived for this month")
    return db_summary


@router.delete("/history/{summary_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_summary(summary_id: uuid.UUID, db: Session = Depends(get_db)):
    SummaryRepository(db).delete(summary_id)
    commit(db, "delete_monthly_summary")


@router.delete("/history", response_model=DeleteAllResponse)
def delete_all_summaries(
    request: Request,
    confirm: bool = Query(False, description="Must be true to wipe the whole history"),
    db: Session = Depends(get_db),
):
    """Delete every archived summary; irreversible, so explicit confirmation is required"""
    if not confirm:
        raise ConfirmationRequiredError("Deleting the whole history requires confirm=true")

    deleted = SummaryRepository(db).delete_all()
    commit(db, "delete_all_monthly_summaries")
    logging.warning(
        "Monthly history wiped",
        extra={"request_id": get_request_id(request), "deleted": deleted},
    )
    return DeleteAllResponse(deleted=deleted)
