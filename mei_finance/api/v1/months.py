"""Month lifecycle endpoints: archive, prepare next month, live overview"""

import time
import logging
from fastapi import APIRouter, Depends, Path, Request
from sqlalchemy.orm import Session

from mei_finance.api.dependencies import get_request_id, require_feature
from mei_finance.api.v1.schemas import (
    ArchiveResponse,
    MonthlySummaryRead,
    MonthOverviewResponse,
    RolloverResponse,
)
from mei_finance.domain.exceptions import StoreUnavailableError
from mei_finance.infrastructure.database.repositories import commit
from mei_finance.infrastructure.database.session import get_db
from mei_finance.infrastructure.database.workflows import (
    archive_current_month,
    month_overview,
    prepare_next_month,
)

router = APIRouter(dependencies=[Depends(require_feature("transactions"))])


@router.post(
    "/months/{year}/{month}/archive",
    response_model=ArchiveResponse,
    dependencies=[Depends(require_feature("history"))],
)
def archive_month(
    request: Request,
    year: int = Path(..., ge=1900),
    month: int = Path(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    """
    Archive the month's totals into its summary.

    Flow:
    1. Sum income and expenses dated within the month
    2. Sum the month's extra income and read its DAS value (default 67.00)
    3. Compute net balance and income tax estimate
    4. Insert or overwrite the (month, year) summary
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        db_summary, created = archive_current_month(db, month, year)
        commit(db, "archive_month")
    except StoreUnavailableError:
        logging.error(
            "Archiving failed",
            extra={"request_id": request_id, "period": f"{year}-{month:02d}"},
        )
        raise

    logging.info(
        "Archive request completed",
        extra={"request_id": request_id, "duration_ms": (time.time() - start_time) * 1000},
    )
    return ArchiveResponse(created=created, summary=MonthlySummaryRead.model_validate(db_summary))


@router.post("/months/{year}/{month}/prepare-next", response_model=RolloverResponse)
def prepare_month(
    request: Request,
    year: int = Path(..., ge=1900),
    month: int = Path(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    """Copy the month's recurring transactions and DAS value into the following month"""
    request_id = get_request_id(request)

    try:
        result = prepare_next_month(db, month, year)
        commit(db, "prepare_next_month")
    except StoreUnavailableError:
        logging.error(
            "Preparing next month failed",
            extra={"request_id": request_id, "period": f"{year}-{month:02d}"},
        )
        raise

    return result


@router.get("/months/{year}/{month}/overview", response_model=MonthOverviewResponse)
def get_month_overview(
    year: int = Path(..., ge=1900),
    month: int = Path(..., ge=1, le=12),
    db: Session = Depends(get_db),
):
    """Live totals and alerts for the month"""
    return month_overview(db, month, year)
