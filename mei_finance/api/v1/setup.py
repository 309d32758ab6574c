"""Schema provisioning endpoints"""

import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from mei_finance.api.dependencies import get_request_id, get_schema_status
from mei_finance.api.v1.schemas import SetupStatusResponse
from mei_finance.domain.exceptions import StoreUnavailableError
from mei_finance.infrastructure.database.schema import SchemaStatus, provision_schema
from mei_finance.infrastructure.database.session import get_db

router = APIRouter()


@router.get("/setup/status", response_model=SetupStatusResponse)
def get_setup_status(status: SchemaStatus = Depends(get_schema_status)):
    """Report which features have their tables provisioned"""
    return SetupStatusResponse(features=status.as_dict())


@router.post("/setup/provision", response_model=SetupStatusResponse)
def provision(request: Request, db: Session = Depends(get_db)):
    """Create missing tables and refresh the cached schema status"""
    request_id = get_request_id(request)
    try:
        status = provision_schema(db.get_bind())
    except SQLAlchemyError as e:
        logging.error(f"Schema provisioning failed: {e}", extra={"request_id": request_id})
        raise StoreUnavailableError("provision_schema") from e

    request.app.state.schema_status = status
    return SetupStatusResponse(features=status.as_dict())
