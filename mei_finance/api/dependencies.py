"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from mei_finance.domain.exceptions import MissingSchemaError
from mei_finance.infrastructure.database.schema import SchemaStatus, inspect_schema
from mei_finance.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Reference date for due-date and deadline comparisons"""
    return date.today()


def get_schema_status(request: Request, db: Session = Depends(get_db)) -> SchemaStatus:
    """Provisioned tables, inspected on first use and kept on the app until re-provisioned"""
    status = getattr(request.app.state, "schema_status", None)
    if status is None:
        status = inspect_schema(db.get_bind())
        request.app.state.schema_status = status
    return status


def require_feature(feature: str):
    """Gate an endpoint on its feature's tables being provisioned"""

    def dependency(status: SchemaStatus = Depends(get_schema_status)) -> None:
        missing = status.missing_tables(feature)
        if missing:
            raise MissingSchemaError(feature, missing)

    return dependency
