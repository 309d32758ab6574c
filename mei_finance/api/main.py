"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from mei_finance.api.middleware import RequestIDMiddleware, MetricsMiddleware
from mei_finance.api.v1 import cards, history, monthly_settings, months, savings, setup, transactions
from mei_finance.domain.exceptions import (
    ConfirmationRequiredError,
    InvalidInstallmentPlanError,
    MissingSchemaError,
    NotFoundError,
    StoreUnavailableError,
)
from mei_finance.infrastructure.database.schema import SETUP_INSTRUCTIONS, provision_schema
from mei_finance.infrastructure.database.session import engine
from mei_finance.infrastructure.observability.logging import setup_logging
from mei_finance.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Provision the schema at startup when configured to"""
    if settings.auto_provision_schema:
        app.state.schema_status = provision_schema(engine)
    yield


def register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions onto HTTP responses"""

    @app.exception_handler(MissingSchemaError)
    async def missing_schema_handler(request: Request, exc: MissingSchemaError):
        logging.warning(str(exc), extra={"feature": exc.feature, "missing_tables": exc.missing_tables})
        return JSONResponse(
            status_code=503,
            content={
                "detail": "Feature not provisioned",
                "feature": exc.feature,
                "missing_tables": exc.missing_tables,
                "setup": SETUP_INSTRUCTIONS,
            },
        )

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
        return JSONResponse(
            status_code=503,
            content={"detail": str(exc), "operation": exc.operation, "retryable": True},
        )

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(InvalidInstallmentPlanError)
    async def invalid_plan_handler(request: Request, exc: InvalidInstallmentPlanError):
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.exception_handler(ConfirmationRequiredError)
    async def confirmation_handler(request: Request, exc: ConfirmationRequiredError):
        return JSONResponse(status_code=400, content={"detail": str(exc)})


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="MEI Finance Tracker",
        description="Income, expenses, DAS, savings and credit-card installments for micro-entrepreneurs",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.schema_status = None

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(setup.router, prefix="/v1", tags=["setup"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(monthly_settings.router, prefix="/v1", tags=["settings"])
    app.include_router(months.router, prefix="/v1", tags=["months"])
    app.include_router(history.router, prefix="/v1", tags=["history"])
    app.include_router(savings.router, prefix="/v1", tags=["savings"])
    app.include_router(cards.router, prefix="/v1", tags=["cards"])

    return app


app = create_app()
