"""Request correlation and latency metrics for the finance API"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from mei_finance.infrastructure.observability.metrics import request_duration_histogram

logger = logging.getLogger(__name__)

# Liveness and scrape endpoints stay out of the latency histogram
UNMEASURED_PATHS = frozenset({"/health", "/metrics"})


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id echoed back in X-Request-ID.

    A caller-supplied X-Request-ID is kept so a client retrying an archive
    or rollover after a 503 can correlate both attempts in the logs.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        if response.status_code >= 500:
            logger.warning(
                f"{request.method} {request.url.path} answered {response.status_code}",
                extra={"request_id": request_id, "status": response.status_code},
            )
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Observe request latency per route template and status"""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in UNMEASURED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)

        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)
        request_duration_histogram.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
        ).observe(time.perf_counter() - start_time)

        return response
