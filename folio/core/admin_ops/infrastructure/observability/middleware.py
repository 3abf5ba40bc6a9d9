"""
Observability Middleware
=========================

Middleware for request tracing and structured logging.
"""

import time
import uuid
from collections.abc import Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from folio.shared.context import set_request_id

logger = structlog.stdlib.get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns a unique ID to each request and sets it in the logging context.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Honour a client-supplied request ID
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

        set_request_id(request_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            set_request_id(None)
            structlog.contextvars.clear_contextvars()


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with structured info (latency, status, path).
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()

        path = request.url.path
        method = request.method

        # Skip health checks to avoid log noise
        if path.endswith("/health"):
            return await call_next(request)

        try:
            response = await call_next(request)
        except Exception:
            latency = (time.perf_counter() - start_time) * 1000
            logger.error(
                "request_exception",
                method=method,
                path=path,
                status_code=500,
                latency_ms=round(latency, 2),
                exc_info=True,
            )
            raise

        latency = (time.perf_counter() - start_time) * 1000
        log_kw = dict(
            method=method,
            path=path,
            status_code=response.status_code,
            latency_ms=round(latency, 2),
            ip=request.client.host if request.client else None,
        )

        if response.status_code >= 500:
            logger.error("request_failed", **log_kw)
        elif response.status_code >= 400:
            logger.warning("request_bad_input", **log_kw)
        else:
            logger.info("request_processed", **log_kw)

        return response
