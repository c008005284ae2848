"""
Request observability middleware.

CorrelationMiddleware must wrap RequestLoggingMiddleware so request log
lines carry the correlation ID.

Dependencies: starlette, chatbot_rag.observability
System role: Request/response observability injection
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from chatbot_rag.observability.correlation import correlation_scope
from chatbot_rag.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request with method, path, status and duration."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"

        try:
            response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:dispatch - {route} raised",
                e,
                duration_ms=_elapsed_ms(started),
            )
            raise

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        log_with_context(
            logger,
            level,
            f"{__name__}:dispatch - {route} -> {response.status_code}",
            status_code=response.status_code,
            duration_ms=_elapsed_ms(started),
            client=request.client.host if request.client else None,
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind X-Correlation-ID (inbound or generated) and echo it on the response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
