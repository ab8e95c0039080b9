"""Request logging middleware — logs every state-changing request with its outcome."""


import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("jointops.requests")

# Methods that mutate state
_WRITE_METHODS = {"POST", "PUT", "PATCH", "DELETE"}

class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs all write operations.

    Reads are not logged; the dashboard polls them constantly. Failed writes
    (4xx/5xx) log at WARNING so rejected payments and bad assignments stand out.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000)

        if request.method in _WRITE_METHODS:
            level = logging.INFO if response.status_code < 400 else logging.WARNING
            logger.log(
                level,
                "%s %s → %s (%dms) client=%s",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                request.client.host if request.client else "-",
            )

        return response
