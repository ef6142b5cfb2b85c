"""
Request tracking middleware for logging correlation.
"""

import logging
import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .context import generate_transaction_id, set_account_id, set_transaction_id

TRANSACTION_HEADER = "x-transaction-id"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Sets (or honours) the transaction id and echoes it on the response."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        txn_id = request.headers.get(TRANSACTION_HEADER) or generate_transaction_id()
        set_transaction_id(txn_id)
        set_account_id(None)

        response = await call_next(request)
        response.headers[TRANSACTION_HEADER] = txn_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """Writes one structured record per request with status and duration."""

    def __init__(self, app, logger: logging.Logger | None = None):
        super().__init__(app)
        self.logger = logger or logging.getLogger("estatedesk_backend.requests")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"

        response = await call_next(request)

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            "Request completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "client_ip": client_ip,
            },
        )
        return response
