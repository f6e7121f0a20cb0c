"""
Blog Backend: Request Context Middleware
==========================================

What:  Gives every request a correlation ID and writes one access-log line
       when it finishes.
How:   The ID comes from the client's X-Request-ID or is generated, lives in
       a ContextVar for the error handlers, and is echoed on the response.
       The error handlers in main.py record their error code on
       request.state, so the access line can tell a rejected body
       (invalid_request) from a failing Data Store (store_error).

Access line:
    GET /comments/7 400 12.3ms [a1b2c3d4] backend=rest code=store_error

Post and comment text is never logged.
"""

import logging
import time
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("blog_api.access")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

# Container probes hit this every few seconds
_QUIET_PATHS = frozenset({"/health"})


def record_error_code(request: Request, code: str) -> None:
    """Called by the exception handlers; read back when the line is logged."""
    request.state.error_code = code


def _backend_name(request: Request) -> str:
    store = getattr(request.app.state, "data_store", None)
    return store.backend_name if store is not None else "none"


class RequestContextMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        request.state.request_id = rid

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The 500 handler sits outside this middleware; log before it runs
            self._log(request, 500, started, "internal_error")
            raise

        response.headers["X-Request-ID"] = rid
        self._log(
            request,
            response.status_code,
            started,
            getattr(request.state, "error_code", None),
        )
        return response

    @staticmethod
    def _log(request: Request, status: int, started: float, code: Optional[str]) -> None:
        if request.url.path in _QUIET_PATHS:
            return

        elapsed_ms = (time.perf_counter() - started) * 1000
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        logger.log(
            level,
            "%s %s %d %.1fms [%s] backend=%s%s",
            request.method,
            request.url.path,
            status,
            elapsed_ms,
            request_id_var.get(""),
            _backend_name(request),
            f" code={code}" if code else "",
        )
