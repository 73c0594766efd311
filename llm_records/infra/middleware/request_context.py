"""
Per-request logging context.
"""

from __future__ import annotations

import time
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from llm_records.infra.config.logging_config import bind_context, clear_context, get_logger

REQUEST_ID_HEADER = "X-Request-ID"

log = get_logger("http")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tags every log event of a request with its request_id.

    The id comes from an incoming ``X-Request-ID`` header or is generated, and
    is returned in the same header so clients can quote it alongside an
    ``errorId``.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        bind_context(
            request_id=request_id, method=request.method, path=request.url.path
        )
        started = time.perf_counter()
        log.debug("request.start", client_ip=request.client.host if request.client else None)

        try:
            response = await call_next(request)
        except Exception:
            log.exception("request.failed")
            raise
        else:
            response.headers[REQUEST_ID_HEADER] = request_id
            log.info(
                "request.end",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
            )
            return response
        finally:
            clear_context()
