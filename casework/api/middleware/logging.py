"""Request/response logging middleware."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from casework.utils.monitoring import observe_request

logger = logging.getLogger("casework.api")

REQUEST_ID_HEADER = "X-Request-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request once it completes and feed the Prometheus request metrics.

    A caller-supplied ``X-Request-ID`` is echoed back; otherwise one is generated
    so a log line can be matched to the response the client saw.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        # Route template, not the concrete URL, so record ids stay out of metric labels.
        route = request.scope.get("route")
        template = getattr(route, "path", request.url.path)
        observe_request(request.method, template, response.status_code, elapsed)

        response.headers[REQUEST_ID_HEADER] = request_id
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            "request.completed",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "route": template,
                "status": response.status_code,
                "duration_ms": round(elapsed * 1000, 2),
            },
        )
        return response
