"""
Request Context Middleware

Tags every request with a request_id used by the log formatters and
returns it, with the handling time, in response headers.
"""

import logging
import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ai_server.core.logging import get_logger, request_id_ctx

logger = get_logger(__name__)

# Polled by load balancers; keep them out of INFO logs
QUIET_PATHS = frozenset({"/health", "/health/simple"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Sets request_id, logs completion with timing, adds headers."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        token = request_id_ctx.set(request_id)
        request.state.request_id = request_id

        level = logging.DEBUG if request.url.path in QUIET_PATHS else logging.INFO
        start_time = time.perf_counter()

        try:
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.log(
                level,
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "extra_data": {
                        "status_code": response.status_code,
                        "duration_ms": round(duration_ms, 2),
                    }
                },
            )

            response.headers["X-Request-ID"] = request_id
            response.headers["X-Response-Time"] = f"{duration_ms:.2f}ms"
            return response

        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {request.method} {request.url.path}: {e}",
                extra={"extra_data": {"duration_ms": round(duration_ms, 2)}},
                exc_info=True,
            )
            raise

        finally:
            request_id_ctx.reset(token)
