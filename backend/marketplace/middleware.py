"""
Name: HTTP Middleware

Responsibilities:
  - Generate and propagate request_id (UUID)
  - Set request context for logging
  - Add X-Request-Id response header
  - Log every request with client address, status and latency

Collaborators:
  - context.py: request context binding
  - logger.py: Structured logging

Constraints:
  - Must be the outermost application middleware
  - Must clear context after response
"""

import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .context import bind_request_context, clear_context
from .logger import logger


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    R: Middleware that establishes request context and writes the access log.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = str(uuid.uuid4())

        bind_request_context(request_id, request.method, request.url.path)

        request.state.request_id = request_id
        remote_addr = request.client.host if request.client else ""

        start_time = time.perf_counter()

        try:
            response = await call_next(request)

            latency_seconds = time.perf_counter() - start_time
            response.headers["X-Request-Id"] = request_id

            logger.info(
                "request completed",
                extra={
                    "remote_addr": remote_addr,
                    "status_code": response.status_code,
                    "latency_ms": round(latency_seconds * 1000, 2),
                },
            )
            return response

        except Exception as exc:
            latency_seconds = time.perf_counter() - start_time
            logger.exception(
                "request failed",
                extra={
                    "remote_addr": remote_addr,
                    "latency_ms": round(latency_seconds * 1000, 2),
                    "error": str(exc),
                },
            )
            raise

        finally:
            clear_context()
