"""Request timing middleware"""

import logging
import time
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("bucketpull.requests")

REQUEST_ID_HEADER = "X-Request-ID"


class TimingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log method, path, status and duration"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex[:12]
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Process-Time"] = f"{elapsed_ms:.2f}"
        response.headers[REQUEST_ID_HEADER] = request_id

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(
            level,
            f"[{request_id}] {request.method} {request.url.path} "
            f"{response.status_code} {elapsed_ms:.1f}ms",
        )
        return response
