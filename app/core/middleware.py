"""
Custom middleware for request logging
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request and its outcome under a short per-request id"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        request_id = uuid.uuid4().hex[:12]
        request.state.request_id = request_id

        client_host = request.client.host if request.client is not None else "unknown"
        logger.info(
            "[%s] Request: %s %s from %s",
            request_id,
            request.method,
            request.url.path,
            client_host,
        )

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        logger.info(
            "[%s] Response: %d in %.3fs", request_id, response.status_code, process_time
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
