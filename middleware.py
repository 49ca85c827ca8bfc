"""
middleware.py - Request tracking middleware
"""
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import uuid
import time
from logger import get_logger
from metrics import track_request

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Add unique request ID to each request and record its metrics"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        request.state.request_id = request_id

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        # Route template, not the raw path
        route = request.scope.get("route")
        endpoint = getattr(route, "path", "unmatched")
        track_request(request.method, endpoint, response.status_code, process_time)

        logger.info(
            f"Request {request_id}: {request.method} {request.url.path} "
            f"- {response.status_code} - {process_time:.3f}s"
        )

        return response
