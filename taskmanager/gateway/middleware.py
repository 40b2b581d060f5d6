"""
Task Manager - Response Middleware

Request/response middleware for:
- Request ID injection for tracing
- Request logging with timing
- Exposing the auth headers to cross-origin browser clients
"""

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response


logger = logging.getLogger(__name__)

# Headers browser clients must be able to read cross-origin
EXPOSED_HEADERS = ["x-access-token", "x-refresh-token", "_id"]


class SecurityMiddleware(BaseHTTPMiddleware):
    """
    Middleware applied to every request.
    
    Responsibilities:
    1. Inject X-Request-ID header for tracing
    2. Always set Access-Control-Expose-Headers
    3. Log method, path, status and duration
    """
    
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        
        start_time = time.perf_counter()
        
        response = await call_next(request)
        
        duration_ms = (time.perf_counter() - start_time) * 1000
        
        response.headers["X-Request-ID"] = request_id
        response.headers["Access-Control-Expose-Headers"] = ", ".join(EXPOSED_HEADERS)
        response.headers["X-Content-Type-Options"] = "nosniff"
        
        logger.info(
            "%s %s -> %d (%.1f ms) [%s]",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            request_id,
        )
        
        return response
