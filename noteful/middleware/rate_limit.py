"""
Noteful Backend — Rate Limiting Middleware
============================================

What:  Per-IP sliding-window request limit.
How:   Keeps a deque of request timestamps per client IP; timestamps older
       than the window are dropped on each request. When the remaining count
       reaches the limit the request is answered with 429 and Retry-After.

The state is in-process, so the limit applies per worker.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Deque, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from noteful.config import settings
from noteful.exceptions import RateLimitExceededError
from noteful.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    In-memory sliding window rate limiter.

    Limits come from settings (RATE_LIMIT_REQUESTS per RATE_LIMIT_WINDOW
    seconds) unless overridden in the constructor. Health and docs paths are
    never limited.
    """

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(
        self,
        app,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
        enabled: Optional[bool] = None,
    ):
        super().__init__(app)
        self.max_requests = max_requests or settings.rate_limit_requests
        self.window_seconds = window_seconds or settings.rate_limit_window
        self.enabled = settings.rate_limit_enabled if enabled is None else enabled
        self._requests: Dict[str, Deque[float]] = defaultdict(deque)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not self.enabled or request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        now = time.time()
        window = self._requests[client_ip]

        while window and window[0] <= now - self.window_seconds:
            window.popleft()

        if len(window) >= self.max_requests:
            retry_after = int(window[0] + self.window_seconds - now) + 1
            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(window),
                self.window_seconds,
            )
            exc = RateLimitExceededError(retry_after=retry_after)
            return JSONResponse(
                status_code=429,
                content={
                    "error": "rate_limit_exceeded",
                    "message": exc.message,
                    "details": exc.context,
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(retry_after)},
            )

        window.append(now)
        if len(self._requests) > 10_000:
            self._forget_idle(now)

        return await call_next(request)

    def _forget_idle(self, now: float) -> None:
        """Drop IPs with no request inside the current window."""
        cutoff = now - self.window_seconds
        idle = [ip for ip, stamps in self._requests.items() if not stamps or stamps[-1] <= cutoff]
        for ip in idle:
            del self._requests[ip]
        if idle:
            logger.debug("Cleaned up %d inactive IP entries", len(idle))
