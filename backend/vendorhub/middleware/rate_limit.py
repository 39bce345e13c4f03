"""
VendorHub Backend — Credential Endpoint Rate Limiting
=======================================================

What:  Per-IP sliding window limit on POST /vendor/login and /vendor/register.
Why:   Those are the only endpoints where repeated guessing pays off
       (password guessing, email enumeration by registration attempts).
       Reads and token-authenticated writes are not limited.

Algorithm: Sliding Window Log
    Each client IP keeps the timestamps of its recent attempts. On each
    attempt, timestamps older than the window are dropped; if `limit` remain,
    the attempt is rejected with 429 and a Retry-After equal to the time
    until the oldest one expires.

State is in-process memory: correct for a single uvicorn worker only.
"""

import logging
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, FrozenSet, Iterable, Optional, Tuple

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from vendorhub.exceptions import RateLimitExceededError
from vendorhub.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)

DEFAULT_LIMITED_ROUTES: FrozenSet[Tuple[str, str]] = frozenset(
    {
        ("POST", "/vendor/login"),
        ("POST", "/vendor/register"),
    }
)


class SlidingWindowLimiter:
    """Counts hits per key over the last `window` seconds."""

    def __init__(
        self,
        limit: int,
        window: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window = window
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = defaultdict(deque)

    def hit(self, key: str) -> Optional[int]:
        """
        Record one attempt for `key`.

        Returns:
            None when allowed, otherwise the seconds to wait before retrying.
        """
        now = self._clock()
        hits = self._hits[key]
        while hits and hits[0] <= now - self.window:
            hits.popleft()

        if len(hits) >= self.limit:
            return int(hits[0] + self.window - now) + 1

        hits.append(now)
        return None

    def prune(self) -> None:
        """Forget keys with no attempts inside the window."""
        cutoff = self._clock() - self.window
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self._hits[key]

    def __len__(self) -> int:
        return len(self._hits)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Starlette middleware wrapping a SlidingWindowLimiter.

    Rejections are answered here, not raised: exceptions escaping a
    BaseHTTPMiddleware bypass the app's exception handlers.
    """

    # Prune idle IPs every this many limited requests
    PRUNE_EVERY = 1000

    def __init__(
        self,
        app,
        limit: int,
        window: int,
        routes: Iterable[Tuple[str, str]] = DEFAULT_LIMITED_ROUTES,
    ):
        super().__init__(app)
        self.limiter = SlidingWindowLimiter(limit=limit, window=window)
        self.routes = frozenset(routes)
        self._seen = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if (request.method, request.url.path.rstrip("/")) not in self.routes:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        retry_after = self.limiter.hit(client_ip)

        self._seen += 1
        if self._seen % self.PRUNE_EVERY == 0:
            self.limiter.prune()

        if retry_after is not None:
            exc = RateLimitExceededError(retry_after=retry_after)
            logger.warning(
                "Rate limit exceeded for IP %s on %s %s",
                client_ip,
                request.method,
                request.url.path,
            )
            return JSONResponse(
                status_code=exc.status_code,
                content={
                    "error": exc.error_code,
                    "message": exc.message,
                    "details": exc.context,
                    "request_id": request_id_var.get(""),
                },
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)
