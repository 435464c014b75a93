"""
Rate limiting middleware support for API endpoints
"""
import time
from collections import deque
from fastapi import Request, HTTPException
from typing import Deque, Dict, List, Tuple
import logging

from app.config import settings

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    In-memory sliding window rate limiter

    Tracks request timestamps per client for each window. State lives in the
    process, so limits apply per worker.
    """

    def __init__(
        self,
        requests_per_minute: int = 60,
        requests_per_hour: int = 1000,
        trust_forwarded_for: bool = False
    ):
        # (window seconds, limit, label)
        self.windows: List[Tuple[int, int, str]] = [
            (60, requests_per_minute, "minute"),
            (3600, requests_per_hour, "hour"),
        ]
        self.trust_forwarded_for = trust_forwarded_for
        self.history: Dict[str, Deque[float]] = {}

    def _get_client_id(self, request: Request) -> str:
        """
        Client identifier: the peer address

        X-Forwarded-For is only read when the app sits behind a proxy that
        overwrites it, since clients can set it to anything.
        """
        if self.trust_forwarded_for:
            forwarded = request.headers.get("x-forwarded-for")
            if forwarded:
                return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"

    def _cleanup_old_entries(self, now: float) -> None:
        """Drop timestamps older than the longest window and remove empty clients"""
        cutoff = now - max(window for window, _, _ in self.windows)

        for client_id in list(self.history.keys()):
            timestamps = self.history[client_id]
            while timestamps and timestamps[0] <= cutoff:
                timestamps.popleft()

            # Remove empty entries
            if not timestamps:
                del self.history[client_id]

    def reset(self) -> None:
        self.history.clear()

    def hit(self, client_id: str, now: float = None) -> None:
        """
        Record one request for a client

        Raises:
            HTTPException: 429 if any window is already full
        """
        now = time.time() if now is None else now
        self._cleanup_old_entries(now)
        timestamps = self.history.get(client_id, ())

        for window, limit, label in self.windows:
            in_window = sum(1 for ts in timestamps if ts > now - window)
            if in_window >= limit:
                logger.warning(f"Rate limit exceeded ({label}): {client_id}")
                raise HTTPException(
                    status_code=429,
                    detail={
                        "error": "rate_limit_exceeded",
                        "message": f"Too many requests. Limit: {limit} requests per {label}",
                        "status_code": 429,
                        "retry_after": window
                    }
                )

        self.history.setdefault(client_id, deque()).append(now)

    async def check_rate_limit(self, request: Request) -> None:
        self.hit(self._get_client_id(request))


# Global instance
rate_limiter = RateLimiter(
    requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    requests_per_hour=settings.RATE_LIMIT_PER_HOUR,
    trust_forwarded_for=settings.TRUST_FORWARDED_FOR
)
