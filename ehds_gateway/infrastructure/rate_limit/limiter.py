"""Rate limiting for the data gateway.

Distributed rate limiting backed by the api_rate_limits table, shared by every
worker and host serving the API. Fails open when the store is unavailable.
"""

import asyncio
import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional

from ehds_gateway.config import config
from ehds_gateway.core.logging import logger
from ehds_gateway.infrastructure.database.repositories import RateLimitRepository


_skip_logged = False


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of one rate-limit check."""

    allowed: bool
    limit: int
    remaining: int
    reset_at: datetime

    def retry_after(self, now: Optional[datetime] = None) -> int:
        """Whole seconds until the window resets, never less than 1."""
        seconds = (self.reset_at - (now or utcnow())).total_seconds()
        return max(1, math.ceil(seconds))

    def headers(self) -> Dict[str, str]:
        """X-RateLimit-* telemetry headers."""
        return {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(math.ceil(self.reset_at.timestamp())),
        }


class RateLimiter:
    """Fixed-window rate limiter using Supabase for distributed tracking."""

    def __init__(
        self,
        repository: Optional[RateLimitRepository] = None,
        max_requests: Optional[int] = None,
        window_seconds: Optional[int] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        """Initialize rate limiter.

        Args:
            repository: RateLimitRepository instance (optional)
            max_requests: Requests per window (default from config)
            window_seconds: Window length (default from config)
            clock: Source of the current time
        """
        self._repo = repository or RateLimitRepository()
        self.max_requests = max_requests or config.rate_limit_max_requests()
        self.window_seconds = window_seconds or config.rate_limit_window_seconds()
        self._clock = clock

    @property
    def window(self) -> timedelta:
        return timedelta(seconds=self.window_seconds)

    def _fail_open(self, now: datetime) -> RateLimitResult:
        return RateLimitResult(
            allowed=True,
            limit=self.max_requests,
            remaining=self.max_requests,
            reset_at=now + self.window,
        )

    async def check(self, identifier: str) -> RateLimitResult:
        """Count one request for identifier and decide whether it may proceed.

        Args:
            identifier: Scoped client key (action and client IP)

        Returns:
            RateLimitResult; allowed with full budget if the store is unavailable
        """
        now = self._clock()

        if not self._repo.is_configured():
            global _skip_logged
            if not _skip_logged:
                logger.warning(
                    "rate_limit_check_skipped",
                    reason="SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY not set",
                )
                _skip_logged = True
            return self._fail_open(now)

        try:
            record = await asyncio.to_thread(
                self._repo.consume, identifier, self.max_requests, self.window_seconds
            )
        except Exception as e:
            logger.error("rate_limit_check_failed", identifier=identifier, error=str(e))
            return self._fail_open(now)  # Fail open (allow request if rate limit check fails)

        reset_at = record.window_start + self.window

        if not record.allowed:
            logger.warning(
                "rate_limit_exceeded",
                identifier=identifier,
                count=record.request_count,
                limit=self.max_requests,
            )
            return RateLimitResult(
                allowed=False, limit=self.max_requests, remaining=0, reset_at=reset_at
            )

        remaining = max(0, self.max_requests - record.request_count)
        logger.debug(
            "rate_limit_check_passed",
            identifier=identifier,
            count=record.request_count,
            limit=self.max_requests,
        )
        return RateLimitResult(
            allowed=True, limit=self.max_requests, remaining=remaining, reset_at=reset_at
        )
