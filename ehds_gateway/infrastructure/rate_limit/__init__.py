"""Rate limiting module for the data gateway.

Provides distributed rate limiting using Supabase for tracking.
"""

from ehds_gateway.infrastructure.rate_limit.deps import (
    client_identifier,
    enforce_rate_limit,
    get_client_ip,
    get_rate_limiter,
)
from ehds_gateway.infrastructure.rate_limit.limiter import RateLimiter, RateLimitResult

__all__ = [
    "RateLimiter",
    "RateLimitResult",
    "client_identifier",
    "enforce_rate_limit",
    "get_client_ip",
    "get_rate_limiter",
]
