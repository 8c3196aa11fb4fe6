"""FastAPI rate limiting dependencies for the data gateway."""

from typing import Optional

from fastapi import Depends, Request

from ehds_gateway.config import config
from ehds_gateway.core.errors import RateLimitExceededError
from ehds_gateway.infrastructure.database.repositories import RateLimitRepository
from ehds_gateway.infrastructure.rate_limit.limiter import RateLimiter, RateLimitResult

DEFAULT_ACTION = "api-data"


def get_client_ip(request: Request) -> str:
    """Resolve the client IP.

    Proxy headers are only honoured when API_TRUSTED_PROXY_HEADERS is on;
    otherwise the socket peer address is used.
    """
    if config.trusted_proxy_headers():
        forwarded = _forwarded_ip(request)
        if forwarded:
            return forwarded

    if request.client and request.client.host:
        return request.client.host

    return "unknown"


def _forwarded_ip(request: Request) -> Optional[str]:
    """Client IP reported by a trusted proxy, if any."""
    cf_connecting_ip = request.headers.get("cf-connecting-ip")
    if cf_connecting_ip:
        return cf_connecting_ip.strip()

    x_real_ip = request.headers.get("x-real-ip")
    if x_real_ip:
        return x_real_ip.strip()

    x_forwarded_for = request.headers.get("x-forwarded-for")
    if x_forwarded_for:
        first = x_forwarded_for.split(",")[0].strip()
        if first:
            return first

    return None


def client_identifier(request: Request, action: str = DEFAULT_ACTION) -> str:
    """Rate-limit key scoping the client IP to an action."""
    return f"{action}:{get_client_ip(request)}"


def get_rate_limiter(request: Request) -> RateLimiter:
    """Dependency building a RateLimiter over the app's Supabase client.

    Uses ``app.state.supabase_client`` when set, else the shared singleton.
    """
    client = getattr(request.app.state, "supabase_client", None)
    return RateLimiter(RateLimitRepository(client))


async def enforce_rate_limit(
    request: Request, limiter: RateLimiter = Depends(get_rate_limiter)
) -> RateLimitResult:
    """FastAPI dependency counting the request against the client's budget.

    The result is stored on ``request.state.rate_limit`` so the header
    middleware can emit X-RateLimit-* on every exit path.

    Raises:
        RateLimitExceededError: 429 if the budget is used up
    """
    result = await limiter.check(client_identifier(request))
    request.state.rate_limit = result

    if not result.allowed:
        raise RateLimitExceededError(result)

    return result
