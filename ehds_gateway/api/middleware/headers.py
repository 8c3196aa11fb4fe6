"""Cross-cutting response headers for the data gateway.

Wraps every request so CORS, caching, security and rate-limit headers are
attached on all exit paths, including errors raised deep in a handler.
"""

from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from ehds_gateway.config import config
from ehds_gateway.core.logging import logger
from ehds_gateway.infrastructure.rate_limit import RateLimitResult

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Expose-Headers": (
        "X-RateLimit-Limit, X-RateLimit-Remaining, X-RateLimit-Reset, Retry-After"
    ),
}

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}


def apply_gateway_headers(response: Response, rate_limit: Optional[RateLimitResult]) -> Response:
    """Attach CORS, cache, security and rate-limit headers to a response."""
    response.headers.update(CORS_HEADERS)
    response.headers["Cache-Control"] = f"public, max-age={config.cache_max_age()}"
    response.headers.update(SECURITY_HEADERS)

    if rate_limit is not None:
        response.headers.update(rate_limit.headers())
        if response.status_code == 429:
            response.headers["Retry-After"] = str(rate_limit.retry_after())

    return response


async def gateway_headers_middleware(request: Request, call_next):
    """Answer CORS preflight, catch unhandled errors, and decorate every response."""
    if request.method == "OPTIONS":
        response = Response(status_code=200)
    else:
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "unhandled_request_error",
                method=request.method,
                path=request.url.path,
                error=str(e),
            )
            response = JSONResponse(status_code=500, content={"error": "Internal server error"})

    return apply_gateway_headers(response, getattr(request.state, "rate_limit", None))
