"""Infrastructure modules for the data gateway.

- Database: Supabase client singleton and repositories
- Rate Limiting: Distributed rate limiting
- Health: Dependency health checks
"""

# Database
from ehds_gateway.infrastructure.database import (
    BaseRepository,
    ContentRepository,
    RateLimitRecord,
    RateLimitRepository,
    SupabaseClient,
)

# Health
from ehds_gateway.infrastructure.health import check_supabase_connection, get_health_status

# Rate Limiting
from ehds_gateway.infrastructure.rate_limit import (
    RateLimiter,
    RateLimitResult,
    client_identifier,
    enforce_rate_limit,
    get_client_ip,
    get_rate_limiter,
)

__all__ = [
    # Database
    "SupabaseClient",
    "RateLimitRecord",
    "BaseRepository",
    "ContentRepository",
    "RateLimitRepository",
    # Rate Limiting
    "RateLimiter",
    "RateLimitResult",
    "client_identifier",
    "enforce_rate_limit",
    "get_client_ip",
    "get_rate_limiter",
    # Health
    "get_health_status",
    "check_supabase_connection",
]
