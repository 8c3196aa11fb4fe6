"""Health check payload for the data gateway."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from supabase import Client

from ehds_gateway import __version__
from ehds_gateway.infrastructure.database.repositories import RateLimitRepository
from ehds_gateway.infrastructure.health.checks import check_supabase_connection


async def get_health_status(
    client: Optional[Client] = None, service_name: str = "ehds-data-gateway"
) -> Dict[str, Any]:
    """Get service status with dependency health.

    Args:
        client: Supabase client to check (defaults to the shared singleton)
        service_name: Service name for response

    Returns:
        Dict with overall status, dependency health and whether the
        persisted rate limit is active
    """
    supabase_health = await check_supabase_connection(client)
    overall_status = "healthy" if supabase_health.get("status") == "healthy" else "degraded"
    rate_limiter = "enabled" if RateLimitRepository(client).is_configured() else "disabled"

    return {
        "status": overall_status,
        "service": service_name,
        "version": __version__,
        "dependencies": {"supabase": supabase_health},
        "rate_limiter": {"status": rate_limiter},
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
