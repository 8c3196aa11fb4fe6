"""Health monitoring module for the data gateway."""

from ehds_gateway.infrastructure.health.checks import check_supabase_connection
from ehds_gateway.infrastructure.health.endpoints import get_health_status

__all__ = ["check_supabase_connection", "get_health_status"]
