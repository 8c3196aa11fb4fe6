"""System routes for the data gateway."""

from typing import Optional

from fastapi import APIRouter, Depends
from supabase import Client

from ehds_gateway.api.dependencies import get_supabase_client
from ehds_gateway.infrastructure.health import get_health_status

router = APIRouter(tags=["System"])


@router.get("/health")
async def health_check(client: Optional[Client] = Depends(get_supabase_client)):
    """Health check with Supabase testing. Returns service status, version and dependency health."""
    return await get_health_status(client)
