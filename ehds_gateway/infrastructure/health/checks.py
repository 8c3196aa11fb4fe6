"""Health check functions for the data gateway.

Tests connectivity to the Supabase content store.
"""

import asyncio
from typing import Any, Dict, Optional

from supabase import Client

from ehds_gateway.config import config
from ehds_gateway.infrastructure.database import SupabaseClient

PROBE_TABLE = "chapters"


async def check_supabase_connection(client: Optional[Client] = None) -> Dict[str, Any]:
    """Test Supabase connectivity with minimal query.

    Returns:
        Dict with status ("healthy", "unconfigured", "timeout", "unavailable")
        and optional error message
    """
    try:
        if client is None:
            if not config.is_configured():
                return {"status": "unconfigured", "error": "Supabase credentials not set"}
            client = SupabaseClient().client

        await asyncio.wait_for(
            asyncio.to_thread(
                lambda: client.table(PROBE_TABLE).select("chapter_number").limit(1).execute()
            ),
            timeout=2.0,
        )

        return {"status": "healthy", "database": "connected"}

    except asyncio.TimeoutError:
        return {"status": "timeout", "error": "Request timed out after 2s"}

    except Exception as e:
        return {"status": "unavailable", "error": str(e)[:100]}
