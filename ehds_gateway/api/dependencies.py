"""FastAPI dependencies for the data gateway.

Dependency injection functions for route handlers.
"""

from typing import Optional

from fastapi import Depends, Request
from supabase import Client

from ehds_gateway.core.resolver import ResourceResolver


def get_supabase_client(request: Request) -> Optional[Client]:
    """Get the Supabase client injected into app state.

    Note:
        Returns None when create_app() was called without a client; repositories
        then fall back to the process-wide SupabaseClient singleton.
    """
    return getattr(request.app.state, "supabase_client", None)


def get_resource_resolver(client: Optional[Client] = Depends(get_supabase_client)) -> ResourceResolver:
    """Dependency to get a ResourceResolver instance."""
    return ResourceResolver(client)
