"""Resource resolution: maps a validated request to projected content."""

import asyncio
from typing import Any, Dict, List, Optional, Union

from supabase import Client

from ehds_gateway.core.errors import UpstreamDataError
from ehds_gateway.core.logging import logger
from ehds_gateway.core.metadata import build_metadata
from ehds_gateway.core.resources import get_resource
from ehds_gateway.core.validation import DataRequest
from ehds_gateway.infrastructure.database.repositories import ContentRepository

ResolvedData = Union[Dict[str, Any], List[Dict[str, Any]]]


class ResourceResolver:
    """Fetches resource data through the registry's column projections."""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    async def resolve(self, request: DataRequest) -> ResolvedData:
        """Return a single projected object or an ordered list of them.

        Args:
            request: Validated request

        Returns:
            Static metadata dict, one row (id given and singleton lookup
            supported) or all rows in the resource's sort order

        Raises:
            UpstreamDataError: the content store failed or had no matching row
        """
        descriptor = get_resource(request.resource)

        if descriptor.is_static:
            return build_metadata()

        repo = ContentRepository(descriptor, self._client)
        try:
            if request.id is not None and descriptor.supports_singleton:
                return await asyncio.to_thread(repo.get_by_key, request.id)
            return await asyncio.to_thread(repo.list_all)
        except Exception as e:
            logger.error(
                "content_fetch_failed",
                resource=request.resource,
                table=descriptor.table,
                id=request.id,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise UpstreamDataError(request.resource, str(e)) from e
