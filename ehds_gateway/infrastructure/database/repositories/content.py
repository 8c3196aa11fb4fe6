"""Read-only repository over the regulation content tables.

Queries always select the descriptor's projection, never ``*``.
"""

from typing import Any, Dict, List, Optional

from supabase import Client

from ehds_gateway.core.resources import ResourceDescriptor
from ehds_gateway.infrastructure.database.repositories.base import BaseRepository


class ContentRepository(BaseRepository[Dict[str, Any]]):
    """Repository for one store-backed resource."""

    def __init__(self, descriptor: ResourceDescriptor, client: Optional[Client] = None):
        if descriptor.is_static:
            raise ValueError(f"Resource '{descriptor.name}' is not backed by a table")
        super().__init__(client)
        self.descriptor = descriptor

    def table_name(self) -> str:
        """Return table name."""
        return self.descriptor.table

    def get_by_key(self, value: int) -> Dict[str, Any]:
        """Fetch exactly one row by the descriptor's singleton key.

        Raises:
            postgrest.exceptions.APIError: no row or more than one row matched
        """
        result = (
            self.db.table(self.table_name())
            .select(self.descriptor.select_clause())
            .eq(self.descriptor.singleton_key, value)
            .single()
            .execute()
        )
        return self.descriptor.project(result.data)

    def list_all(self) -> List[Dict[str, Any]]:
        """Fetch all rows ordered ascending by the descriptor's sort key."""
        result = (
            self.db.table(self.table_name())
            .select(self.descriptor.select_clause())
            .order(self.descriptor.order_by, desc=False)
            .execute()
        )
        return [self.descriptor.project(row) for row in result.data or []]
