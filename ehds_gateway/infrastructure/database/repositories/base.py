"""Base repository interface for the data gateway.

All concrete repositories inherit from BaseRepository.
"""

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from supabase import Client

from ehds_gateway.infrastructure.database.client import SupabaseClient

T = TypeVar("T")


class BaseRepository(ABC, Generic[T]):
    """Abstract base repository for database operations.

    A supabase ``Client`` may be injected; otherwise the process-wide
    SupabaseClient singleton is used.
    """

    def __init__(self, client: Optional[Client] = None):
        """Initialize repository with Supabase client."""
        self._injected = client
        self._client: SupabaseClient = SupabaseClient()

    @property
    def db(self) -> Client:
        """Get Supabase client instance."""
        if self._injected is not None:
            return self._injected
        return self._client.client

    def is_configured(self) -> bool:
        return self._injected is not None or self._client.is_configured()

    @abstractmethod
    def table_name(self) -> str:
        """Return the table name this repository manages."""
        pass
