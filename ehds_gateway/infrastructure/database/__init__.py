"""Database module for the data gateway.

Provides the Supabase client singleton and repositories for content and rate-limit tables.
"""

from ehds_gateway.infrastructure.database.client import SupabaseClient
from ehds_gateway.infrastructure.database.models import RateLimitRecord
from ehds_gateway.infrastructure.database.repositories import (
    BaseRepository,
    ContentRepository,
    RateLimitRepository,
)

__all__ = [
    "SupabaseClient",
    "RateLimitRecord",
    "BaseRepository",
    "ContentRepository",
    "RateLimitRepository",
]
