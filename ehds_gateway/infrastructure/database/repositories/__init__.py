"""Repository implementations for the data gateway."""

from ehds_gateway.infrastructure.database.repositories.base import BaseRepository
from ehds_gateway.infrastructure.database.repositories.content import ContentRepository
from ehds_gateway.infrastructure.database.repositories.rate_limits import RateLimitRepository

__all__ = [
    "BaseRepository",
    "ContentRepository",
    "RateLimitRepository",
]
