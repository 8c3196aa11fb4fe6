"""Rate-limit repository for the data gateway.

Wraps the consume_rate_limit database function, which checks and increments a
client's counter in a single statement (see supabase/migrations).
"""

from ehds_gateway.config import config
from ehds_gateway.infrastructure.database.models import RateLimitRecord
from ehds_gateway.infrastructure.database.repositories.base import BaseRepository

CONSUME_FUNCTION = "consume_rate_limit"


class RateLimitRepository(BaseRepository[RateLimitRecord]):
    """Repository for api_rate_limits table operations."""

    def table_name(self) -> str:
        """Return table name."""
        return "api_rate_limits"

    def is_configured(self) -> bool:
        """Calling consume_rate_limit is granted to the service role only."""
        return self._injected is not None or bool(
            config.supabase_url() and config.supabase_service_role_key()
        )

    def consume(self, identifier: str, max_requests: int, window_seconds: int) -> RateLimitRecord:
        """Atomically count one request against an identifier.

        The database increments the live window only while it is under
        ``max_requests`` and starts a fresh window once the old one expired,
        returning the resulting row and whether this request was admitted.

        Args:
            identifier: Scoped client key, e.g. ``api-data:203.0.113.7``
            max_requests: Requests allowed per window
            window_seconds: Window length

        Returns:
            Row state after this request

        Raises:
            postgrest.exceptions.APIError: the RPC failed
            ValueError: the RPC returned no row
        """
        result = self.db.rpc(
            CONSUME_FUNCTION,
            {
                "p_identifier": identifier,
                "p_max_requests": max_requests,
                "p_window_seconds": window_seconds,
            },
        ).execute()

        data = result.data
        if isinstance(data, list):
            data = data[0] if data else None
        if not data:
            raise ValueError(f"{CONSUME_FUNCTION} returned no row for {identifier}")

        return RateLimitRecord.from_row(data)
