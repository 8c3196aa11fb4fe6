"""Database models for the data gateway.

Type-safe dataclasses representing database records.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict


def parse_timestamp(value: Any) -> datetime:
    """Parse a timestamptz value returned by PostgREST into an aware datetime."""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass
class RateLimitRecord:
    """Represents a row of the api_rate_limits table.

    ``allowed`` is not a column: the consume_rate_limit function reports
    whether the call that produced this row state was admitted.
    """

    identifier: str
    request_count: int
    window_start: datetime
    allowed: bool = True

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "RateLimitRecord":
        return cls(
            identifier=row["identifier"],
            request_count=int(row["request_count"]),
            window_start=parse_timestamp(row["window_start"]),
            allowed=bool(row.get("allowed", True)),
        )
