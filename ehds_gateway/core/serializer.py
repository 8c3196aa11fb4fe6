"""Response serialization: schema.org Dataset envelope and CSV export."""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ehds_gateway.core.metadata import DATASET_LICENSE, IS_PART_OF, PUBLISHER


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """UTC ISO-8601 timestamp with millisecond precision and a Z suffix."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def record_count(data: Any) -> int:
    return len(data) if isinstance(data, list) else 1


def build_envelope(resource: str, data: Any, now: Optional[datetime] = None) -> Dict[str, Any]:
    """Wrap data in the FAIR metadata envelope."""
    return {
        "@context": "https://schema.org",
        "@type": "Dataset",
        "name": f"EHDS Regulation - {resource}",
        "description": f"{resource} from Regulation (EU) 2025/327 - European Health Data Space",
        "license": DATASET_LICENSE,
        "identifier": f"ehds-explorer-{resource}",
        "dateModified": iso_timestamp(now),
        "publisher": dict(PUBLISHER),
        "isPartOf": dict(IS_PART_OF),
        "data": data,
        "recordCount": record_count(data),
    }


def render_json(payload: Any) -> bytes:
    return json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8")


def is_tabular(data: Any) -> bool:
    """CSV is only produced for non-empty lists of rows."""
    return isinstance(data, list) and len(data) > 0


def _scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def csv_field(value: Any) -> str:
    """Encode one CSV field.

    Strings and lists are always quoted; other scalars are written bare.
    """
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        joined = "; ".join("" if item is None else _scalar(item) for item in value)
        return '"' + joined.replace('"', '""') + '"'
    if isinstance(value, str):
        return '"' + value.replace('"', '""').replace("\n", " ") + '"'
    return _scalar(value)


def to_csv(rows: List[Dict[str, Any]]) -> str:
    """Render rows as CSV with a header taken from the first row's keys."""
    headers = list(rows[0].keys())
    lines = [",".join(headers)]
    for row in rows:
        lines.append(",".join(csv_field(row.get(header)) for header in headers))
    return "\n".join(lines)


def csv_filename(prefix: str, resource: str) -> str:
    return f"{prefix}-{resource}.csv"
