"""Query parameter validation for the data gateway.

Resource and format are validated strictly against whitelists. The id is
permissive: anything that is not an integer in range is dropped and the
request is served as an unfiltered listing.
"""

import re
from typing import Literal, Optional

from pydantic import BaseModel

from ehds_gateway.core.errors import InvalidFormatError, InvalidResourceError
from ehds_gateway.core.metadata import OUTPUT_FORMATS
from ehds_gateway.core.resources import ALLOWED_RESOURCES, resource_columns

MIN_ID = 1
MAX_ID = 10000

_ID_PATTERN = re.compile(r"[0-9]+")


class DataRequest(BaseModel):
    """Validated gateway request."""

    resource: str
    format: Literal["json", "csv"] = "json"
    id: Optional[int] = None

    model_config = {"frozen": True}


def parse_id(raw: Optional[str]) -> Optional[int]:
    """Parse an id parameter, returning None when absent, malformed or out of range."""
    if raw is None:
        return None
    candidate = raw.strip()
    if not _ID_PATTERN.fullmatch(candidate):
        return None
    value = int(candidate)
    if value < MIN_ID or value > MAX_ID:
        return None
    return value


def validate_request(
    resource: Optional[str], output_format: Optional[str] = None, raw_id: Optional[str] = None
) -> DataRequest:
    """Validate raw query parameters.

    Args:
        resource: Value of the ``resource`` parameter
        output_format: Value of the ``format`` parameter (missing or empty means json)
        raw_id: Value of the ``id`` parameter

    Returns:
        Validated DataRequest

    Raises:
        InvalidResourceError: resource missing or not whitelisted
        InvalidFormatError: format other than json or csv
    """
    if resource not in ALLOWED_RESOURCES:
        raise InvalidResourceError(resource, ALLOWED_RESOURCES, resource_columns())

    fmt = output_format or "json"
    if fmt not in OUTPUT_FORMATS:
        raise InvalidFormatError(fmt, OUTPUT_FORMATS)

    return DataRequest(resource=resource, format=fmt, id=parse_id(raw_id))
