"""Public data routes: read-only regulation content as JSON or CSV."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from ehds_gateway.api.dependencies import get_resource_resolver
from ehds_gateway.api.responses import CSVResponse, PrettyJSONResponse
from ehds_gateway.config import config
from ehds_gateway.core.logging import logger
from ehds_gateway.core.resolver import ResourceResolver
from ehds_gateway.core.serializer import build_envelope, is_tabular, to_csv
from ehds_gateway.core.validation import validate_request
from ehds_gateway.infrastructure.rate_limit import RateLimitResult, enforce_rate_limit

router = APIRouter(tags=["Data"])


@router.get("/api-data")
async def get_api_data(
    request: Request,
    resource: Optional[str] = Query(None, description="Resource name, e.g. articles"),
    output_format: Optional[str] = Query(None, alias="format", description="json (default) or csv"),
    raw_id: Optional[str] = Query(None, alias="id", description="Article or recital number, 1-10000"),
    rate_limit: RateLimitResult = Depends(enforce_rate_limit),
    resolver: ResourceResolver = Depends(get_resource_resolver),
):
    """Serve one regulation resource.

    - **resource**: articles, recitals, definitions, chapters, implementing-acts or metadata
    - **format**: json (schema.org Dataset envelope) or csv
    - **id**: optional number for articles and recitals; invalid values are ignored

    Rate limited per client IP; see the X-RateLimit-* response headers.
    """
    logger.info(
        "api_request",
        resource=resource,
        format=output_format,
        id=raw_id,
        remaining=rate_limit.remaining,
    )

    data_request = validate_request(resource, output_format, raw_id)
    data = await resolver.resolve(data_request)

    if data_request.format == "csv":
        if is_tabular(data):
            return CSVResponse(
                to_csv(data), prefix=config.csv_filename_prefix(), resource=data_request.resource
            )
        logger.debug(
            "csv_fallback_to_json",
            resource=data_request.resource,
            reason="data is not a non-empty list",
        )

    return PrettyJSONResponse(content=build_envelope(data_request.resource, data))
