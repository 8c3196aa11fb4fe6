"""Middleware for the data gateway."""

from ehds_gateway.api.middleware.headers import apply_gateway_headers, gateway_headers_middleware
from ehds_gateway.api.middleware.request_id import request_id_middleware

__all__ = ["apply_gateway_headers", "gateway_headers_middleware", "request_id_middleware"]
