"""Error taxonomy for the data gateway.

Every user-visible failure is a GatewayError carrying its HTTP status and a
machine-readable body with an ``error`` field.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence


class GatewayError(Exception):
    """Base class for errors rendered directly to API clients."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        """Response body for this error."""
        return {"error": self.message}


class MethodNotAllowedError(GatewayError):
    """Request used a method other than GET or OPTIONS."""

    status_code = 405

    def __init__(self, method: str):
        super().__init__("Method not allowed")
        self.method = method


class InvalidResourceError(GatewayError):
    """Requested resource is not on the whitelist."""

    status_code = 400

    def __init__(
        self,
        resource: Optional[str],
        allowed_resources: Sequence[str],
        resource_columns: Optional[Mapping[str, Sequence[str]]] = None,
    ):
        super().__init__("Invalid resource")
        self.resource = resource
        self.allowed_resources: List[str] = list(allowed_resources)
        self.resource_columns = {name: list(cols) for name, cols in (resource_columns or {}).items()}

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["allowedResources"] = self.allowed_resources
        body["resourceColumns"] = self.resource_columns
        body["usage"] = "?resource=articles&format=json&id=1"
        return body


class InvalidFormatError(GatewayError):
    """Requested output format is neither json nor csv."""

    status_code = 400

    def __init__(self, output_format: str, allowed_formats: Sequence[str]):
        super().__init__("Invalid format")
        self.format = output_format
        self.allowed_formats: List[str] = list(allowed_formats)

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        body["allowedFormats"] = self.allowed_formats
        return body


class RateLimitExceededError(GatewayError):
    """Client used up its request budget for the current window."""

    status_code = 429

    def __init__(self, result):
        super().__init__("Rate limit exceeded. Please try again later.")
        self.result = result


class UpstreamDataError(GatewayError):
    """Content store failed; detail is logged server-side, never returned."""

    status_code = 500

    def __init__(self, resource: str, detail: str = ""):
        super().__init__("Unable to retrieve data")
        self.resource = resource
        self.detail = detail
