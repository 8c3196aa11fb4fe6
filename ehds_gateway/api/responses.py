"""Response classes for the data gateway."""

from typing import Any

from fastapi.responses import JSONResponse, Response

from ehds_gateway.core.serializer import csv_filename, render_json


class PrettyJSONResponse(JSONResponse):
    """JSON response indented with two spaces."""

    def render(self, content: Any) -> bytes:
        return render_json(content)


class CSVResponse(Response):
    """CSV download served as an attachment."""

    media_type = "text/csv"

    def __init__(self, content: str, prefix: str, resource: str, **kwargs):
        super().__init__(content=content, **kwargs)
        self.headers["Content-Disposition"] = (
            f'attachment; filename="{csv_filename(prefix, resource)}"'
        )
