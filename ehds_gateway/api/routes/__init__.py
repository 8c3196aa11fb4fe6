"""Routes for the data gateway."""

from ehds_gateway.api.routes import data, system

__all__ = ["data", "system"]
