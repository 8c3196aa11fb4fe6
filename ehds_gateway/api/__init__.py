"""HTTP layer for the data gateway."""

from ehds_gateway.api.app import create_app

__all__ = ["create_app"]
