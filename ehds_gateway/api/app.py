"""FastAPI application factory for the data gateway."""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from supabase import Client

from ehds_gateway import __version__
from ehds_gateway.api.middleware import gateway_headers_middleware, request_id_middleware
from ehds_gateway.api.routes import data, system
from ehds_gateway.core.errors import GatewayError, MethodNotAllowedError


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    """Render a GatewayError as its JSON body and status."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors (404, 405) in the gateway's ``{"error": ...}`` shape."""
    if exc.status_code == 405:
        content = MethodNotAllowedError(request.method).to_dict()
    else:
        content = {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


def create_app(supabase_client: Optional[Client] = None) -> FastAPI:
    """Create and configure FastAPI app. Factory pattern for testability.

    Args:
        supabase_client: Client used by repositories (defaults to the shared singleton)
    """
    app = FastAPI(
        title="ehds-data-gateway",
        description=(
            "Read-only public API for Regulation (EU) 2025/327 (European Health Data Space): "
            "articles, recitals, definitions, chapters, implementing acts and metadata "
            "as JSON or CSV."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Store Supabase client for dependency access
    app.state.supabase_client = supabase_client

    # Add middleware (last added runs outermost)
    app.middleware("http")(gateway_headers_middleware)
    app.middleware("http")(request_id_middleware)

    # Register error handlers
    app.add_exception_handler(GatewayError, gateway_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Register routes
    app.include_router(system.router)
    app.include_router(data.router)

    return app
