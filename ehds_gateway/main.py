"""Main entry point for the data gateway.

Usage:
    Development: uvicorn ehds_gateway.main:app --reload --port 8000
    Production: uvicorn ehds_gateway.main:app --host 0.0.0.0 --port 8000 --workers 4
"""

from ehds_gateway.api import create_app

app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ehds_gateway.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
