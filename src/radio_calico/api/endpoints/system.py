"""Service information and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from radio_calico.api.dependencies import DatabaseDep

router = APIRouter(tags=["system"])


@router.get("/health")
def health_check(database: DatabaseDep) -> JSONResponse:
    """Report whether the service can reach its database."""
    if database.ping():
        return JSONResponse({"status": "ok", "database": "connected"})
    return JSONResponse(
        {"status": "error", "database": "disconnected"},
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


@router.get("/")
async def root(request: Request) -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    settings = request.app.state.settings
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }
