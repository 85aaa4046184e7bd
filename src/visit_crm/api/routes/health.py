"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...services.data_service import DataService
from ..dependencies import get_data_service

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database(service: DataService = Depends(get_data_service)) -> dict:
    """Report local store reachability and whether the Supabase mirror answers."""
    local: dict = {"path": str(service.local.path)}
    try:
        local["customers_count"] = len(service.local.list_customers())
        local["regions_count"] = len(service.local.list_regions())
        local["connected"] = True
    except Exception as exc:
        local["connected"] = False
        local["error"] = str(exc)

    if service.remote is None:
        return {
            "local": local,
            "remote": {
                "configured": False,
                "message": "Supabase not configured. Set CRM_SUPABASE_URL and CRM_SUPABASE_KEY environment variables.",
            },
        }

    try:
        service.remote.ping()
        remote = {"configured": True, "connected": True, "message": "Supabase reachable."}
    except Exception as exc:
        remote = {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
    return {"local": local, "remote": remote}
